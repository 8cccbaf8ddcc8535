"""
PocketSmith-side types: transactions, categories, accounts, category map.

Transaction.to_dict() is the request body for
POST /transaction_accounts/{id}/transactions.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any

# Payslip line description -> PocketSmith category id
CategoryMap = Mapping[str, int]


def freeze_category_map(entries: Mapping[str, int]) -> CategoryMap:
    """Return a read-only copy of a description -> category id mapping."""
    return MappingProxyType(dict(entries))


@dataclass(frozen=True)
class Transaction:
    """
    Signed transaction for PocketSmith.

    Positive amounts are money in, negative amounts money out.
    """

    payee: str
    amount: Decimal
    date: str  # YYYY-MM-DD
    is_transfer: bool
    category_id: int
    needs_review: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to PocketSmith API JSON format."""
        return {
            "payee": self.payee,
            "amount": float(self.amount),
            "date": self.date,
            "is_transfer": self.is_transfer,
            "category_id": self.category_id,
            "needs_review": self.needs_review,
        }


@dataclass(frozen=True)
class LedgerCategory:
    """PocketSmith category, detached from its children."""

    id: int
    title: str
    parent_id: int | None = None


@dataclass(frozen=True)
class TransactionAccount:
    """PocketSmith transaction account."""

    id: int
    name: str
    currency_code: str | None = None
