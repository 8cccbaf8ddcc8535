"""
Resolve configured names against what exists in PocketSmith.

All lookups are exact string matches. The first match in list order wins.
"""

import logging
from collections.abc import Iterable, Mapping

from ..errors import AccountNotFound, CategoryNotFound, NetPayCategoryNotFound
from ..schemas.transaction import (
    CategoryMap,
    LedgerCategory,
    TransactionAccount,
    freeze_category_map,
)

logger = logging.getLogger(__name__)


def _find_category_id(title: str, categories: Iterable[LedgerCategory]) -> int | None:
    for category in categories:
        if category.title == title:
            return category.id
    return None


def resolve_category_map(
    payslip_lines: Mapping[str, str],
    categories: list[LedgerCategory],
) -> CategoryMap:
    """
    Map payslip line descriptions to PocketSmith category ids.

    Args:
        payslip_lines: Payslip line description -> category title
        categories: Flat PocketSmith category list

    Raises:
        CategoryNotFound: On the first title with no matching category
    """
    resolved: dict[str, int] = {}
    for label, title in payslip_lines.items():
        category_id = _find_category_id(title, categories)
        if category_id is None:
            raise CategoryNotFound(label, title)
        resolved[label] = category_id

    logger.debug(f"Resolved category mapping: {resolved}")
    return freeze_category_map(resolved)


def resolve_net_pay_category(title: str, categories: list[LedgerCategory]) -> int:
    """Find the id of the net pay category."""
    category_id = _find_category_id(title, categories)
    if category_id is None:
        raise NetPayCategoryNotFound(title)
    return category_id


def resolve_transaction_account(
    name: str, accounts: list[TransactionAccount]
) -> TransactionAccount:
    """Find the transaction account the payslip is imported into."""
    for account in accounts:
        if account.name == name:
            return account
    raise AccountNotFound(name)
