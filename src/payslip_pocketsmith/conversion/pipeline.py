"""
Payslip → ordered transaction list.

Rules:
- Pay modules are converted in PAY_MODULE_ORDER, each with its fixed direction
- Results are concatenated in that order
- A non-empty list gets one net pay transfer appended, dated like the first
  transaction, for minus the take home pay
- An empty list stays empty

Pure transform; no I/O.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from ..schemas.payslip import Payslip
from ..schemas.transaction import Transaction
from .converter import Direction, TransactionConverter

logger = logging.getLogger(__name__)

# (Payslip attribute, direction) in import order
PAY_MODULE_ORDER: tuple[tuple[str, Direction], ...] = (
    ("gross_pay", Direction.ADDITION),
    ("tax_and_ni", Direction.DEDUCTION),
    ("pension", Direction.DEDUCTION),
    ("deduction", Direction.DEDUCTION),
    ("net_deduction", Direction.DEDUCTION),
    ("net_addition", Direction.ADDITION),
    ("taxable_benefits", Direction.DEDUCTION),
)


@dataclass(frozen=True)
class TransactionSummary:
    """Totals of a transaction list, for display."""

    line_count: int
    line_total: Decimal
    transfer_count: int
    transfer_total: Decimal

    @property
    def balance(self) -> Decimal:
        """Sum of all amounts; zero when net pay matches the payslip lines."""
        return self.line_total + self.transfer_total


def build_transactions(
    payslip: Payslip,
    converter: TransactionConverter,
    employee_payee: str,
    net_pay_category_id: int,
    needs_review: bool = False,
) -> list[Transaction]:
    """
    Build every transaction of a payslip.

    Args:
        payslip: Parsed payslip
        converter: Converter bound to the payslip date, employer and category map
        employee_payee: Payee of the net pay transfer
        net_pay_category_id: Category of the net pay transfer
        needs_review: Flag the net pay transfer for review

    Raises:
        MissingCategoryMapping: If any retained payslip line is unmapped
    """
    transactions: list[Transaction] = []
    for module_name, direction in PAY_MODULE_ORDER:
        module_transactions = converter.convert(getattr(payslip, module_name), direction)
        logger.debug(
            f"{module_name} ({direction.value}): {len(module_transactions)} transaction(s)"
        )
        transactions.extend(module_transactions)

    if not transactions:
        logger.info("Payslip has no positive lines, no net pay transfer added")
        return transactions

    transactions.append(
        Transaction(
            payee=employee_payee,
            amount=-payslip.take_home_pay,
            date=transactions[0].date,
            is_transfer=True,
            category_id=net_pay_category_id,
            needs_review=needs_review,
        )
    )
    return transactions


def summarize(transactions: list[Transaction]) -> TransactionSummary:
    """Count and total line transactions and transfers separately."""
    lines = [t for t in transactions if not t.is_transfer]
    transfers = [t for t in transactions if t.is_transfer]
    return TransactionSummary(
        line_count=len(lines),
        line_total=sum((t.amount for t in lines), Decimal("0")),
        transfer_count=len(transfers),
        transfer_total=sum((t.amount for t in transfers), Decimal("0")),
    )
