"""
Payslip module → PocketSmith transactions.

Line totals are positive magnitudes. The direction of the module decides the
sign: additions become money in, deductions money out. Lines with a zero or
negative total are skipped.
"""

import logging
from datetime import date
from enum import Enum

from ..errors import MissingCategoryMapping
from ..schemas.payslip import PayModule, to_date_only
from ..schemas.transaction import CategoryMap, Transaction

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Which way the money of a pay module flows."""

    ADDITION = "addition"
    DEDUCTION = "deduction"


class TransactionConverter:
    """
    Converts pay modules of one payslip into transactions.

    Every transaction shares the same payee and date. The category map is
    only read.
    """

    def __init__(
        self,
        pay_date: str | date,
        payee: str,
        category_map: CategoryMap,
        needs_review: bool = False,
    ):
        """
        Args:
            pay_date: Payslip pay date (date, ISO date or ISO datetime)
            payee: Payee of every generated transaction
            category_map: Payslip line description -> category id
            needs_review: Flag generated transactions for review

        Raises:
            MalformedInput: If pay_date is not a valid date
        """
        self.date = to_date_only(pay_date)
        self.payee = payee
        self.category_map = category_map
        self.needs_review = needs_review

    def convert(self, module: PayModule, direction: Direction) -> list[Transaction]:
        """
        Convert the positive lines of a module, in module order.

        Raises:
            MissingCategoryMapping: For the first retained line without a
                category; no transaction of the module is returned
        """
        direction = Direction(direction)
        transactions = []
        for line in module.lines:
            if line.total <= 0:
                continue

            category_id = self.category_map.get(line.description)
            if category_id is None:
                raise MissingCategoryMapping(line.description)

            amount = line.total if direction is Direction.ADDITION else -line.total
            transactions.append(
                Transaction(
                    payee=self.payee,
                    amount=amount,
                    date=self.date,
                    is_transfer=False,
                    category_id=category_id,
                    needs_review=self.needs_review,
                )
            )

        return transactions

    def with_additions(self, module: PayModule) -> list[Transaction]:
        return self.convert(module, Direction.ADDITION)

    def with_deductions(self, module: PayModule) -> list[Transaction]:
        return self.convert(module, Direction.DEDUCTION)
