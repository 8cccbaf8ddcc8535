"""
Canonical schemas shared by the pipeline.

Payslip types describe the input document; transaction types describe what
is sent to PocketSmith.
"""

from .payslip import (
    ModuleLine,
    PayModule,
    Payslip,
    load_payslip,
    to_date_only,
)
from .transaction import (
    CategoryMap,
    LedgerCategory,
    Transaction,
    TransactionAccount,
    freeze_category_map,
)

__all__ = [
    # Payslip
    "ModuleLine",
    "PayModule",
    "Payslip",
    "load_payslip",
    "to_date_only",
    # Transaction
    "CategoryMap",
    "LedgerCategory",
    "Transaction",
    "TransactionAccount",
    "freeze_category_map",
]
