"""
Conversion pipeline: category resolution, module conversion, ordering.
"""

from .converter import Direction, TransactionConverter
from .pipeline import PAY_MODULE_ORDER, TransactionSummary, build_transactions, summarize
from .resolver import (
    resolve_category_map,
    resolve_net_pay_category,
    resolve_transaction_account,
)

__all__ = [
    "Direction",
    "TransactionConverter",
    "PAY_MODULE_ORDER",
    "TransactionSummary",
    "build_transactions",
    "summarize",
    "resolve_category_map",
    "resolve_net_pay_category",
    "resolve_transaction_account",
]
