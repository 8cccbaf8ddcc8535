"""
Dry-run rendering and sequential publishing of transactions.

Publishing sends one request per transaction in list order and stops at the
first failure. Transactions created before the failure stay in PocketSmith.
"""

import json
import logging
import sys
from typing import TextIO

from .conversion.pipeline import summarize
from .pocketsmith_client import PocketSmithClient, PocketSmithError
from .schemas.transaction import Transaction

logger = logging.getLogger(__name__)


def render_transactions(transactions: list[Transaction], stream: TextIO | None = None) -> None:
    """Write the transactions as indented JSON followed by a short summary."""
    out = stream or sys.stdout
    summary = summarize(transactions)

    out.write(json.dumps([t.to_dict() for t in transactions], indent=2))
    out.write("\n\n")
    out.write(
        f"{summary.line_count} payslip line(s) totalling {summary.line_total}, "
        f"{summary.transfer_count} net pay transfer(s) totalling {summary.transfer_total}, "
        f"balance {summary.balance}\n"
    )


def publish_transactions(
    client: PocketSmithClient,
    transactions: list[Transaction],
    transaction_account_id: int,
) -> list[int | None]:
    """
    Create each transaction in PocketSmith, one at a time.

    Returns:
        Created PocketSmith transaction IDs, in list order

    Raises:
        PocketSmithError: From the first failed request; nothing after it is sent
    """
    created: list[int | None] = []

    for index, transaction in enumerate(transactions, start=1):
        logger.info(
            f"Creating transaction {index}/{len(transactions)}: "
            f"{transaction.payee} {transaction.amount} on {transaction.date}"
        )
        try:
            created.append(client.create_transaction(transaction_account_id, transaction))
        except PocketSmithError:
            logger.error(
                f"Publishing stopped at transaction {index}/{len(transactions)}; "
                f"{len(created)} transaction(s) were already created and remain in PocketSmith"
            )
            raise

    logger.info(f"Published {len(created)} transaction(s)")
    return created
