"""
CLI main entry point.
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from ..config import Config, create_default_config, load_config
from ..conversion import (
    TransactionConverter,
    build_transactions,
    resolve_category_map,
    resolve_net_pay_category,
    resolve_transaction_account,
)
from ..errors import MalformedInput, PayslipImportError
from ..pocketsmith_client import PocketSmithClient
from ..publisher import publish_transactions, render_transactions
from ..schemas.payslip import load_payslip

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="payslip-pocketsmith",
        description="Convert a Zedra payslip into PocketSmith transactions",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # import command
    import_parser = subparsers.add_parser(
        "import", help="Convert a payslip and show or publish its transactions"
    )
    import_parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Payslip JSON file (default: read from stdin)",
    )
    import_parser.add_argument(
        "--publish",
        action="store_true",
        help="Send the transactions to PocketSmith instead of printing them",
    )

    # categories command
    subparsers.add_parser(
        "categories", help="List PocketSmith categories available for mapping"
    )

    # init-config command
    subparsers.add_parser("init-config", help="Write a default config file")

    return parser


def build_client(config: Config) -> PocketSmithClient:
    return PocketSmithClient(
        developer_key=config.pocketsmith.developer_key,
        base_url=config.pocketsmith.base_url,
        timeout=config.pocketsmith.timeout_seconds,
    )


def read_input(path: Path | None) -> str:
    """Read the whole payslip payload from a file or stdin."""
    if path is None:
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise MalformedInput(f"Cannot read payslip from {path}: {e}") from e


def cmd_import(config: Config, payslip_text: str, publish: bool) -> int:
    """Convert a payslip and either print or publish the transactions.

    Args:
        config: Application configuration
        payslip_text: Raw payslip JSON
        publish: Send to PocketSmith instead of printing

    Returns:
        Exit code (0 for success)

    Raises:
        PayslipImportError: On any failure; nothing later in the run happens
    """
    config.require_valid()
    payslip = load_payslip(payslip_text)
    logger.info(f"Read payslip dated {payslip.pay_date}, take home pay {payslip.take_home_pay}")

    client = build_client(config)
    user = client.get_authorised_user()
    logger.debug(f"Authorised as PocketSmith user {user.id}")

    print(f"🔍 Looking for transaction account '{config.pocketsmith.transaction_account}'...")
    account = resolve_transaction_account(
        config.pocketsmith.transaction_account,
        client.list_transaction_accounts(user.id),
    )
    print(f"  ✓ Transaction account: [{account.id}] {account.name}")

    print("🗂  Mapping payslip categories to PocketSmith categories...")
    categories = client.list_categories(user.id)
    category_map = resolve_category_map(config.categories.payslip_lines, categories)
    net_pay_category_id = resolve_net_pay_category(config.categories.net_pay, categories)
    for label, category_id in category_map.items():
        print(f"  {label} → {category_id}")
    print(f"  Net pay ({config.categories.net_pay}) → {net_pay_category_id}")

    converter = TransactionConverter(
        pay_date=payslip.pay_date,
        payee=config.payees.employer,
        category_map=category_map,
        needs_review=config.transactions_need_review,
    )
    transactions = build_transactions(
        payslip,
        converter,
        employee_payee=config.payees.employee,
        net_pay_category_id=net_pay_category_id,
        needs_review=config.transactions_need_review,
    )

    if not publish:
        print("\nTransactions to be imported:\n")
        render_transactions(transactions, sys.stdout)
        print("\nTransactions ready for import. Use --publish to send them to PocketSmith.")
        return 0

    print(f"\n📤 Publishing {len(transactions)} transaction(s) to PocketSmith...")
    created = publish_transactions(client, transactions, account.id)
    print(f"✓ Published {len(created)} transaction(s)")
    return 0


def cmd_categories(config: Config) -> int:
    """Print the flattened PocketSmith category list."""
    if not config.pocketsmith.developer_key:
        print("❌ pocketsmith.developer_key is required")
        return 1

    client = build_client(config)
    if not client.test_connection():
        print("❌ Failed to connect to PocketSmith")
        return 1

    user = client.get_authorised_user()
    categories = client.list_categories(user.id)

    for category in categories:
        indent = "    " if category.parent_id else "  "
        print(f"{indent}[{category.id}] {category.title}")

    print(f"\n✓ Found {len(categories)} categor{'y' if len(categories) == 1 else 'ies'}")
    return 0


def cmd_init_config(config_path: Path) -> int:
    """Write the default config file unless one exists."""
    if config_path.exists():
        print(f"❌ {config_path} already exists")
        return 1

    create_default_config(config_path)
    print(f"✓ Wrote default config to {config_path}")
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli()
    parsed = parser.parse_args(args)

    setup_logging(parsed.verbose)

    if not parsed.command:
        parser.print_help()
        return 1

    if parsed.command == "init-config":
        return cmd_init_config(parsed.config)

    # Load config
    try:
        config = load_config(parsed.config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"❌ Failed to load config: {e}")
        return 1

    # Route to command
    try:
        if parsed.command == "import":
            return cmd_import(config, read_input(parsed.input), parsed.publish)
        elif parsed.command == "categories":
            return cmd_categories(config)
        else:
            parser.print_help()
            return 1
    except PayslipImportError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"❌ Error processing payslip: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
