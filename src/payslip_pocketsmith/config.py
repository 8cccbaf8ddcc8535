"""
Configuration management (SSOT).

This module defines ALL configuration for the payslip importer.
All config keys are defined here; no other module should invent config keys.

The Config object is built once at startup and passed explicitly to the
resolver, converter and pipeline. Nothing reads configuration globally.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import PayslipImportError

DEFAULT_POCKETSMITH_URL = "https://api.pocketsmith.com/v2"


class ConfigValidationError(PayslipImportError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid configuration: " + "; ".join(errors))


@dataclass
class PocketSmithConfig:
    """PocketSmith API configuration."""

    developer_key: str
    base_url: str = DEFAULT_POCKETSMITH_URL
    # Name of the transaction account that receives the payslip
    transaction_account: str = ""
    timeout_seconds: int = 30


@dataclass
class PayeeConfig:
    """Payee names written on the generated transactions."""

    # Payee of every payslip line transaction
    employer: str = ""
    # Payee of the net pay transfer
    employee: str = ""


@dataclass
class CategoryConfig:
    """Category mapping between payslip lines and PocketSmith.

    payslip_lines maps a payslip line description (exactly as printed on the
    payslip) to a PocketSmith category title (exactly as shown in PocketSmith).
    """

    net_pay: str = ""
    payslip_lines: dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Application configuration (SSOT)."""

    pocketsmith: PocketSmithConfig
    payees: PayeeConfig = field(default_factory=PayeeConfig)
    categories: CategoryConfig = field(default_factory=CategoryConfig)
    # Flag every created transaction for manual review in PocketSmith
    transactions_need_review: bool = False

    def validate(self) -> list[str]:
        """Validate configuration completeness.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.pocketsmith.base_url:
            errors.append("pocketsmith.base_url is required")
        if not self.pocketsmith.developer_key:
            errors.append("pocketsmith.developer_key is required")
        if not self.pocketsmith.transaction_account:
            errors.append("pocketsmith.transaction_account is required")

        if not self.payees.employer:
            errors.append("payees.employer is required")
        if not self.payees.employee:
            errors.append("payees.employee is required")

        if not self.categories.net_pay:
            errors.append("categories.net_pay is required")
        for label, title in self.categories.payslip_lines.items():
            if not isinstance(title, str) or not title:
                errors.append(f"categories.payslip_lines['{label}'] must be a category title")

        return errors

    def require_valid(self) -> None:
        """Raise ConfigValidationError if validate() reports any problem."""
        errors = self.validate()
        if errors:
            raise ConfigValidationError(errors)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name, "").lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return default


def load_config(config_path: Path) -> Config:
    """
    Load configuration from YAML file.

    Environment variables can override config values:
    - POCKETSMITH_URL
    - POCKETSMITH_DEVELOPER_KEY
    - POCKETSMITH_TRANSACTION_ACCOUNT
    - PAYSLIP_TRANSACTIONS_NEED_REVIEW (true/false)
    """
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}

    if not isinstance(data, dict):
        raise ValueError(
            f"Config root must be a mapping, got {type(data).__name__}"
        )

    # PocketSmith config
    ps_data = data.get("pocketsmith") or {}
    pocketsmith = PocketSmithConfig(
        base_url=os.environ.get(
            "POCKETSMITH_URL", ps_data.get("base_url", DEFAULT_POCKETSMITH_URL)
        ),
        developer_key=os.environ.get(
            "POCKETSMITH_DEVELOPER_KEY", ps_data.get("developer_key", "")
        ),
        transaction_account=os.environ.get(
            "POCKETSMITH_TRANSACTION_ACCOUNT", ps_data.get("transaction_account", "")
        ),
        timeout_seconds=int(ps_data.get("timeout_seconds", 30)),
    )

    # Payees
    payee_data = data.get("payees") or {}
    payees = PayeeConfig(
        employer=payee_data.get("employer", ""),
        employee=payee_data.get("employee", ""),
    )

    # Category mapping
    category_data = data.get("categories") or {}
    categories = CategoryConfig(
        net_pay=category_data.get("net_pay", ""),
        payslip_lines=dict(category_data.get("payslip_lines") or {}),
    )

    return Config(
        pocketsmith=pocketsmith,
        payees=payees,
        categories=categories,
        transactions_need_review=_env_bool(
            "PAYSLIP_TRANSACTIONS_NEED_REVIEW",
            bool(data.get("transactions_need_review", False)),
        ),
    )


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = """# Payslip → PocketSmith Import Configuration

pocketsmith:
  base_url: "https://api.pocketsmith.com/v2"
  developer_key: "YOUR_POCKETSMITH_DEVELOPER_KEY"
  transaction_account: "Current Account"   # Account that receives the payslip
  timeout_seconds: 30

payees:
  employer: "Acme Corp"   # Payee on every payslip line
  employee: "Me"          # Payee on the net pay transfer

categories:
  net_pay: "Net Pay"      # Category of the net pay transfer
  # Payslip line description -> PocketSmith category title (exact match)
  payslip_lines:
    "Basic Salary": "Salary"
    "PAYE Tax": "Income Tax"
    "National Insurance": "National Insurance"
    "Pension": "Pension Contributions"

# Flag every created transaction for manual review in PocketSmith
transactions_need_review: false
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(default_config)
