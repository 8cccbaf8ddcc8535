"""Test fixtures and utilities."""

from pathlib import Path

import pytest

from payslip_pocketsmith.config import (
    CategoryConfig,
    Config,
    PayeeConfig,
    PocketSmithConfig,
)
from payslip_pocketsmith.schemas import LedgerCategory

POCKETSMITH_URL = "http://pocketsmith.test/v2"


@pytest.fixture
def sample_payslip_dict() -> dict:
    """Sample Zedra interactive payslip export."""
    return {
        "takeHomePay": 2391.66,
        "taxAmount": 412.40,
        "niAmount": 215.94,
        "payDate": "2024-01-31T00:00:00.000Z",
        "grossPayModule": {
            "amount": 3250.00,
            "moduleLines": [
                {"description": "Basic Salary", "total": 3125.00},
                {"description": "Overtime", "total": 125.00},
                {"description": "Bonus", "total": 0},
            ],
        },
        "taxAndNIModule": {
            "amount": 628.34,
            "moduleLines": [
                {"description": "PAYE Tax", "total": 412.40},
                {"description": "National Insurance", "total": 215.94},
            ],
        },
        "pensionModule": {
            "amount": 162.50,
            "moduleLines": [
                {"description": "Pension", "total": 162.50},
            ],
        },
        "deductionModule": {"amount": 0, "moduleLines": []},
        "netDeductionModule": {
            "amount": 75.00,
            "moduleLines": [
                {"description": "Cycle to Work", "total": 75.00},
            ],
        },
        "netAdditionModule": {
            "amount": 7.50,
            "moduleLines": [
                {"description": "Expenses", "total": 7.50},
            ],
        },
        "taxableBenefitsModule": {"amount": 0, "moduleLines": []},
    }


@pytest.fixture
def payslip_lines_mapping() -> dict[str, str]:
    """Payslip line description -> PocketSmith category title."""
    return {
        "Basic Salary": "Salary",
        "Overtime": "Salary",
        "Bonus": "Bonus",
        "PAYE Tax": "Income Tax",
        "National Insurance": "National Insurance",
        "Pension": "Pension Contributions",
        "Cycle to Work": "Bicycle",
        "Expenses": "Reimbursements",
    }


@pytest.fixture
def category_tree() -> list[dict]:
    """PocketSmith GET /users/{id}/categories response (nested)."""
    return [
        {
            "id": 100,
            "title": "Income",
            "parent_id": None,
            "children": [
                {"id": 101, "title": "Salary", "parent_id": 100, "children": []},
                {"id": 102, "title": "Bonus", "parent_id": 100, "children": []},
                {"id": 103, "title": "Reimbursements", "parent_id": 100, "children": []},
            ],
        },
        {
            "id": 200,
            "title": "Payroll Deductions",
            "parent_id": None,
            "children": [
                {"id": 201, "title": "Income Tax", "parent_id": 200, "children": []},
                {"id": 202, "title": "National Insurance", "parent_id": 200, "children": []},
                {"id": 203, "title": "Pension Contributions", "parent_id": 200, "children": []},
            ],
        },
        {
            "id": 300,
            "title": "Transport",
            "parent_id": None,
            "children": [
                {"id": 301, "title": "Bicycle", "parent_id": 300, "children": None},
            ],
        },
        {"id": 900, "title": "Net Pay", "parent_id": None, "children": []},
    ]


@pytest.fixture
def flat_categories() -> list[LedgerCategory]:
    """The category tree above, already flattened."""
    return [
        LedgerCategory(id=100, title="Income"),
        LedgerCategory(id=101, title="Salary", parent_id=100),
        LedgerCategory(id=102, title="Bonus", parent_id=100),
        LedgerCategory(id=103, title="Reimbursements", parent_id=100),
        LedgerCategory(id=200, title="Payroll Deductions"),
        LedgerCategory(id=201, title="Income Tax", parent_id=200),
        LedgerCategory(id=202, title="National Insurance", parent_id=200),
        LedgerCategory(id=203, title="Pension Contributions", parent_id=200),
        LedgerCategory(id=300, title="Transport"),
        LedgerCategory(id=301, title="Bicycle", parent_id=300),
        LedgerCategory(id=900, title="Net Pay"),
    ]


@pytest.fixture
def config(payslip_lines_mapping) -> Config:
    """Valid configuration pointing at the mocked PocketSmith API."""
    return Config(
        pocketsmith=PocketSmithConfig(
            developer_key="test-developer-key",
            base_url=POCKETSMITH_URL,
            transaction_account="Current Account",
        ),
        payees=PayeeConfig(employer="Acme Corp", employee="Me"),
        categories=CategoryConfig(net_pay="Net Pay", payslip_lines=payslip_lines_mapping),
        transactions_need_review=False,
    )


@pytest.fixture
def config_file(tmp_path, payslip_lines_mapping) -> Path:
    """Config YAML on disk matching the config fixture."""
    lines = "\n".join(
        f'    "{label}": "{title}"' for label, title in payslip_lines_mapping.items()
    )
    path = tmp_path / "config.yaml"
    path.write_text(
        f"""
pocketsmith:
  base_url: "{POCKETSMITH_URL}"
  developer_key: "test-developer-key"
  transaction_account: "Current Account"
payees:
  employer: "Acme Corp"
  employee: "Me"
categories:
  net_pay: "Net Pay"
  payslip_lines:
{lines}
transactions_need_review: false
"""
    )
    return path
