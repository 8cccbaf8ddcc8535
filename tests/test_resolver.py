"""Tests for resolving configured names against PocketSmith."""

import pytest

from payslip_pocketsmith.conversion.resolver import (
    resolve_category_map,
    resolve_net_pay_category,
    resolve_transaction_account,
)
from payslip_pocketsmith.errors import (
    AccountNotFound,
    CategoryNotFound,
    NetPayCategoryNotFound,
)
from payslip_pocketsmith.schemas import LedgerCategory, TransactionAccount


class TestResolveCategoryMap:
    """Tests for resolve_category_map()."""

    def test_maps_every_label(self, payslip_lines_mapping, flat_categories):
        """Each payslip line resolves to the id of its category title."""
        category_map = resolve_category_map(payslip_lines_mapping, flat_categories)

        assert dict(category_map) == {
            "Basic Salary": 101,
            "Overtime": 101,
            "Bonus": 102,
            "PAYE Tax": 201,
            "National Insurance": 202,
            "Pension": 203,
            "Cycle to Work": 301,
            "Expenses": 103,
        }

    def test_child_categories_are_matched(self, flat_categories):
        """Nested categories are found once the tree is flattened."""
        category_map = resolve_category_map({"Cycle to Work": "Bicycle"}, flat_categories)
        assert category_map["Cycle to Work"] == 301

    def test_missing_title_raises(self, flat_categories):
        """An unknown category title aborts resolution and names both sides."""
        with pytest.raises(CategoryNotFound) as exc_info:
            resolve_category_map(
                {"Basic Salary": "Salary", "Car Allowance": "Car"},
                flat_categories,
            )

        assert exc_info.value.label == "Car Allowance"
        assert exc_info.value.category_title == "Car"
        assert '"Car Allowance"' in str(exc_info.value)

    def test_exact_match_only(self, flat_categories):
        """Case and whitespace differences do not match."""
        with pytest.raises(CategoryNotFound):
            resolve_category_map({"Basic Salary": "salary"}, flat_categories)
        with pytest.raises(CategoryNotFound):
            resolve_category_map({"Basic Salary": "Salary "}, flat_categories)

    def test_first_duplicate_title_wins(self):
        """With duplicate titles the first category in list order is used."""
        categories = [
            LedgerCategory(id=1, title="Salary"),
            LedgerCategory(id=2, title="Salary", parent_id=1),
        ]
        assert resolve_category_map({"Basic Salary": "Salary"}, categories)["Basic Salary"] == 1

    def test_empty_table(self, flat_categories):
        assert dict(resolve_category_map({}, flat_categories)) == {}

    def test_result_is_read_only(self, payslip_lines_mapping, flat_categories):
        """The resolved map cannot be changed after construction."""
        category_map = resolve_category_map(payslip_lines_mapping, flat_categories)

        with pytest.raises(TypeError):
            category_map["Basic Salary"] = 999  # type: ignore[index]

    def test_source_table_not_aliased(self, flat_categories):
        """Changing the configured table later does not change the map."""
        table = {"Basic Salary": "Salary"}
        category_map = resolve_category_map(table, flat_categories)
        table["Overtime"] = "Salary"

        assert "Overtime" not in category_map


class TestResolveNetPayCategory:
    """Tests for resolve_net_pay_category()."""

    def test_found(self, flat_categories):
        assert resolve_net_pay_category("Net Pay", flat_categories) == 900

    def test_not_found(self, flat_categories):
        with pytest.raises(NetPayCategoryNotFound) as exc_info:
            resolve_net_pay_category("Take Home", flat_categories)

        assert exc_info.value.category_title == "Take Home"
        assert "Take Home" in str(exc_info.value)


class TestResolveTransactionAccount:
    """Tests for resolve_transaction_account()."""

    ACCOUNTS = [
        TransactionAccount(id=11, name="Savings"),
        TransactionAccount(id=12, name="Current Account", currency_code="gbp"),
    ]

    def test_found(self):
        account = resolve_transaction_account("Current Account", self.ACCOUNTS)
        assert account.id == 12

    def test_not_found(self):
        with pytest.raises(AccountNotFound) as exc_info:
            resolve_transaction_account("Joint Account", self.ACCOUNTS)

        assert exc_info.value.account_name == "Joint Account"
