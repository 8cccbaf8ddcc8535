"""
Error kinds raised by the import pipeline.

Every failure is fatal for the run: nothing is retried or compensated.
Each error carries the offending name or description so a failed run can be
diagnosed from its message alone.
"""


class PayslipImportError(Exception):
    """Base exception for all import failures."""

    pass


class MalformedInput(PayslipImportError):
    """Payslip payload is absent or cannot be parsed."""

    pass


class AccountNotFound(PayslipImportError):
    """Target transaction account has no match in PocketSmith."""

    def __init__(self, account_name: str):
        self.account_name = account_name
        super().__init__(f'Transaction account "{account_name}" not found in PocketSmith')


class CategoryNotFound(PayslipImportError):
    """A declared category title has no match in the PocketSmith taxonomy."""

    def __init__(self, label: str, category_title: str):
        self.label = label
        self.category_title = category_title
        super().__init__(
            f'Can\'t map "{label}": category "{category_title}" not found in PocketSmith'
        )


class NetPayCategoryNotFound(PayslipImportError):
    """The net pay category title has no match in the PocketSmith taxonomy."""

    def __init__(self, category_title: str):
        self.category_title = category_title
        super().__init__(f'Net pay category "{category_title}" not found in PocketSmith')


class MissingCategoryMapping(PayslipImportError):
    """A payslip line description has no entry in the resolved category map."""

    def __init__(self, description: str):
        self.description = description
        super().__init__(f'Category mapping for payslip line "{description}" not found')


class RemoteRequestFailed(PayslipImportError):
    """A lookup or submission call to the ledger failed."""

    pass
