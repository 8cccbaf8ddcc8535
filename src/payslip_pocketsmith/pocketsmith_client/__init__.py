"""
PocketSmith API client.

Provides:
- Authorised user lookup (GET /me)
- Transaction accounts and flattened categories of a user
- Create transactions (POST /transaction_accounts/{id}/transactions)

Treats PocketSmith errors as loud failures with actionable messages.
"""

from .client import (
    PocketSmithAPIError,
    PocketSmithClient,
    PocketSmithConnectionError,
    PocketSmithError,
    PocketSmithUser,
    flatten_categories,
)

__all__ = [
    "PocketSmithClient",
    "PocketSmithError",
    "PocketSmithAPIError",
    "PocketSmithConnectionError",
    "PocketSmithUser",
    "flatten_categories",
]
