"""
PocketSmith API client implementation.
"""

import json
import logging
from dataclasses import dataclass

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..errors import RemoteRequestFailed
from ..schemas.transaction import LedgerCategory, Transaction, TransactionAccount

logger = logging.getLogger(__name__)


class PocketSmithError(RemoteRequestFailed):
    """Base exception for PocketSmith client errors."""

    pass


class PocketSmithAPIError(PocketSmithError):
    """API returned an error response."""

    def __init__(
        self,
        status_code: int,
        message: str,
        response_body: str | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.response_body = response_body
        super().__init__(f"PocketSmith API error {status_code}: {message}")


class PocketSmithConnectionError(PocketSmithError):
    """Failed to connect to PocketSmith."""

    pass


@dataclass
class PocketSmithUser:
    """The user owning the developer key."""

    id: int
    login: str | None = None
    name: str | None = None


def flatten_categories(categories: list[dict] | None) -> list[LedgerCategory]:
    """
    Flatten the PocketSmith category tree into a list.

    Order is depth-first with every parent before its children and siblings
    in API order. Uses an explicit stack, so nesting depth is unbounded.
    """
    flat: list[LedgerCategory] = []
    # Reversed so that popping yields siblings in their original order
    stack: list[tuple[dict, int | None]] = [(c, None) for c in reversed(categories or [])]

    while stack:
        node, parent_id = stack.pop()
        category_id = int(node["id"])
        flat.append(
            LedgerCategory(
                id=category_id,
                title=node.get("title", ""),
                parent_id=node.get("parent_id", parent_id),
            )
        )
        children = node.get("children") or []
        stack.extend((child, category_id) for child in reversed(children))

    return flat


class PocketSmithClient:
    """
    Client for the PocketSmith v2 API.

    Features:
    - Authorised user lookup
    - Transaction account and category listing
    - Transaction creation

    Only GET requests are retried; POSTs are sent once.
    """

    DEFAULT_BASE_URL = "https://api.pocketsmith.com/v2"
    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        developer_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
    ):
        """
        Initialize PocketSmith client.

        Args:
            developer_key: PocketSmith developer key
            base_url: API root (e.g., "https://api.pocketsmith.com/v2")
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts for GET requests
            backoff_factor: Backoff factor for retries
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update(
            {
                "X-Developer-Key": developer_key,
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def _request(
        self,
        method: str,
        endpoint: str,
        params: dict | None = None,
        json_data: dict | None = None,
    ) -> requests.Response:
        """Make an API request with error handling."""
        url = f"{self.base_url}{endpoint}"

        logger.debug(f"API Request: {method} {url}")
        if json_data:
            logger.debug(f"Request body: {json.dumps(json_data, indent=2)}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error to {url}: {e}")
            raise PocketSmithConnectionError(
                f"Failed to connect to PocketSmith at {self.base_url}: {e}"
            ) from e
        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout for {url}: {e}")
            raise PocketSmithConnectionError(f"Request to PocketSmith timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {url}: {e}")
            raise PocketSmithError(f"Request failed: {e}") from e

        logger.debug(f"Response status: {response.status_code}")

        if not response.ok:
            error_body = response.text
            try:
                message = response.json().get("error", response.reason)
            except (ValueError, AttributeError):
                message = response.reason or error_body

            logger.error(f"API Error {response.status_code} for {method} {url}: {message}")
            logger.debug(f"Full response body: {error_body}")

            raise PocketSmithAPIError(
                status_code=response.status_code,
                message=message,
                response_body=error_body,
            )

        return response

    def _json(self, response: requests.Response):
        """Decode a successful response body."""
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON in response from {response.url}: {e}")
            raise PocketSmithAPIError(
                status_code=response.status_code,
                message=f"Invalid JSON in response: {e}",
                response_body=response.text,
            ) from e

    def test_connection(self) -> bool:
        """Test connection and developer key."""
        try:
            self._request("GET", "/me")
            return True
        except PocketSmithError:
            return False

    def get_authorised_user(self) -> PocketSmithUser:
        """Get the user the developer key belongs to."""
        response = self._request("GET", "/me")
        data = self._json(response)
        if not isinstance(data, dict) or "id" not in data:
            raise PocketSmithAPIError(
                status_code=response.status_code,
                message="Response carries no user id",
                response_body=response.text,
            )
        return PocketSmithUser(
            id=int(data["id"]),
            login=data.get("login"),
            name=data.get("name"),
        )

    def list_transaction_accounts(self, user_id: int) -> list[TransactionAccount]:
        """List all transaction accounts of a user."""
        response = self._request("GET", f"/users/{user_id}/transaction_accounts")
        return [
            TransactionAccount(
                id=int(item["id"]),
                name=item.get("name", ""),
                currency_code=item.get("currency_code"),
            )
            for item in self._json(response)
        ]

    def list_categories(self, user_id: int) -> list[LedgerCategory]:
        """
        List all categories of a user.

        PocketSmith returns categories as a tree; the result is flattened
        with parents before their children.
        """
        response = self._request("GET", f"/users/{user_id}/categories")
        return flatten_categories(self._json(response))

    def create_transaction(
        self,
        transaction_account_id: int,
        transaction: Transaction,
    ) -> int | None:
        """
        Create a transaction in a transaction account.

        Returns:
            PocketSmith transaction ID (None if the response carries none)

        Raises:
            PocketSmithAPIError: If API returns an error or a body that is not JSON
        """
        response = self._request(
            "POST",
            f"/transaction_accounts/{transaction_account_id}/transactions",
            json_data=transaction.to_dict(),
        )

        data = self._json(response)
        transaction_id = data.get("id") if isinstance(data, dict) else None
        if transaction_id:
            logger.info(f"Created PocketSmith transaction id={transaction_id}")

        return int(transaction_id) if transaction_id else None
