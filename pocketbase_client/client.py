"""
PocketBase Client

Synchronous client for a PocketBase collection. A single request executor
is shared by the record, auth, account and admin namespaces.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .accounts import AccountOperations
from .admins import AdminOperations
from .auth import AuthOperations
from .errors import ConfigurationError
from .executor import RequestExecutor
from .records import DEFAULT_PAGE, DEFAULT_PER_PAGE, RecordOperations
from .storage import MemoryStorage
from .types import PocketBaseConfig, QueryParams, Result


logger = logging.getLogger("pocketbase_client")


class PocketBaseClient:
    """
    PocketBase Client - synchronous SDK entry point.

    Every operation returns a ``Result``; only configuration and parameter
    errors are raised. The stored token is shared by all namespaces and is
    not safe for concurrent mutation.
    """

    def __init__(
        self,
        config: PocketBaseConfig,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the client. Raises ConfigurationError on bad config."""
        self._validate_config(config)

        self._base_url = config.base_url.rstrip("/")
        self._collection = config.collection
        self._timeout = config.timeout
        self._debug = config.debug
        self._storage = config.storage if config.storage is not None else MemoryStorage()
        if config.token:
            self._storage.set_token(config.token)

        self._executor = RequestExecutor(
            storage=self._storage,
            timeout=self._timeout,
            headers=config.headers,
            debug=self._debug,
            http_client=http_client,
        )

        # Namespaces
        self.records = RecordOperations(self._executor, self._base_url, self._collection)
        self.auth = AuthOperations(self._executor, self._base_url, self._collection)
        self.accounts = AccountOperations(self.records)
        self.admins = AdminOperations(self._executor, self._base_url, config.on_auth)

        self._log(f"PocketBaseClient initialized (collection={self._collection})")

    def _validate_config(self, config: PocketBaseConfig) -> None:
        """Validate configuration."""
        if not config.base_url or not config.base_url.rstrip("/"):
            raise ConfigurationError("base_url is required")
        if not config.collection:
            raise ConfigurationError("collection is required")
        if config.timeout is not None and config.timeout <= 0:
            raise ConfigurationError(
                "timeout must be positive", {"timeout": config.timeout}
            )
        if config.require_token and not config.token and not (
            config.storage is not None and config.storage.get_token()
        ):
            raise ConfigurationError("token is required")

    def _log(self, message: str, *args: Any) -> None:
        """Log debug message."""
        if self._debug:
            logger.debug(f"[PocketBase] {message}", *args)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def collection(self) -> str:
        return self._collection

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    # =========================================================================
    # Token Methods
    # =========================================================================

    def set_token(self, token: Optional[str]) -> None:
        """Replace the bearer token used by all subsequent requests."""
        self._storage.set_token(token)

    def get_token(self) -> Optional[str]:
        """Get the stored bearer token."""
        return self._storage.get_token()

    def clear_token(self) -> None:
        """Send subsequent requests unauthenticated."""
        self._storage.clear_token()

    def generate_token(self, identity: str, password: str) -> Any:
        """Admin password grant; stores the token on success."""
        return self.admins.generate_token(identity, password)

    # =========================================================================
    # Record Methods
    # =========================================================================

    def get_all_records(
        self,
        query_params: Optional[QueryParams] = None,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Result:
        """List records of the collection, one page at a time."""
        return self.records.list(query_params, page, per_page)

    def get_record_by_id(self, record_id: str, query_params: Optional[QueryParams] = None) -> Result:
        return self.records.get(record_id, query_params)

    def create_record(self, data: Dict[str, Any]) -> Result:
        return self.records.create(data)

    def update_record(self, record_id: str, data: Dict[str, Any]) -> Result:
        return self.records.update(record_id, data)

    def delete_record(self, record_id: str) -> Result:
        return self.records.delete(record_id)

    def close(self) -> None:
        """Close the HTTP client. An injected ``http_client`` stays open."""
        self._executor.close()

    def __enter__(self) -> "PocketBaseClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


# =============================================================================
# Factory Functions
# =============================================================================

def create_pocketbase_client(
    base_url: str,
    collection: str,
    token: Optional[str] = None,
    **options: Any,
) -> PocketBaseClient:
    """Create a new synchronous PocketBase client."""
    return PocketBaseClient(
        PocketBaseConfig(base_url=base_url, collection=collection, token=token, **options)
    )
