"""Record CRUD operations scoped to one collection."""

from typing import Any, Dict, Optional, TYPE_CHECKING

from .endpoints import build_url, segment
from .types import QueryParams, Result

if TYPE_CHECKING:
    from .executor import RequestExecutor


DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20


def pagination_params(
    params: Optional[QueryParams] = None,
    page: int = DEFAULT_PAGE,
    per_page: int = DEFAULT_PER_PAGE,
) -> QueryParams:
    """Copy ``params`` and append ``page``/``perPage`` as the last two keys.

    Caller-supplied values for those keys are overwritten.
    """
    merged: QueryParams = dict(params or {})
    merged.pop("page", None)
    merged.pop("perPage", None)
    merged["page"] = page
    merged["perPage"] = per_page
    return merged


class RecordOperations:
    """
    Record CRUD operations.

    Accessed via ``client.records``. Every call returns a ``Result``; a
    missing record is reported by the remote status code (404), not raised.
    """

    def __init__(self, executor: "RequestExecutor", base_url: str, collection: str) -> None:
        self._executor = executor
        self._base_url = base_url
        self._collection = collection

    @property
    def collection(self) -> str:
        return self._collection

    def _url(self, path: str, query_params: Optional[QueryParams] = None) -> str:
        return build_url(self._base_url, self._collection, path, query_params)

    def list(
        self,
        query_params: Optional[QueryParams] = None,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Result:
        """
        List records with optional filtering, sorting and pagination.

        Args:
            query_params: Filter/sort/expand parameters, e.g. ``{"filter": 'created >= "2024-09-01"'}``
            page: Page number (1-based)
            per_page: Records per page
        """
        params = pagination_params(query_params, page, per_page)
        return self._executor.execute("GET", self._url("records", params))

    def get(self, record_id: str, query_params: Optional[QueryParams] = None) -> Result:
        """Fetch a single record by id."""
        return self._executor.execute(
            "GET", self._url(f"records/{segment(record_id)}", query_params)
        )

    def create(self, data: Dict[str, Any]) -> Result:
        """Create a record; ``data`` is sent verbatim."""
        return self._executor.execute("POST", self._url("records"), data)

    def update(self, record_id: str, data: Dict[str, Any]) -> Result:
        """Patch an existing record."""
        return self._executor.execute(
            "PATCH", self._url(f"records/{segment(record_id)}"), data
        )

    def delete(self, record_id: str) -> Result:
        """Delete a record (expected 204 with a ``None`` response)."""
        return self._executor.execute("DELETE", self._url(f"records/{segment(record_id)}"))
