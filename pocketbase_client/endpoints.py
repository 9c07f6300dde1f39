"""
Endpoint construction for the PocketBase REST API.

Paths are resolved against ``{base_url}/api/collections/{collection}/``
unless they already start at the API root (``api/...``), in which case they
are resolved against ``{base_url}/`` so no prefix is doubled.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode

API_PREFIX = "api/"
ADMIN_AUTH_PATH = "api/admins/auth-with-password"
OAUTH2_REDIRECT_PATH = "api/oauth2-redirect"


def segment(value: Any) -> str:
    """Percent-encode a value for use as a single path segment."""
    return quote(str(value), safe="")


def collection_prefix(collection: str) -> str:
    """API-root relative prefix of a collection."""
    return f"api/collections/{segment(collection)}/"


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: Optional[Mapping[str, Any]]) -> str:
    """URL-encode scalar query parameters, keeping insertion order.

    ``None`` values are dropped.
    """
    if not params:
        return ""
    pairs: List[Tuple[str, str]] = [
        (str(key), _encode_value(value))
        for key, value in params.items()
        if value is not None
    ]
    return urlencode(pairs)


def build_url(
    base_url: str,
    collection: str,
    path: str = "",
    query_params: Optional[Dict[str, Any]] = None,
) -> str:
    """Build a fully qualified request URL.

    Args:
        base_url: Service root without trailing slash
        collection: Collection the path is scoped to
        path: Bare resource path (``records/abc``) or a path from the API
            root (``api/collections/users/auth-refresh``)
        query_params: Optional scalar query parameters
    """
    root = base_url.rstrip("/")
    relative = path.lstrip("/")
    if not relative.startswith(API_PREFIX):
        relative = collection_prefix(collection) + relative
    url = f"{root}/{relative}"

    query = encode_query(query_params)
    if query:
        url = f"{url}?{query}"
    return url


def build_root_url(base_url: str, path: str) -> str:
    """Build a URL for an endpoint that is not scoped to a collection."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
