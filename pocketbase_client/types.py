"""
PocketBase Client Type Definitions

Value shapes shared by the client namespaces. None of them are persisted.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol, Union, runtime_checkable

from .errors import ApiError


# Scalar values accepted in query strings
QueryValue = Union[str, int, float, bool, None]
QueryParams = Dict[str, QueryValue]

# Observer invoked by the admin password grant with (success, payload)
AuthObserver = Callable[[bool, Any], None]


@runtime_checkable
class TokenStorage(Protocol):
    """Token storage interface for custom implementations."""

    def get_token(self) -> Optional[str]:
        """Get the stored bearer token."""
        ...

    def set_token(self, token: Optional[str]) -> None:
        """Replace the stored bearer token."""
        ...

    def clear_token(self) -> None:
        """Forget the stored bearer token."""
        ...


@dataclass
class PocketBaseConfig:
    """Client configuration."""

    # Service root, e.g. https://pb.example.com (trailing slash is stripped)
    base_url: str
    # Collection every record/auth operation is scoped to
    collection: str
    # Optional initial bearer token
    token: Optional[str] = None
    # Treat a missing token as a configuration error
    require_token: bool = False
    # Request timeout in seconds (default: 30)
    timeout: float = 30.0
    # Custom headers to include in requests
    headers: Optional[Dict[str, str]] = None
    # Custom storage for the token (default: None, uses MemoryStorage)
    storage: Optional[TokenStorage] = None
    # Observer for the admin password grant outcome
    on_auth: Optional[AuthObserver] = None
    # Enable debug logging (default: False)
    debug: bool = False


@dataclass(frozen=True)
class Result:
    """Uniform outcome of every request: status code plus decoded JSON body.

    ``response`` is ``None`` when the body is empty or not JSON. Transport
    failures are reported with ``status_code == 500`` and an ``error`` key.
    """

    status_code: int
    response: Any = None

    @property
    def ok(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status_code < 300

    def raise_for_status(self) -> "Result":
        """Raise ``ApiError`` for a non-2xx result, otherwise return self."""
        if not self.ok:
            raise ApiError(self.status_code, self.response)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the ``{"statusCode", "response"}`` wire shape."""
        return {"statusCode": self.status_code, "response": self.response}


@dataclass(frozen=True)
class PKCEPair:
    """PKCE code verifier with its S256 code challenge."""

    code_verifier: str
    code_challenge: str
    code_challenge_method: str = "S256"
