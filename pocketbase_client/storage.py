"""
PocketBase Client Token Storage

Holds the bearer token attached to outgoing requests. Tokens are never
validated, expired or refreshed locally.
"""

from typing import Optional


class MemoryStorage:
    """In-memory token storage (default, non-persistent).

    Not safe for concurrent token mutation: a client shared between threads
    shares this value without locking.
    """

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get_token(self) -> Optional[str]:
        """Get the stored bearer token."""
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        """Replace the stored token unconditionally."""
        self._token = token

    def clear_token(self) -> None:
        """Forget the stored token."""
        self._token = None
