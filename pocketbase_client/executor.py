"""
PocketBase Client Request Executor

The single I/O chokepoint: issues one HTTP request and folds every outcome,
including transport failures, into a ``Result``.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .storage import MemoryStorage
from .types import Result, TokenStorage


logger = logging.getLogger("pocketbase_client")

TRANSPORT_ERROR_STATUS = 500


class RequestExecutor:
    """Issues HTTP requests with JSON bodies and bearer authentication."""

    def __init__(
        self,
        storage: Optional[TokenStorage] = None,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        debug: bool = False,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._storage = storage if storage is not None else MemoryStorage()
        self._timeout = timeout
        self._custom_headers = headers or {}
        self._debug = debug
        # Only a client created here is closed by close()
        self._owns_http_client = http_client is None
        self._http_client = http_client if http_client is not None else httpx.Client(timeout=timeout)

    @property
    def storage(self) -> TokenStorage:
        return self._storage

    def _log(self, message: str, *args: Any) -> None:
        """Log debug message."""
        if self._debug:
            logger.debug(f"[PocketBase] {message}", *args)

    def build_headers(
        self,
        body: Optional[bytes] = None,
        authenticate: bool = True,
    ) -> Dict[str, str]:
        """Headers for one request; the bearer token is read at call time."""
        headers: Dict[str, str] = {
            **self._custom_headers,
            "Content-Type": "application/json",
        }
        token = self._storage.get_token() if authenticate else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if body is not None:
            headers["Content-Length"] = str(len(body))
        return headers

    def execute(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        authenticate: bool = True,
    ) -> Result:
        """
        Execute a single HTTP request.

        Args:
            method: HTTP method, passed through verbatim
            url: Fully qualified URL
            body: Optional JSON-serializable payload
            headers: Extra headers for this request only
            authenticate: Attach the stored bearer token

        Returns:
            Result with the remote status and decoded JSON body, or status
            500 with an ``error`` description when the transport failed
        """
        payload = json.dumps(body).encode("utf-8") if body is not None else None
        request_headers = self.build_headers(payload, authenticate)
        if headers:
            request_headers.update(headers)

        try:
            response = self._http_client.request(
                method=method.upper(),
                url=url,
                headers=request_headers,
                content=payload,
            )
        except httpx.TimeoutException:
            logger.warning("%s %s timed out after %ss", method, url, self._timeout)
            return Result(TRANSPORT_ERROR_STATUS, {"error": "Request timeout"})
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return Result(TRANSPORT_ERROR_STATUS, {"error": str(e)})

        self._log("%s %s -> %s", method, url, response.status_code)
        return Result(response.status_code, self._decode(response))

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Decode a JSON body; empty or non-JSON bodies decode to None."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def close(self) -> None:
        """Close the HTTP client if this executor created it."""
        if self._owns_http_client:
            self._http_client.close()
