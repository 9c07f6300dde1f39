"""
Admin password grant.

Unlike ``AuthOperations.auth_with_password`` this targets the fixed
``/api/admins/auth-with-password`` endpoint and stores the returned token.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from .endpoints import ADMIN_AUTH_PATH, build_root_url
from .types import AuthObserver, Result

if TYPE_CHECKING:
    from .executor import RequestExecutor


logger = logging.getLogger("pocketbase_client")


class AdminOperations:
    """Admin authentication, accessed via ``client.admins``."""

    def __init__(
        self,
        executor: "RequestExecutor",
        base_url: str,
        on_auth: Optional[AuthObserver] = None,
    ) -> None:
        self._executor = executor
        self._base_url = base_url
        self._on_auth = on_auth

    def auth_with_password(self, identity: str, password: str) -> Result:
        """Admin password auth without side effects.

        Sent without the stored bearer token.
        """
        url = build_root_url(self._base_url, ADMIN_AUTH_PATH)
        return self._executor.execute(
            "POST",
            url,
            {"identity": identity, "password": password},
            authenticate=False,
        )

    def generate_token(self, identity: str, password: str) -> Any:
        """
        Authenticate as admin and store the returned token.

        Args:
            identity: Admin email
            password: Admin password

        Returns:
            The decoded response body (token and admin data on success, the
            error payload otherwise). The stored token only changes when the
            status is 200 and the body carries a ``token``.
        """
        result = self.auth_with_password(identity, password)
        payload = result.response
        token = payload.get("token") if isinstance(payload, dict) else None
        success = result.status_code == 200 and bool(token)

        if success:
            self._executor.storage.set_token(token)
            logger.info("Admin token generated")
        else:
            logger.warning("Error generating admin token (status=%s): %s", result.status_code, payload)

        if self._on_auth is not None:
            self._on_auth(success, payload)
        return payload
