"""
PocketBase Client Auth Operations

Collection-scoped authentication and account flows. None of these calls
touch the stored token: callers pass ``result.response["token"]`` to
``client.set_token`` themselves.
"""

import base64
import hashlib
import logging
import secrets
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from .endpoints import OAUTH2_REDIRECT_PATH, build_root_url, build_url, segment
from .errors import ValidationError
from .types import PKCEPair, QueryParams, Result

if TYPE_CHECKING:
    from .executor import RequestExecutor


logger = logging.getLogger("pocketbase_client")

OAUTH2_REQUIRED_PARAMS: Tuple[str, ...] = ("provider", "code", "codeVerifier", "redirectUrl")

# Placeholder authorization code used by the demonstration flow helper
SIMULATED_OAUTH2_CODE = "simulated_oauth2_code"


def code_challenge_for(code_verifier: str) -> str:
    """S256 code challenge: URL-safe base64 of SHA-256, without padding."""
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def generate_pkce_pair() -> PKCEPair:
    """Generate a fresh verifier (64 hex chars) and its challenge."""
    code_verifier = secrets.token_hex(32)
    return PKCEPair(
        code_verifier=code_verifier,
        code_challenge=code_challenge_for(code_verifier),
    )


class AuthOperations:
    """Auth operations namespace, accessed via ``client.auth``."""

    def __init__(self, executor: "RequestExecutor", base_url: str, collection: str) -> None:
        self._executor = executor
        self._base_url = base_url
        self._collection = collection
        # Most recent PKCE pair generated by the flow helper
        self.last_pkce: Optional[PKCEPair] = None

    def _post(
        self,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        query_params: Optional[QueryParams] = None,
    ) -> Result:
        url = build_url(self._base_url, self._collection, path, query_params)
        return self._executor.execute("POST", url, body)

    # =========================================================================
    # Authentication
    # =========================================================================

    def auth_with_password(
        self,
        identity: str,
        password: str,
        query_params: Optional[QueryParams] = None,
    ) -> Result:
        """
        Authenticate a collection record with username/email and password.

        Args:
            identity: Username or email of the auth record
            password: Auth record password
            query_params: Optional ``expand``/``fields`` parameters

        Returns:
            Result whose response carries ``token`` and ``record``. The token
            is not stored.
        """
        return self._post(
            "auth-with-password",
            {"identity": identity, "password": password},
            query_params,
        )

    def auth_with_oauth2(
        self,
        params: Dict[str, Any],
        query_params: Optional[QueryParams] = None,
    ) -> Result:
        """
        Authenticate with an OAuth2 authorization code.

        Args:
            params: Must hold ``provider``, ``code``, ``codeVerifier`` and
                ``redirectUrl``; extra keys such as ``createData`` are sent as is
            query_params: Optional query parameters

        Raises:
            ValidationError: Naming the first missing required parameter
        """
        for name in OAUTH2_REQUIRED_PARAMS:
            if params.get(name) is None:
                raise ValidationError(
                    f"Missing required OAuth2 parameter: {name}", field=name
                )
        return self._post("auth-with-oauth2", dict(params), query_params)

    def auth_with_oauth2_flow(self, params: Dict[str, Any]) -> Result:
        """
        Demonstration helper for the OAuth2 PKCE call shape.

        Generates a PKCE pair and the ``/api/oauth2-redirect`` URL, then calls
        ``auth_with_oauth2`` with a placeholder code. The remote service will
        normally reject it: a real exchange needs the code returned to the
        redirect URL together with the verifier generated before redirecting.
        """
        provider = params.get("provider")
        if provider is None:
            raise ValidationError("Missing required OAuth2 parameter: provider", field="provider")

        pkce = generate_pkce_pair()
        self.last_pkce = pkce
        redirect_url = build_root_url(self._base_url, OAUTH2_REDIRECT_PATH)
        logger.debug("Starting demo OAuth2 flow for provider %s", provider)

        return self.auth_with_oauth2({
            "provider": provider,
            "code": SIMULATED_OAUTH2_CODE,
            "codeVerifier": pkce.code_verifier,
            "redirectUrl": redirect_url,
        })

    def auth_refresh(self, query_params: Optional[QueryParams] = None) -> Result:
        """Return a new auth response for the currently authenticated record."""
        return self._post("auth-refresh", None, query_params)

    # =========================================================================
    # Verification, password reset, email change
    # =========================================================================

    def request_verification(self, email: str) -> Result:
        """Send a verification email."""
        return self._post("request-verification", {"email": email})

    def confirm_verification(self, token: str) -> Result:
        """Confirm account verification with the emailed token."""
        return self._post("confirm-verification", {"token": token})

    def request_password_reset(self, email: str) -> Result:
        """Send a password reset email."""
        return self._post("request-password-reset", {"email": email})

    def confirm_password_reset(self, token: str, password: str, password_confirm: str) -> Result:
        """Set a new password with the emailed reset token."""
        return self._post("confirm-password-reset", {
            "token": token,
            "password": password,
            "passwordConfirm": password_confirm,
        })

    def request_email_change(self, new_email: str) -> Result:
        """Send an email change request to the new address."""
        return self._post("request-email-change", {"newEmail": new_email})

    def confirm_email_change(self, token: str, password: str) -> Result:
        """Confirm an email change with the emailed token and account password."""
        return self._post("confirm-email-change", {"token": token, "password": password})

    # =========================================================================
    # Auth methods and external auths
    # =========================================================================

    def list_auth_methods(self, query_params: Optional[QueryParams] = None) -> Result:
        """Public list of the collection's allowed auth methods."""
        url = build_url(self._base_url, self._collection, "auth-methods", query_params)
        return self._executor.execute("GET", url)

    def list_external_auths(self, user_id: str, query_params: Optional[QueryParams] = None) -> Result:
        """OAuth2 providers linked to one auth record."""
        url = build_url(
            self._base_url,
            self._collection,
            f"records/{segment(user_id)}/external-auths",
            query_params,
        )
        return self._executor.execute("GET", url)

    def unlink_external_auth(self, user_id: str, provider: str) -> Result:
        """Unlink one OAuth2 provider from an auth record."""
        url = build_url(
            self._base_url,
            self._collection,
            f"records/{segment(user_id)}/external-auths/{segment(provider)}",
        )
        return self._executor.execute("DELETE", url)
