"""Account management: user-record create/update/delete with id checks."""

from typing import Any, Dict, Optional

from .errors import ValidationError
from .records import RecordOperations
from .types import Result


class AccountOperations:
    """User-like record management, accessed via ``client.accounts``."""

    def __init__(self, records: RecordOperations) -> None:
        self._records = records

    @staticmethod
    def _require_id(account_id: Optional[str], action: str) -> str:
        if not account_id:
            raise ValidationError(
                f"User ID must be provided for {action} a user.", field="id"
            )
        return account_id

    def create(
        self,
        username: str,
        email: str,
        password: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> Result:
        """
        Create a user record.

        ``passwordConfirm`` mirrors ``password``. Optional profile fields are
        always present in the body, as ``None`` when omitted.
        """
        return self._records.create({
            "username": username,
            "email": email,
            "password": password,
            "passwordConfirm": password,
            "name": name,
            "avatar": avatar,
            "description": description,
        })

    def update(self, account_id: Optional[str], data: Dict[str, Any]) -> Result:
        """Patch a user record. Raises ValidationError for an empty id."""
        return self._records.update(self._require_id(account_id, "updating"), data)

    def delete(self, account_id: Optional[str]) -> Result:
        """Delete a user record. Raises ValidationError for an empty id."""
        return self._records.delete(self._require_id(account_id, "deleting"))
