"""
PocketBase Client Error Classes

Exceptions are reserved for programmer-error conditions. Request outcomes
(success, API rejection, transport failure) are returned as ``Result``.
"""

from typing import Any, Dict, Optional


class PocketBaseError(Exception):
    """Base error class for the PocketBase client."""
    
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "name": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }
    
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationError(PocketBaseError):
    """Fatal configuration error (missing base URL, collection or token)."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class ValidationError(PocketBaseError):
    """Parameter validation error, raised before any network I/O."""
    
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(code, message, {"field": field} if field else None)
        self.field = field


class ApiError(PocketBaseError):
    """Non-2xx API response, only raised by ``Result.raise_for_status``."""
    
    def __init__(self, status_code: int, response: Any = None):
        message = f"HTTP {status_code}"
        if isinstance(response, dict) and response.get("message"):
            message = str(response["message"])
        super().__init__(
            "API_ERROR",
            message,
            {"status_code": status_code, "response": response},
        )
        self.status_code = status_code
        self.response = response


def is_pocketbase_error(error: Any) -> bool:
    """Check if error is a PocketBaseError."""
    return isinstance(error, PocketBaseError)
