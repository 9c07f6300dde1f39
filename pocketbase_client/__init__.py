"""
PocketBase Python Client

A synchronous client for PocketBase collections: record CRUD, password and
OAuth2 authentication, verification, password reset and email change flows.

Every operation returns a ``Result(status_code, response)``.
"""

from .client import PocketBaseClient, create_pocketbase_client
from .types import (
    PocketBaseConfig,
    Result,
    PKCEPair,
    TokenStorage,
    AuthObserver,
)
from .errors import (
    PocketBaseError,
    ConfigurationError,
    ValidationError,
    ApiError,
    is_pocketbase_error,
)
from .auth import AuthOperations, generate_pkce_pair, code_challenge_for
from .records import RecordOperations
from .accounts import AccountOperations
from .admins import AdminOperations
from .executor import RequestExecutor
from .endpoints import build_url
from .config import load_config_from_env
from .storage import MemoryStorage

__version__ = "0.1.0"
__all__ = [
    # Clients
    "PocketBaseClient",
    "create_pocketbase_client",
    # Types
    "PocketBaseConfig",
    "Result",
    "PKCEPair",
    "TokenStorage",
    "AuthObserver",
    # Errors
    "PocketBaseError",
    "ConfigurationError",
    "ValidationError",
    "ApiError",
    "is_pocketbase_error",
    # Namespaces
    "AuthOperations",
    "RecordOperations",
    "AccountOperations",
    "AdminOperations",
    "RequestExecutor",
    # Helpers
    "generate_pkce_pair",
    "code_challenge_for",
    "build_url",
    "load_config_from_env",
    # Storage
    "MemoryStorage",
]
