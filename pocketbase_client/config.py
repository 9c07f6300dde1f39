"""
Environment bootstrap for ``PocketBaseConfig``.

Reads ``POCKETBASE_BASE_URL``, ``POCKETBASE_COLLECTION``,
``POCKETBASE_API_TOKEN`` and ``POCKETBASE_TIMEOUT``, after loading a
``.env`` file with python-dotenv. Explicit keyword overrides win.
"""

import os
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError
from .types import PocketBaseConfig

ENV_BASE_URL = "POCKETBASE_BASE_URL"
ENV_COLLECTION = "POCKETBASE_COLLECTION"
ENV_TOKEN = "POCKETBASE_API_TOKEN"
ENV_TIMEOUT = "POCKETBASE_TIMEOUT"


def load_config_from_env(
    env_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    require_token: bool = True,
    **overrides: Any,
) -> PocketBaseConfig:
    """
    Build a config from environment variables.

    Args:
        env_file: Path of a ``.env`` file; defaults to python-dotenv's search.
            Ignored when ``environ`` is given.
        environ: Mapping to read instead of ``os.environ``
        require_token: Treat a missing token as a configuration error
        **overrides: ``base_url``, ``collection``, ``token`` or any other
            ``PocketBaseConfig`` field

    Raises:
        ConfigurationError: If base URL or collection (or a required token)
            cannot be resolved
    """
    if environ is None:
        load_dotenv(env_file)
        environ = os.environ

    base_url = overrides.pop("base_url", None) or environ.get(ENV_BASE_URL, "")
    collection = overrides.pop("collection", None) or environ.get(ENV_COLLECTION, "")
    token = overrides.pop("token", None) or environ.get(ENV_TOKEN) or None

    if not base_url or not collection:
        raise ConfigurationError(
            "Base URL or Collection not found! Please ensure "
            f"{ENV_BASE_URL} and {ENV_COLLECTION} are set in your .env file."
        )
    if require_token and not token:
        raise ConfigurationError(
            f"Token not found! Please ensure {ENV_TOKEN} is set in your .env file."
        )

    if "timeout" not in overrides and environ.get(ENV_TIMEOUT):
        try:
            overrides["timeout"] = float(environ[ENV_TIMEOUT])
        except ValueError:
            raise ConfigurationError(
                f"{ENV_TIMEOUT} must be a number", {"value": environ[ENV_TIMEOUT]}
            )

    return PocketBaseConfig(
        base_url=base_url.rstrip("/"),
        collection=collection,
        token=token,
        require_token=require_token,
        **overrides,
    )
