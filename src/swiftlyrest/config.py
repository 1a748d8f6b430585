# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for SwiftlyRest."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"SwiftlyRest/{__version__}"
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_TAG = "[SwiftlyRest]"
DEFAULT_TOKEN_KEY = "token"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(name: str, default: str | None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass
class RestSettings:
    """Client and transport defaults."""

    base_url: str | None = None
    content_type: str = DEFAULT_CONTENT_TYPE
    logging_enabled: bool = False
    tag: str = DEFAULT_TAG
    timeout: float = 30.0
    verify_ssl: bool = True
    allow_redirects: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    token_key: str = DEFAULT_TOKEN_KEY
    keyring_service: str = "swiftlyrest"

    @classmethod
    def from_env(cls) -> "RestSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("SWIFTLYREST_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            base_url=_str_env("SWIFTLYREST_BASE_URL", cls.base_url),
            content_type=_str_env("SWIFTLYREST_CONTENT_TYPE", cls.content_type) or cls.content_type,
            logging_enabled=_bool_env("SWIFTLYREST_LOGGING", cls.logging_enabled),
            tag=_str_env("SWIFTLYREST_TAG", cls.tag) or cls.tag,
            timeout=timeout,
            verify_ssl=_bool_env("SWIFTLYREST_HTTP_VERIFY_SSL", cls.verify_ssl),
            allow_redirects=_bool_env("SWIFTLYREST_HTTP_REDIRECTS", cls.allow_redirects),
            user_agent=os.getenv("SWIFTLYREST_USER_AGENT", cls.user_agent),
            token_key=_str_env("SWIFTLYREST_TOKEN_KEY", cls.token_key) or cls.token_key,
            keyring_service=_str_env("SWIFTLYREST_KEYRING_SERVICE", cls.keyring_service) or cls.keyring_service,
        )


def load_settings() -> RestSettings:
    """Load client settings from environment with sensible defaults."""
    return RestSettings.from_env()
