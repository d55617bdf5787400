# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for apiclient transports."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"apiclient/{__version__}"


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


def _optional_str_env(name: str, default: str | None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or None


@dataclass
class TransportSettings:
    """Transport defaults, overridden by client and per-call transport options."""

    timeout: float = 10.0
    verify_ssl: bool = True
    ca_bundle: str | None = None
    follow_redirects: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "TransportSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("APICLIENT_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            verify_ssl=_bool_env("APICLIENT_HTTP_VERIFY_SSL", cls.verify_ssl),
            ca_bundle=_optional_str_env("APICLIENT_CA_BUNDLE", cls.ca_bundle),
            follow_redirects=_bool_env("APICLIENT_HTTP_REDIRECTS", cls.follow_redirects),
            user_agent=os.getenv("APICLIENT_USER_AGENT", cls.user_agent),
        )

    @property
    def verify(self) -> bool | str:
        """Value for httpx's ``verify`` argument: a CA bundle path wins over the flag."""
        if not self.verify_ssl:
            return False
        return self.ca_bundle or True


def load_transport_settings() -> TransportSettings:
    """Load transport settings from environment with sensible defaults."""
    return TransportSettings.from_env()
