# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client configuration and per-call request specifications."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import InvalidRequestError

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client-wide configuration."""

    base_uri: str = ""
    default_headers: Mapping[str, str] = field(default_factory=dict)
    default_options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_uri", str(self.base_uri or "").rstrip("/"))
        object.__setattr__(self, "default_headers", _frozen(self.default_headers))
        object.__setattr__(self, "default_options", _frozen(self.default_options))


@dataclass(frozen=True)
class RequestSpec:
    """One call's worth of request inputs."""

    method: str
    endpoint: str
    query_params: Mapping[str, Any] | None = None
    body: Any = None
    headers: Mapping[str, str] | None = None
    options: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        method = str(self.method or "").upper()
        if method not in SUPPORTED_METHODS:
            raise InvalidRequestError(f"Unsupported HTTP method: {self.method!r}")
        object.__setattr__(self, "method", method)


__all__ = ["ClientConfig", "RequestSpec", "SUPPORTED_METHODS"]
