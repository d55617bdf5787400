# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL and query-string helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote_plus


def _scalar(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return "0"
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _flatten(prefix: str, value: Any, out: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, out)
        return
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        for position, item in enumerate(value):
            _flatten(f"{prefix}[{position}]", item, out)
        return
    out.append((prefix, _scalar(value)))


def query_pairs(params: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """
    Flatten query parameters into ordered ``(key, value)`` pairs.

    None values are skipped, booleans become ``1``/``0`` and nested mappings or
    sequences expand to ``key[sub]`` / ``key[0]`` entries.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in (params or {}).items():
        _flatten(str(key), value, pairs)
    return pairs


def encode_query(params: Mapping[str, Any] | None) -> str:
    """Percent-encode parameters as ``key=value`` pairs joined by ``&`` (spaces as ``+``)."""
    return "&".join(f"{quote_plus(key)}={quote_plus(value)}" for key, value in query_pairs(params))


def build_url(base_uri: str, endpoint: str, query_params: Mapping[str, Any] | None = None) -> str:
    """
    Join base URI and endpoint with exactly one slash, then append the query string.

    No path normalization is performed.

    Example:
      build_url("https://api.example.com/v1/", "/users", {"page": 2})
      -> https://api.example.com/v1/users?page=2
    """
    url = f"{base_uri.rstrip('/')}/{endpoint.lstrip('/')}"
    if query_params:
        query = encode_query(query_params)
        if query:
            url = f"{url}?{query}"
    return url


__all__ = ["build_url", "encode_query", "query_pairs"]
