# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header merging and lookup.

HTTP header field names are case-insensitive (RFC 9110). Defaults and per-call
overrides are plain mappings supplied by callers, so every lookup and merge
compares names case-insensitively while preserving the caller's spelling.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..errors import InvalidRequestError
from .models import HeaderList

CONTENT_TYPE = "Content-Type"


def _items(headers: Mapping[str, object] | Iterable[tuple[str, object]] | None) -> list[tuple[str, str]]:
    if not headers:
        return []
    pairs = headers.items() if isinstance(headers, Mapping) else headers
    out: list[tuple[str, str]] = []
    for key, value in pairs:
        if key is None:
            continue
        name = str(key).strip()
        if not name:
            continue
        out.append((name, "" if value is None else str(value)))
    return out


def merge_headers(
    defaults: Mapping[str, object] | None,
    overrides: Mapping[str, object] | None,
) -> HeaderList:
    """
    Merge client default headers with per-call headers.

    An override replaces the default with the same case-insensitive name in place
    (taking the override's spelling); new names are appended in override order.
    Names and values must be ASCII; anything else raises InvalidRequestError.
    """
    merged: HeaderList = []
    index: dict[str, int] = {}
    for name, value in _items(defaults) + _items(overrides):
        if not name.isascii() or not value.isascii():
            raise InvalidRequestError(f"Header {name!r} must contain only ASCII characters")
        lower = name.lower()
        if lower in index:
            merged[index[lower]] = (name, value)
        else:
            index[lower] = len(merged)
            merged.append((name, value))
    return merged


def find_header(headers: Iterable[tuple[str, str]] | Mapping[str, str] | None, name: str) -> str | None:
    """Return the first value whose name matches ``name`` case-insensitively, else None."""
    lower = name.lower()
    for key, value in _items(headers):
        if key.lower() == lower:
            return value
    return None


def format_header_lines(headers: Iterable[tuple[str, str]]) -> list[str]:
    return [f"{name}: {value}" for name, value in headers]


__all__ = ["CONTENT_TYPE", "find_header", "format_header_lines", "merge_headers"]
