# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport-option merging."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .models import HeaderList

logger = logging.getLogger(__name__)

OPTION_URL = "url"
OPTION_METHOD = "method"
OPTION_HEADERS = "headers"
OPTION_STREAM = "stream"

# Owned by the pipeline; never taken from defaults or overrides.
RESERVED_OPTIONS = frozenset({OPTION_URL, OPTION_METHOD, OPTION_HEADERS, OPTION_STREAM})


def merge_options(
    defaults: Mapping[str, Any] | None,
    overrides: Mapping[str, Any] | None,
    *,
    url: str,
    method: str,
    headers: HeaderList,
) -> dict[str, Any]:
    """Merge client default options with per-call options, per-call winning, then force the reserved fields."""
    merged: dict[str, Any] = dict(defaults or {})
    merged.update(overrides or {})

    ignored = sorted(RESERVED_OPTIONS.intersection(merged))
    if ignored:
        logger.debug("Ignoring pipeline-owned transport options: %s", ", ".join(ignored))

    merged[OPTION_URL] = url
    merged[OPTION_STREAM] = False
    merged[OPTION_METHOD] = method
    merged[OPTION_HEADERS] = list(headers)
    return merged


def transport_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Return the options a transport should interpret (reserved fields removed)."""
    return {key: value for key, value in options.items() if key not in RESERVED_OPTIONS}


__all__ = [
    "OPTION_HEADERS",
    "OPTION_METHOD",
    "OPTION_STREAM",
    "OPTION_URL",
    "RESERVED_OPTIONS",
    "merge_options",
    "transport_options",
]
