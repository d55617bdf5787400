# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for apiclient."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("APICLIENT_LOG_LEVEL", "WARNING").upper()

# httpx logs every request line at INFO; these follow apiclient only at DEBUG.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None) -> int:
    """Configure standard logging for CLI/library use and return the numeric level applied."""
    effective_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    if not isinstance(effective_level, int):
        effective_level = logging.WARNING
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("apiclient").setLevel(effective_level)
    transport_level = logging.NOTSET if effective_level <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return effective_level


__all__ = ["TRANSPORT_LOGGERS", "setup_logging"]
