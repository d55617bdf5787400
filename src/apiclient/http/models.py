# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models exchanged with Transport implementations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

HeaderList = list[tuple[str, str]]


@dataclass
class HttpRequest:
    """Transport-ready request produced by the pipeline."""

    url: str
    method: str = "GET"
    headers: HeaderList = field(default_factory=list)
    body: bytes | None = None
    options: dict[str, Any] = field(default_factory=dict)

    def header_lines(self) -> list[str]:
        """Return the headers as wire-format ``Name: Value`` lines."""
        from .headers import format_header_lines

        return format_header_lines(self.headers)


@dataclass
class HttpResponse:
    """Normalized transport result: either a status + body, or a transport error."""

    ok: bool
    status_code: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error: BaseException | None = field(default=None, repr=False)
