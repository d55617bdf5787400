# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory Transport for tests and offline use."""

from __future__ import annotations

from .models import HttpRequest, HttpResponse
from .transport import Transport


class StubTransport(Transport):
    """Deterministic, programmable Transport keyed by ``(method, url)``."""

    def __init__(self, responses: dict[tuple[str, str], HttpResponse] | None = None):
        self._responses = dict(responses or {})
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, method: str, url: str, response: HttpResponse) -> None:
        self._responses[(method.upper(), url)] = response

    def add_json(self, method: str, url: str, status_code: int, text: str) -> None:
        """Register a JSON response with the given status and raw body."""
        self.add(
            method,
            url,
            HttpResponse(
                ok=True,
                status_code=status_code,
                headers={"content-type": "application/json"},
                text=text,
                content=text.encode("utf-8"),
                url=url,
            ),
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        key = (request.method.upper(), request.url)
        if key in self._responses:
            return self._responses[key]
        return HttpResponse(ok=False, url=request.url, error_message="No stubbed response configured")

    def close(self) -> None:
        self.closed = True
