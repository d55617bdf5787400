# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory.

A transport sends one already-built ``HttpRequest`` and reports the outcome as an
``HttpResponse``; it never raises for network trouble. Either:

- the server answered: ``ok=True``, ``status_code`` set, ``text``/``content``
  holding the full body (whatever the status), or
- the exchange failed below HTTP: ``ok=False``, ``status_code=None``,
  ``error_message`` with the diagnostic, ``error_type`` with the exception
  class name and ``error`` with the exception itself when there is one, so
  ``ApiClient`` can categorize it.

Option values a transport cannot use are the one exception: those raise
``InvalidOptionError`` before anything is sent.
"""

from typing import Protocol

from ..config import TransportSettings, load_transport_settings
from .models import HttpRequest, HttpResponse


class Transport(Protocol):
    """Dispatches one request; ``request.options`` carries the merged transport options."""

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_transport(settings: TransportSettings | None = None) -> Transport:
    """Factory for the default httpx-backed transport, seeded from environment settings."""
    from .httpx_transport import HttpxTransport

    return HttpxTransport(settings or load_transport_settings())
