# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import logging
import ssl
from typing import Any

import httpx

from ..config import TransportSettings, load_transport_settings
from ..errors import InvalidOptionError
from .models import HttpRequest, HttpResponse
from .options import transport_options
from .transport import Transport

logger = logging.getLogger(__name__)

SUPPORTED_OPTIONS = frozenset(
    {
        "timeout",
        "verify",
        "ca_bundle",
        "cert",
        "follow_redirects",
        "proxy",
        "trust_env",
        "cookies",
        "auth",
    }
)


def _verify_value(verify: Any) -> Any:
    # httpx deprecates string paths for `verify`; load them into an SSLContext.
    if isinstance(verify, str):
        return ssl.create_default_context(cafile=verify)
    return verify


class HttpxTransport(Transport):
    """
    Synchronous httpx transport.

    A fresh ``httpx.Client`` is opened for every request and closed once the body
    has been read, so no connection outlives the call.
    """

    def __init__(
        self,
        settings: TransportSettings | None = None,
        *,
        httpx_transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or load_transport_settings()
        self._httpx_transport = httpx_transport

    def _client_kwargs(self, options: dict[str, Any]) -> dict[str, Any]:
        verify: Any = self.settings.verify
        if "verify" in options:
            verify = options["verify"]
        if options.get("ca_bundle") and verify is not False:
            verify = options["ca_bundle"]

        kwargs: dict[str, Any] = {
            "headers": {"User-Agent": self.settings.user_agent},
            "timeout": options.get("timeout", self.settings.timeout),
            "follow_redirects": options.get("follow_redirects", self.settings.follow_redirects),
            "verify": _verify_value(verify),
        }
        for key in ("cert", "proxy", "trust_env", "cookies", "auth"):
            if key in options:
                kwargs[key] = options[key]
        if self._httpx_transport is not None:
            kwargs["transport"] = self._httpx_transport
        return kwargs

    def _open_client(self, options: dict[str, Any]) -> httpx.Client:
        kwargs = self._client_kwargs(options)
        try:
            return httpx.Client(**kwargs)
        except (TypeError, ValueError) as exc:
            raise InvalidOptionError(f"Invalid transport option value: {exc}") from exc

    def _failure(self, request: HttpRequest, exc: BaseException) -> HttpResponse:
        logger.debug("Transport failure for %s %s: %r", request.method, request.url, exc)
        return HttpResponse(
            ok=False,
            url=request.url,
            error_message=str(exc) or type(exc).__name__,
            error_type=type(exc).__name__,
            error=exc,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        options = transport_options(request.options)
        unknown = sorted(set(options) - SUPPORTED_OPTIONS)
        if unknown:
            raise InvalidOptionError(f"Unsupported transport option(s): {', '.join(unknown)}")

        try:
            # A missing or unreadable CA bundle surfaces here as an OSError.
            client = self._open_client(options)
        except OSError as exc:
            return self._failure(request, exc)

        try:
            with client:
                resp = client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    content=request.body,
                )
            content = resp.content
            encoding = resp.encoding or "utf-8"
            try:
                text = content.decode(encoding, errors="replace")
            except LookupError:
                text = content.decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=dict(resp.headers),
                text=text,
                content=content,
                url=str(resp.url),
            )
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            return self._failure(request, exc)

    def close(self) -> None:
        if self._httpx_transport is not None:
            self._httpx_transport.close()
