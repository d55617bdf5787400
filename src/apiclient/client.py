# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON REST client: verb methods over a single request pipeline."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from contextlib import suppress
from typing import Any

from .config import TransportSettings
from .errors import HttpStatusError, TransportError, TransportErrorCategory, categorize_exception
from .http.body import JsonValue, decode_error_payload, decode_json, encode_body
from .http.headers import merge_headers
from .http.models import HttpRequest, HttpResponse
from .http.options import merge_options
from .http.transport import Transport, create_default_transport
from .http.url import build_url
from .models import ClientConfig, RequestSpec

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Client for a JSON REST API rooted at ``base_uri``.

    Every call builds exactly one request: the URL is the base URI joined with the
    endpoint, headers and transport options are the client defaults overridden by
    the per-call values, and a non-None body is JSON-encoded (or form-encoded when
    the effective Content-Type asks for it). Responses with a status of 400 or more
    raise HttpStatusError, transport failures raise TransportError, and successful
    bodies are returned decoded.

    The client holds no per-call state, so one instance may serve concurrent calls
    when its transport is reentrant (the default transport is).
    """

    def __init__(
        self,
        base_uri: str = "",
        default_headers: Mapping[str, str] | None = None,
        default_options: Mapping[str, Any] | None = None,
        *,
        transport: Transport | None = None,
        settings: TransportSettings | None = None,
    ):
        self.config = ClientConfig(
            base_uri=base_uri,
            default_headers=default_headers or {},
            default_options=default_options or {},
        )
        self.transport = transport or create_default_transport(settings)

    @property
    def base_uri(self) -> str:
        return self.config.base_uri

    def get(
        self,
        endpoint: str,
        query_params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> JsonValue:
        """Send a GET request; ``query_params`` are appended to the URL."""
        return self._request(RequestSpec("GET", endpoint, query_params=query_params, headers=headers, options=options))

    def post(
        self,
        endpoint: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> JsonValue:
        """Send a POST request with an optional body."""
        return self._request(RequestSpec("POST", endpoint, body=body, headers=headers, options=options))

    def put(
        self,
        endpoint: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> JsonValue:
        """Send a PUT request with an optional body."""
        return self._request(RequestSpec("PUT", endpoint, body=body, headers=headers, options=options))

    def delete(
        self,
        endpoint: str,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> JsonValue:
        """Send a DELETE request."""
        return self._request(RequestSpec("DELETE", endpoint, headers=headers, options=options))

    def build_request(self, spec: RequestSpec) -> HttpRequest:
        """Turn a RequestSpec into the transport-ready request without sending it."""
        url = build_url(self.config.base_uri, spec.endpoint, spec.query_params)
        headers = merge_headers(self.config.default_headers, spec.headers)

        body: bytes | None = None
        if spec.body is not None:
            body, headers = encode_body(spec.body, headers)

        options = merge_options(
            self.config.default_options,
            spec.options,
            url=url,
            method=spec.method,
            headers=headers,
        )
        return HttpRequest(url=url, method=spec.method, headers=headers, body=body, options=options)

    def _request(self, spec: RequestSpec) -> JsonValue:
        request = self.build_request(spec)
        logger.debug("%s %s", request.method, request.url)
        response = self.transport.request(request)
        return self._interpret(request, response)

    def _interpret(self, request: HttpRequest, response: HttpResponse) -> JsonValue:
        if not response.ok or response.status_code is None:
            message = response.error_message or "Transport failure"
            category = TransportErrorCategory.UNKNOWN_ERROR
            if response.error is not None:
                category = categorize_exception(response.error)
            logger.debug("%s %s failed: %s", request.method, request.url, message)
            raise TransportError(message, category=category, error_type=response.error_type)

        status = response.status_code
        logger.debug("%s %s -> %s", request.method, request.url, status)
        if status >= 400:
            raise HttpStatusError(status, response.text, decode_error_payload(response.text))
        return decode_json(response.text, status)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.transport, "close"):
                self.transport.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["ApiClient"]
