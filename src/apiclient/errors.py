# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import Any

import httpx


class ErrorKind(str, Enum):
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"
    HTTP_STATUS_FAILURE = "HTTP_STATUS_FAILURE"
    DECODE_FAILURE = "DECODE_FAILURE"


class TransportErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ApiClientError(Exception):
    """Base class for every error raised by apiclient."""


class InvalidRequestError(ApiClientError, ValueError):
    """The request could not be built (unsupported method, unencodable body)."""


class InvalidOptionError(ApiClientError, ValueError):
    """A transport option is not understood by the transport."""


class RequestError(ApiClientError):
    """A dispatched request failed; ``kind`` tells which way."""

    kind: ErrorKind
    status_code: int | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(RequestError):
    """Network, DNS or TLS level failure. No HTTP status is available."""

    kind = ErrorKind.TRANSPORT_FAILURE

    def __init__(
        self,
        message: str,
        *,
        category: TransportErrorCategory = TransportErrorCategory.UNKNOWN_ERROR,
        error_type: str | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.error_type = error_type

    @property
    def reason(self) -> str:
        return category_to_reason(self.category)


class HttpStatusError(RequestError):
    """The server answered with a status of 400 or above."""

    kind = ErrorKind.HTTP_STATUS_FAILURE

    def __init__(self, status_code: int, body: str = "", payload: Any = None):
        detail = body
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            detail = payload["message"]
        super().__init__(f"HTTP Error {status_code}: {detail}")
        self.status_code = status_code
        self.body = body
        self.payload = payload


class ResponseDecodeError(RequestError):
    """A successful response carried a body that is not valid JSON."""

    kind = ErrorKind.DECODE_FAILURE

    def __init__(self, status_code: int, body: str, detail: str = ""):
        message = f"Invalid JSON in HTTP {status_code} response"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def categorize_exception(exc: BaseException) -> TransportErrorCategory:
    """
    Map Python/httpx exceptions to TransportErrorCategory.

    httpx wraps the underlying OSError, so the cause chain is inspected
    innermost-first before falling back to the httpx class itself.
    """
    if isinstance(exc, httpx.TimeoutException):
        return TransportErrorCategory.TIMEOUT

    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__

    for candidate in reversed(chain):
        category = _categorize_single(candidate)
        if category is not TransportErrorCategory.UNKNOWN_ERROR:
            return category
    return TransportErrorCategory.UNKNOWN_ERROR


def _categorize_single(exc: BaseException) -> TransportErrorCategory:
    if isinstance(exc, httpx.TimeoutException):
        return TransportErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return TransportErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return TransportErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return TransportErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ConnectionError):
        return TransportErrorCategory.CONNECTION_ERROR

    return TransportErrorCategory.UNKNOWN_ERROR


def category_to_reason(category: TransportErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        TransportErrorCategory.TIMEOUT: "Network timeout",
        TransportErrorCategory.SSL_ERROR: "TLS/certificate issue",
        TransportErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        TransportErrorCategory.DNS_ERROR: "DNS resolution failure",
        TransportErrorCategory.UNKNOWN_ERROR: "Network error",
        None: "",
    }
    return mapping.get(category, "Network error")


__all__ = [
    "ApiClientError",
    "ErrorKind",
    "HttpStatusError",
    "InvalidOptionError",
    "InvalidRequestError",
    "RequestError",
    "ResponseDecodeError",
    "TransportError",
    "TransportErrorCategory",
    "categorize_exception",
    "category_to_reason",
]
