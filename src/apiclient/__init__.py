# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
apiclient package entrypoint.

A small client for JSON REST APIs: ``ApiClient`` exposes GET/POST/PUT/DELETE
calls that build one request, send it through an injectable transport (httpx by
default) and return the decoded JSON body or raise a typed RequestError.
"""

from .client import ApiClient
from .config import TransportSettings, load_transport_settings
from .errors import (
    ApiClientError,
    ErrorKind,
    HttpStatusError,
    InvalidOptionError,
    InvalidRequestError,
    RequestError,
    ResponseDecodeError,
    TransportError,
    TransportErrorCategory,
)
from .http import (
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    JsonValue,
    StubTransport,
    Transport,
    create_default_transport,
)
from .log import setup_logging
from .models import ClientConfig, RequestSpec
from .version import __version__

__all__ = [
    "ApiClient",
    "ApiClientError",
    "ClientConfig",
    "ErrorKind",
    "HttpRequest",
    "HttpResponse",
    "HttpStatusError",
    "HttpxTransport",
    "InvalidOptionError",
    "InvalidRequestError",
    "JsonValue",
    "RequestError",
    "RequestSpec",
    "ResponseDecodeError",
    "StubTransport",
    "Transport",
    "TransportError",
    "TransportErrorCategory",
    "TransportSettings",
    "create_default_transport",
    "load_transport_settings",
    "setup_logging",
    "__version__",
]
