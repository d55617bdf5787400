# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP pipeline building blocks and transports."""

from .body import JsonValue, decode_json, encode_body, encode_json
from .headers import find_header, format_header_lines, merge_headers
from .httpx_transport import HttpxTransport
from .models import HeaderList, HttpRequest, HttpResponse
from .options import RESERVED_OPTIONS, merge_options
from .stub import StubTransport
from .transport import Transport, create_default_transport
from .url import build_url, encode_query

__all__ = [
    "HeaderList",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "JsonValue",
    "RESERVED_OPTIONS",
    "StubTransport",
    "Transport",
    "build_url",
    "create_default_transport",
    "decode_json",
    "encode_body",
    "encode_json",
    "encode_query",
    "find_header",
    "format_header_lines",
    "merge_headers",
    "merge_options",
]
