# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request body encoding and response body decoding."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from typing import Any, Union

from ..errors import InvalidRequestError, ResponseDecodeError
from .headers import CONTENT_TYPE, find_header
from .models import HeaderList
from .url import encode_query

JsonValue = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _check_json(value: Any, path: str = "$", _stack: set[int] | None = None) -> None:
    if value is None or isinstance(value, (bool, int, str)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidRequestError(f"Body value at {path} is not a finite number")
        return
    is_sequence = isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray))
    if not isinstance(value, Mapping) and not is_sequence:
        raise InvalidRequestError(f"Body value at {path} of type {type(value).__name__} is not JSON-encodable")

    # Tracks the current path only; a container repeated in sibling branches is not a cycle.
    if _stack is None:
        _stack = set()
    obj_id = id(value)
    if obj_id in _stack:
        raise InvalidRequestError(f"circular reference at {path}")
    _stack.add(obj_id)
    try:
        if isinstance(value, Mapping):
            for key, item in value.items():
                if not isinstance(key, str):
                    raise InvalidRequestError(f"Body key {key!r} at {path} is not a string")
                _check_json(item, f"{path}.{key}", _stack)
        else:
            for position, item in enumerate(value):
                _check_json(item, f"{path}[{position}]", _stack)
    finally:
        _stack.discard(obj_id)


def _to_builtin(value: Any) -> Any:
    # Only reached for Mapping/Sequence types json does not know natively.
    if isinstance(value, Mapping):
        return dict(value)
    return list(value)


def encode_json(value: JsonValue) -> bytes:
    """Serialize a JSON value compactly as UTF-8, rejecting non-JSON types."""
    _check_json(value)
    return json.dumps(
        value,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_to_builtin,
    ).encode("utf-8")


def encode_body(body: Any, headers: HeaderList) -> tuple[bytes, HeaderList]:
    """
    Encode ``body`` according to the effective Content-Type of ``headers``.

    Returns the body bytes and the outgoing header list. A
    ``Content-Type: application/json`` header is appended only when JSON is
    produced and no content type was set. An explicit non-form content type is
    kept as-is while the body is still JSON-encoded.
    """
    explicit = find_header(headers, CONTENT_TYPE)
    content_type = explicit if explicit is not None else JSON_CONTENT_TYPE

    if FORM_CONTENT_TYPE in content_type.lower():
        if isinstance(body, (bytes, bytearray)):
            return bytes(body), list(headers)
        if isinstance(body, str):
            return body.encode("utf-8"), list(headers)
        if isinstance(body, Sequence):
            body = {str(position): item for position, item in enumerate(body)}
        if not isinstance(body, Mapping):
            raise InvalidRequestError("Form-encoded bodies must be a mapping, sequence, str or bytes")
        return encode_query(body).encode("utf-8"), list(headers)

    encoded = encode_json(body)
    out = list(headers)
    if explicit is None:
        out.append((CONTENT_TYPE, JSON_CONTENT_TYPE))
    return encoded, out


def decode_json(text: str, status_code: int) -> JsonValue:
    """
    Decode a successful response body.

    An empty body decodes to None; anything that is not valid JSON raises
    ResponseDecodeError.
    """
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError as exc:
        raise ResponseDecodeError(status_code, text, str(exc)) from exc


def decode_error_payload(text: str) -> JsonValue:
    """Best-effort decode of an error body; returns None when it is not JSON."""
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


__all__ = [
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "JsonValue",
    "decode_error_payload",
    "decode_json",
    "encode_body",
    "encode_json",
]
