# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""apiclient CLI: issue one JSON API call and print the decoded response."""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any

from ..client import ApiClient
from ..config import TransportSettings, load_transport_settings
from ..errors import ApiClientError, HttpStatusError, TransportError
from ..http.body import FORM_CONTENT_TYPE
from ..log import setup_logging
from ..models import SUPPORTED_METHODS


def _key_value(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    return key, value


def _header(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected 'Name: Value', got {raw!r}")
    return name.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send one request to a JSON REST API and print the decoded response")
    parser.add_argument("method", type=str.upper, choices=SUPPORTED_METHODS, help="HTTP method")
    parser.add_argument("endpoint", help="Endpoint path, relative to --base-uri")
    parser.add_argument(
        "--base-uri",
        default=os.getenv("APICLIENT_BASE_URI", ""),
        help="Base URI of the API (default: $APICLIENT_BASE_URI)",
    )
    parser.add_argument("-q", "--query", type=_key_value, action="append", default=[], help="Query parameter key=value")
    parser.add_argument("-H", "--header", type=_header, action="append", default=[], help="Header 'Name: Value'")
    body = parser.add_mutually_exclusive_group()
    body.add_argument("--data", help="JSON request body")
    body.add_argument("--form", type=_key_value, action="append", help="Form field key=value (sent form-urlencoded)")
    parser.add_argument("--ca-bundle", help="CA bundle file used to verify the server certificate")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--log-level", help="Logging level (default: $APICLIENT_LOG_LEVEL or WARNING)")
    return parser


def _print_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None, *, client: ApiClient | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.ca_bundle and not os.path.isfile(args.ca_bundle):
        parser.error(f"CA bundle file not found: {args.ca_bundle}")
    if args.method in ("GET", "DELETE") and (args.data is not None or args.form):
        parser.error(f"{args.method} requests do not take a body")
    if args.query and args.method != "GET":
        parser.error("query parameters are only sent with GET requests")

    body: Any = None
    headers: dict[str, str] = dict(args.header)
    if args.data is not None:
        try:
            body = json.loads(args.data)
        except ValueError as exc:
            parser.error(f"--data is not valid JSON: {exc}")
    elif args.form:
        body = dict(args.form)
        headers.setdefault("Content-Type", FORM_CONTENT_TYPE)

    options: dict[str, Any] = {}
    if args.timeout is not None:
        options["timeout"] = args.timeout
    if args.ca_bundle:
        options["ca_bundle"] = args.ca_bundle
    if args.insecure:
        options["verify"] = False

    settings: TransportSettings = load_transport_settings()
    api = client or ApiClient(args.base_uri, default_options=options, settings=settings)

    try:
        with api:
            if args.method == "GET":
                result = api.get(args.endpoint, dict(args.query), headers)
            elif args.method == "POST":
                result = api.post(args.endpoint, body, headers)
            elif args.method == "PUT":
                result = api.put(args.endpoint, body, headers)
            else:
                result = api.delete(args.endpoint, headers)
    except HttpStatusError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    except TransportError as exc:
        print(f"error: {exc.reason}: {exc.message}", file=sys.stderr)
        return 1
    except ApiClientError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _print_json(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
