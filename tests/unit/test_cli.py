# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from apiclient import ApiClient, StubTransport
from apiclient.cli.main import build_parser, main

BASE = "https://jsonplaceholder.test"


def _client(stub: StubTransport) -> ApiClient:
    return ApiClient(BASE, transport=stub)


def test_build_parser_parses_repeated_options():
    args = build_parser().parse_args(
        ["get", "/posts", "-q", "userId=1", "-q", "_limit=2", "-H", "Accept: application/json", "--timeout", "2.5"]
    )
    assert args.method == "GET"
    assert args.endpoint == "/posts"
    assert args.query == [("userId", "1"), ("_limit", "2")]
    assert args.header == [("Accept", "application/json")]
    assert args.timeout == 2.5


def test_main_get_prints_decoded_json(capsys):
    stub = StubTransport()
    stub.add_json("GET", f"{BASE}/posts/1", 200, '{"id":1,"title":"x"}')
    assert main(["GET", "/posts/1"], client=_client(stub)) == 0
    assert json.loads(capsys.readouterr().out) == {"id": 1, "title": "x"}
    assert stub.closed is True


def test_main_post_with_json_data(capsys):
    stub = StubTransport()
    stub.add_json("POST", f"{BASE}/posts", 201, '{"title":"t","id":101}')
    assert main(["POST", "/posts", "--data", '{"title": "t"}'], client=_client(stub)) == 0
    assert json.loads(stub.requests[0].body) == {"title": "t"}
    assert json.loads(capsys.readouterr().out)["id"] == 101


def test_main_put_with_form_fields():
    stub = StubTransport()
    stub.add_json("PUT", f"{BASE}/posts/1", 200, "{}")
    assert main(["PUT", "/posts/1", "--form", "title=a b", "--form", "userId=1"], client=_client(stub)) == 0
    sent = stub.requests[0]
    assert sent.body == b"title=a+b&userId=1"
    assert sent.headers == [("Content-Type", "application/x-www-form-urlencoded")]


def test_main_reports_http_errors(capsys):
    stub = StubTransport()
    stub.add_json("DELETE", f"{BASE}/posts/999", 404, "{}")
    assert main(["DELETE", "/posts/999"], client=_client(stub)) == 1
    assert "HTTP Error 404" in capsys.readouterr().err


def test_main_reports_transport_errors(capsys):
    assert main(["GET", "/posts/1"], client=_client(StubTransport())) == 1
    err = capsys.readouterr().err
    assert "Network error" in err
    assert "No stubbed response configured" in err


@pytest.mark.parametrize(
    "argv",
    [
        ["GET", "/posts", "--data", "{}"],
        ["POST", "/posts", "--data", "{not json"],
        ["POST", "/posts", "-q", "a=1"],
        ["GET", "/posts", "--ca-bundle", "/definitely/missing/WE1.crt"],
        ["PATCH", "/posts"],
    ],
)
def test_main_usage_errors_exit_2(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv, client=_client(StubTransport()))
    assert excinfo.value.code == 2
