# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import json

import pytest

from reachprobe import api
from reachprobe.cli import main as cli_main
from reachprobe.cli.main import EXIT_DEGRADED, EXIT_INVALID, EXIT_OK, build_parser
from reachprobe.config import ProbeSettings
from reachprobe.errors import ErrorCategory, InvalidInputError
from reachprobe.http.adapters import StubHttpClient
from reachprobe.http.models import HttpResponse
from reachprobe.locations import Location
from reachprobe.models import Outcome
from reachprobe.runtime import ReachProbe

TARGET = "https://example.com"
TWO_LOCATIONS = [Location("Alpha", "AAA"), Location("Beta", "BBB")]


class ClosingStub(StubHttpClient):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True


def _prober(response: HttpResponse) -> ReachProbe:
    return ReachProbe(StubHttpClient({TARGET: response}), settings=ProbeSettings(), locations=TWO_LOCATIONS)


def test_build_parser():
    args = build_parser().parse_args(["example.com", "--json", "--timeout", "2.5", "--location", "Tokyo=NRT"])
    assert args.url == "example.com"
    assert args.json is True
    assert args.timeout == 2.5
    assert args.location == ["Tokyo=NRT"]


def test_reachprobe_facade_check_and_close():
    client = ClosingStub({TARGET: HttpResponse(ok=True, status_code=200)})
    with ReachProbe(client, settings=ProbeSettings(), locations=TWO_LOCATIONS) as prober:
        results = prober.check("example.com")
    assert [r.code for r in results] == ["AAA", "BBB"]
    assert client.closed is True


def test_reachprobe_facade_rejects_empty_url():
    prober = _prober(HttpResponse(ok=True, status_code=200))
    with pytest.raises(InvalidInputError):
        prober.check("  ")


def test_handle_check_missing_url():
    response = asyncio.run(api.handle_check(None))
    assert response.status == 400
    assert response.body == {"error": "URL parameter is missing"}
    assert "Access-Control-Allow-Origin" not in response.headers


def test_handle_check_success_sets_cors_and_json():
    prober = _prober(HttpResponse(ok=True, status_code=200))
    response = asyncio.run(api.handle_check("example.com", prober=prober))
    assert response.status == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.headers["Content-Type"] == "application/json"
    body = json.loads(response.json())
    assert [item["location"] for item in body] == ["Alpha", "Beta"]
    assert body[0]["outcome"] == "Success"


def test_handle_check_legacy_shape():
    prober = _prober(HttpResponse(ok=False, error_message="refused"))
    response = asyncio.run(api.handle_check("example.com", prober=prober, legacy=True))
    assert response.status == 200
    assert all(item["status"] == "Error" and item["total"] == 0 for item in response.body)


def test_handle_check_invalid_scheme_is_client_error():
    prober = _prober(HttpResponse(ok=True, status_code=200))
    response = asyncio.run(api.handle_check("ftp://example.com", prober=prober))
    assert response.status == 400


def test_handle_check_unexpected_failure_is_500():
    class Broken:
        async def acheck(self, url, *, timeout=None):  # noqa: ARG002
            raise RuntimeError("engine down")

    response = asyncio.run(api.handle_check("example.com", prober=Broken()))
    assert response.status == 500
    assert response.body == {"error": "Failed to check URL", "details": "engine down"}


def test_handle_check_bad_location_config_is_500(monkeypatch):
    monkeypatch.setenv("REACHPROBE_LOCATIONS", "garbage")
    response = asyncio.run(api.handle_check("example.com"))
    assert response.status == 500
    assert response.body["error"] == "Failed to check URL"
    assert "garbage" in response.body["details"]


def test_handle_check_unparseable_timeout_is_client_error():
    prober = _prober(HttpResponse(ok=True, status_code=200))
    response = asyncio.run(api.handle_check("example.com", prober=prober, timeout="abc"))
    assert response.status == 400
    assert "Timeout" in response.body["error"]


def _patch_client(monkeypatch, response: HttpResponse):
    stub = StubHttpClient({TARGET: response})
    monkeypatch.setattr(cli_main, "create_default_http_client", lambda settings: stub)
    return stub


def test_cli_json_output(monkeypatch, capsys):
    _patch_client(monkeypatch, HttpResponse(ok=True, status_code=200))
    code = cli_main.main(["example.com", "--json", "--location", "Alpha=AAA", "--location", "Beta=BBB"])
    assert code == EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert [item["code"] for item in payload] == ["AAA", "BBB"]


def test_cli_table_output_flags_simulated_timing(monkeypatch, capsys):
    _patch_client(monkeypatch, HttpResponse(ok=True, status_code=500))
    code = cli_main.main(["example.com", "--location", "Alpha=AAA"])
    out = capsys.readouterr().out
    assert code == EXIT_DEGRADED
    assert "https://example.com" in out
    assert Outcome.HTTP_ERROR.value in out
    assert "simulated" in out


def test_cli_invalid_url(monkeypatch, capsys):
    _patch_client(monkeypatch, HttpResponse(ok=True, status_code=200))
    code = cli_main.main(["ftp://example.com", "--location", "Alpha=AAA"])
    assert code == EXIT_INVALID
    assert "Unsupported URL scheme" in capsys.readouterr().err


def test_cli_bad_location_exits_with_usage_error(monkeypatch):
    _patch_client(monkeypatch, HttpResponse(ok=True, status_code=200))
    with pytest.raises(SystemExit) as exc_info:
        cli_main.main(["example.com", "--location", "no-code"])
    assert exc_info.value.code == 2


def test_cli_table_output_explains_failures(monkeypatch, capsys):
    refused = HttpResponse(ok=False, error_message="Connection refused", error_category=ErrorCategory.CONNECTION_ERROR)
    _patch_client(monkeypatch, refused)
    code = cli_main.main(["example.com", "--location", "Alpha=AAA"])
    out = capsys.readouterr().out
    assert code == EXIT_DEGRADED
    assert "! Network connectivity issue: Connection refused" in out
    assert "simulated" not in out
