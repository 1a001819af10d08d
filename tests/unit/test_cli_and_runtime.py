# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import json

import pytest

from httpprobe.cli import main as cli
from httpprobe.config import ProbeSettings
from httpprobe.errors import ErrorCategory
from httpprobe.http.adapters import StubHttpClient
from httpprobe.http.models import HttpResponse
from httpprobe.models.probe import HealthStatus, ProbeResult
from httpprobe.runtime import acheck_url, check_url


def _result(status: HealthStatus, **kwargs) -> ProbeResult:
    base = {
        "status": status,
        "elapsed_ms": 12,
        "message": "auth-service probe completed in 12 ms",
        "description": "auth-service",
        "url": "http://auth/health",
    }
    base.update(kwargs)
    return ProbeResult(**base)


def test_build_parser():
    args = cli.build_parser().parse_args(
        ["http://auth/health", "--json", "--description", "auth-service", "--degradation-threshold", "250"]
    )
    assert args.url == "http://auth/health"
    assert args.json is True
    assert args.description == "auth-service"
    assert args.degradation_threshold == 250.0
    assert args.cancellation_threshold is None


@pytest.mark.parametrize(
    ("status", "code"),
    [(HealthStatus.HEALTHY, 0), (HealthStatus.DEGRADED, 1), (HealthStatus.UNHEALTHY, 2)],
)
def test_main_exit_code_follows_status(monkeypatch, capsys, status, code):
    monkeypatch.setattr(cli, "setup_logging", lambda *_, **__: None)
    monkeypatch.setattr(cli, "check_url", lambda url, **kwargs: _result(status, http_status_code=200))
    assert cli.main(["http://auth/health", "--json"]) == code
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == status.value
    assert payload["http_status_code"] == 200


def test_main_passes_threshold_overrides(monkeypatch):
    captured = {}

    def fake_check_url(url, *, description=None, settings=None):
        captured.update(url=url, description=description, settings=settings)
        return _result(HealthStatus.HEALTHY)

    monkeypatch.setattr(cli, "setup_logging", lambda *_, **__: None)
    monkeypatch.setattr(cli, "check_url", fake_check_url)
    cli.main(["http://auth/health", "--degradation-threshold", "5", "--cancellation-threshold", "50", "--ignore-ssl-errors"])
    settings = captured["settings"]
    assert settings.degradation_threshold_ms == 5
    assert settings.cancellation_threshold_ms == 50
    assert settings.verify_ssl is False
    assert captured["description"] is None


@pytest.mark.parametrize("value", ["-1", "nan", "inf"])
def test_main_reports_configuration_errors(monkeypatch, capsys, value):
    monkeypatch.setattr(cli, "setup_logging", lambda *_, **__: None)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["http://auth/health", "--degradation-threshold", value])
    assert excinfo.value.code == 2
    assert "degradation_threshold" in capsys.readouterr().err


def test_pretty_print_includes_error_details(capsys):
    result = _result(
        HealthStatus.UNHEALTHY,
        message="auth-service probe failed due to exception",
        error_kind=ErrorCategory.TIMEOUT,
        error_type="ConnectTimeout",
        error_message="timed out",
    )
    cli._pretty_print(result)
    output = capsys.readouterr().out
    assert "Status: unhealthy" in output
    assert "failed due to exception" in output
    assert "TIMEOUT" in output
    assert "ConnectTimeout: timed out" in output
    assert "HTTP status" not in output


def test_acheck_url_defaults_description_to_host():
    stub = StubHttpClient({"http://auth.internal:8080/health": HttpResponse(ok=True, status_code=200)})
    result = asyncio.run(acheck_url("http://auth.internal:8080/health", settings=ProbeSettings(), client=stub))
    assert result.description == "auth.internal"
    assert result.status == HealthStatus.HEALTHY
    assert stub.closed is False


def test_check_url_closes_the_client_it_creates(monkeypatch):
    stub = StubHttpClient({"http://auth/health": HttpResponse(ok=True, status_code=503)})
    monkeypatch.setattr("httpprobe.runtime.create_default_http_client", lambda settings: stub)
    result = check_url("http://auth/health", description="auth-service", settings=ProbeSettings())
    assert result.status == HealthStatus.UNHEALTHY
    assert "auth-service probe failed: HTTP 503" == result.message
    assert stub.closed is True
    assert stub.requests[0].timeout == 2.0
