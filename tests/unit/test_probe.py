# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import math

import httpx
import pytest

from httpprobe.config import ProbeSettings
from httpprobe.errors import ErrorCategory, ProbeConfigurationError
from httpprobe.health.probe import HttpHealthProbe
from httpprobe.http.adapters import StubHttpClient, StubHttpClientFactory
from httpprobe.http.httpx_client import HttpxAsyncClient
from httpprobe.http.models import HttpResponse
from httpprobe.models.probe import HealthStatus

URL = "http://localhost/health/ready"


def fake_clock(*readings):
    values = iter(readings)
    return lambda: next(values)


def stub_with(response, *, delay: float = 0.0) -> StubHttpClient:
    stub = StubHttpClient()
    stub.add(URL, response, delay=delay)
    return stub


def mock_httpx_client(handler) -> HttpxAsyncClient:
    return HttpxAsyncClient(ProbeSettings(), httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def run_check(probe, cancellation=None):
    return asyncio.run(probe.check(cancellation))


@pytest.mark.parametrize("description", ["", "   ", None])
def test_construct_fails_on_invalid_description(description):
    factory = StubHttpClientFactory()
    with pytest.raises(ProbeConfigurationError) as excinfo:
        HttpHealthProbe(description, URL, client_factory=factory)
    assert excinfo.value.parameter == "description"
    assert factory.requested == []


@pytest.mark.parametrize("url", ["", None])
def test_construct_fails_on_invalid_url(url):
    with pytest.raises(ProbeConfigurationError) as excinfo:
        HttpHealthProbe("unit-tests", url, StubHttpClient())
    assert excinfo.value.parameter == "url"


def test_construct_fails_without_client_or_factory():
    with pytest.raises(ProbeConfigurationError) as excinfo:
        HttpHealthProbe("unit-tests", URL)
    assert excinfo.value.parameter == "client"


@pytest.mark.parametrize(
    ("kwargs", "parameter"),
    [
        ({"degradation_threshold": -1}, "degradation_threshold"),
        ({"cancellation_threshold": -5}, "cancellation_threshold"),
        ({"degradation_threshold": "100"}, "degradation_threshold"),
        ({"cancellation_threshold": True}, "cancellation_threshold"),
        ({"degradation_threshold": math.nan}, "degradation_threshold"),
        ({"degradation_threshold": math.inf}, "degradation_threshold"),
        ({"cancellation_threshold": math.nan}, "cancellation_threshold"),
        ({"cancellation_threshold": math.inf}, "cancellation_threshold"),
    ],
)
def test_construct_fails_on_invalid_thresholds(kwargs, parameter):
    stub = StubHttpClient()
    with pytest.raises(ProbeConfigurationError) as excinfo:
        HttpHealthProbe("unittests-1", URL, stub, **kwargs)
    assert excinfo.value.parameter == parameter
    assert isinstance(excinfo.value, ValueError)
    assert stub.requests == []


def test_factory_is_asked_for_client_named_after_description():
    stub = stub_with(HttpResponse(ok=True, status_code=200))
    factory = StubHttpClientFactory({"auth-service": stub})
    probe = HttpHealthProbe("auth-service", URL, client_factory=factory)
    result = run_check(probe)
    assert factory.requested == ["auth-service"]
    assert result.status == HealthStatus.HEALTHY


def test_defaults_and_timeout_sent_with_request():
    stub = stub_with(HttpResponse(ok=True, status_code=200))
    probe = HttpHealthProbe("unittests-1", URL, stub)
    assert probe.config.degradation_threshold == 1000
    assert probe.config.cancellation_threshold == 2000
    run_check(probe)
    request = stub.requests[0]
    assert request.method == "GET"
    assert request.url == URL
    assert request.timeout == 2.0


def test_shared_client_keeps_per_probe_timeouts():
    stub = StubHttpClient()
    stub.add("http://a/health", HttpResponse(ok=True, status_code=200))
    stub.add("http://b/health", HttpResponse(ok=True, status_code=200))
    fast = HttpHealthProbe("a", "http://a/health", stub, cancellation_threshold=500)
    slow = HttpHealthProbe("b", "http://b/health", stub, cancellation_threshold=3000)

    async def _run():
        return await asyncio.gather(fast.check(), slow.check())

    results = asyncio.run(_run())
    assert [r.status for r in results] == [HealthStatus.HEALTHY, HealthStatus.HEALTHY]
    timeouts = {request.url: request.timeout for request in stub.requests}
    assert timeouts == {"http://a/health": 0.5, "http://b/health": 3.0}


def test_healthy_scenario_reports_elapsed_time():
    stub = stub_with(HttpResponse(ok=True, status_code=200))
    probe = HttpHealthProbe("auth-service", URL, stub, degradation_threshold=1000, clock=fake_clock(100.0, 100.05))
    result = run_check(probe)
    assert result.status == HealthStatus.HEALTHY
    assert result.is_healthy is True
    assert result.elapsed_ms == 50
    assert result.http_status_code == 200
    assert "auth-service probe completed in 50 ms" in result.message
    assert result.error_kind is None


def test_elapsed_equal_to_threshold_is_still_healthy():
    stub = stub_with(HttpResponse(ok=True, status_code=204))
    probe = HttpHealthProbe("auth-service", URL, stub, degradation_threshold=1000, clock=fake_clock(0.0, 1.0))
    result = run_check(probe)
    assert result.status == HealthStatus.HEALTHY
    assert result.elapsed_ms <= probe.config.degradation_threshold


def test_degraded_scenario():
    stub = stub_with(HttpResponse(ok=True, status_code=200))
    probe = HttpHealthProbe("auth-service", URL, stub, degradation_threshold=1000, clock=fake_clock(0.0, 1.5))
    result = run_check(probe)
    assert result.status == HealthStatus.DEGRADED
    assert result.elapsed_ms == 1500
    assert result.http_status_code == 200
    assert "auth-service probe took more than 1000 ms" in result.message


def test_degraded_with_real_delay():
    stub = stub_with(HttpResponse(ok=True, status_code=200), delay=0.05)
    probe = HttpHealthProbe("unittests-2", URL, stub, degradation_threshold=1, cancellation_threshold=150_000)
    result = run_check(probe)
    assert result.status == HealthStatus.DEGRADED
    assert result.elapsed_ms >= 1


@pytest.mark.parametrize("status_code", [503, 500, 404, 302])
def test_non_success_status_is_unhealthy_regardless_of_time(status_code):
    stub = stub_with(HttpResponse(ok=True, status_code=status_code))
    probe = HttpHealthProbe("auth-service", URL, stub, clock=fake_clock(0.0, 0.001))
    result = run_check(probe)
    assert result.status == HealthStatus.UNHEALTHY
    assert result.http_status_code == status_code
    assert f"HTTP {status_code}" in result.message
    assert result.message == f"auth-service probe failed: HTTP {status_code}"
    assert result.error_kind is None


def test_httpx_503_is_unhealthy():
    probe = HttpHealthProbe("unittests-3", URL, mock_httpx_client(lambda request: httpx.Response(503, json={})))
    result = run_check(probe)
    assert result.status == HealthStatus.UNHEALTHY
    assert result.http_status_code == 503
    assert "HTTP 503" in result.message


def test_httpx_connection_refused_is_unhealthy_without_status():
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    probe = HttpHealthProbe("unittests-4", URL, mock_httpx_client(handler))
    result = run_check(probe)
    assert result.status == HealthStatus.UNHEALTHY
    assert result.http_status_code is None
    assert result.error_kind == ErrorCategory.CONNECTION_ERROR
    assert result.error_type == "ConnectError"
    assert result.elapsed_ms >= 0
    assert "unittests-4 probe failed due to exception" == result.message


def test_httpx_timeout_scenario():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    probe = HttpHealthProbe("auth-service", URL, mock_httpx_client(handler), cancellation_threshold=2000)
    result = run_check(probe)
    assert result.status == HealthStatus.UNHEALTHY
    assert "failed due to exception" in result.message
    assert result.http_status_code is None
    assert result.error_kind == ErrorCategory.TIMEOUT


def test_zero_cancellation_threshold_abandons_request_at_once():
    stub = stub_with(HttpResponse(ok=True, status_code=200), delay=0.3)
    probe = HttpHealthProbe("auth-service", URL, stub, cancellation_threshold=0, clock=fake_clock(0.0, 0.0))
    result = run_check(probe)
    assert result.status == HealthStatus.UNHEALTHY
    assert result.error_kind == ErrorCategory.TIMEOUT
    assert result.http_status_code is None
    assert "failed due to exception" in result.message


def test_hard_deadline_aborts_slow_client():
    stub = stub_with(HttpResponse(ok=True, status_code=200), delay=5.0)
    probe = HttpHealthProbe("auth-service", URL, stub, cancellation_threshold=20)
    result = run_check(probe)
    assert result.status == HealthStatus.UNHEALTHY
    assert result.error_kind == ErrorCategory.TIMEOUT
    assert result.error_type == "TimeoutError"
    assert result.http_status_code is None
    assert 0 <= result.elapsed_ms < 5000


@pytest.mark.parametrize(
    ("exc", "category"),
    [
        (RuntimeError("boom"), ErrorCategory.UNKNOWN_ERROR),
        (ConnectionRefusedError("refused"), ErrorCategory.CONNECTION_ERROR),
        (TimeoutError("slow"), ErrorCategory.TIMEOUT),
        (httpx.ReadError("reset"), ErrorCategory.CONNECTION_ERROR),
    ],
)
def test_raised_exceptions_never_escape(exc, category):
    probe = HttpHealthProbe("unittests-4", URL, stub_with(exc), degradation_threshold=100, cancellation_threshold=200)
    result = run_check(probe)
    assert result.status == HealthStatus.UNHEALTHY
    assert result.error_kind == category
    assert result.error_type == type(exc).__name__
    assert result.error_message == str(exc)
    assert result.to_dict()["error_kind"] == category.value


def test_cancellation_already_signalled():
    stub = stub_with(HttpResponse(ok=True, status_code=200), delay=5.0)
    probe = HttpHealthProbe("auth-service", URL, stub, cancellation_threshold=10_000)

    async def _run():
        event = asyncio.Event()
        event.set()
        return await probe.check(event)

    result = asyncio.run(_run())
    assert result.status == HealthStatus.UNHEALTHY
    assert result.error_kind == ErrorCategory.CANCELLED
    assert result.error_type == "ProbeCancelledError"
    assert result.http_status_code is None


def test_cancellation_during_request():
    stub = stub_with(HttpResponse(ok=True, status_code=200), delay=5.0)
    probe = HttpHealthProbe("auth-service", URL, stub, cancellation_threshold=10_000)

    async def _run():
        event = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, event.set)
        return await probe.check(event)

    result = asyncio.run(_run())
    assert result.status == HealthStatus.UNHEALTHY
    assert result.error_kind == ErrorCategory.CANCELLED
    assert "failed due to exception" in result.message
    assert result.elapsed_ms < 5000


def test_unset_cancellation_does_not_interfere():
    stub = stub_with(HttpResponse(ok=True, status_code=200))
    probe = HttpHealthProbe("auth-service", URL, stub)

    async def _run():
        return await probe.check(asyncio.Event())

    assert asyncio.run(_run()).status == HealthStatus.HEALTHY


def test_unconfigured_stub_transport_failure_is_unhealthy():
    probe = HttpHealthProbe("unit-tests", "http://unknown/health", StubHttpClient())
    result = run_check(probe)
    assert result.status == HealthStatus.UNHEALTHY
    assert result.error_kind == ErrorCategory.UNKNOWN_ERROR
    assert result.error_message == "No stubbed response configured"


def test_result_to_dict_shape():
    stub = stub_with(HttpResponse(ok=True, status_code=200))
    probe = HttpHealthProbe("auth-service", URL, stub, clock=fake_clock(0.0, 0.01))
    data = run_check(probe).to_dict()
    assert data == {
        "status": "healthy",
        "elapsed_ms": 10,
        "message": "auth-service probe completed in 10 ms",
        "description": "auth-service",
        "url": URL,
        "http_status_code": 200,
    }
