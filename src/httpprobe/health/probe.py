# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
HTTP liveness/readiness probe.

One GET per call, timed, classified as healthy, degraded or unhealthy. Every
failure of the target (transport error, timeout, caller cancellation, error
status) is returned as a ProbeResult; only construction can raise.
"""

from __future__ import annotations

import asyncio
import logging
import time

from ..config import DEFAULT_CANCELLATION_THRESHOLD_MS, DEFAULT_DEGRADATION_THRESHOLD_MS
from ..errors import ErrorCategory, ProbeCancelledError, ProbeConfigurationError, categorize_exception
from ..http.client import AsyncHttpClient, HttpClientFactory
from ..http.models import HttpRequest, HttpResponse
from ..models.probe import HealthStatus, ProbeConfig, ProbeResult
from ..utils.timing import Clock, Stopwatch

logger = logging.getLogger(__name__)


def _format_ms(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class HttpHealthProbe:
    """
    Health check for a dependency reachable over HTTP.

    Either pass a ready `client`, or a `client_factory` that is asked for the
    client named after `description`. The client is used as-is; the timeout is
    sent with each request, so sharing a client between probes is safe.
    """

    def __init__(
        self,
        description: str,
        url: str,
        client: AsyncHttpClient | None = None,
        *,
        client_factory: HttpClientFactory | None = None,
        degradation_threshold: float = DEFAULT_DEGRADATION_THRESHOLD_MS,
        cancellation_threshold: float = DEFAULT_CANCELLATION_THRESHOLD_MS,
        clock: Clock = time.perf_counter,
    ):
        self.config = ProbeConfig(
            description=description,
            url=url,
            degradation_threshold=degradation_threshold,
            cancellation_threshold=cancellation_threshold,
        )
        if client is None:
            if client_factory is None:
                raise ProbeConfigurationError("client", "a client or a client_factory is required")
            client = client_factory.create_client(description)
        self._client = client
        self._clock = clock

    @property
    def description(self) -> str:
        return self.config.description

    @property
    def url(self) -> str:
        return self.config.url

    async def check(self, cancellation: asyncio.Event | None = None) -> ProbeResult:
        """
        Probe the target once.

        `cancellation` is an optional event; once set, the in-flight request is
        abandoned and the result is unhealthy with `ErrorCategory.CANCELLED`.
        """
        request = HttpRequest(url=self.config.url, method="GET", timeout=self.config.timeout_seconds)
        response: HttpResponse | None = None
        failure: BaseException | None = None

        with Stopwatch(self._clock) as stopwatch:
            try:
                response = await self._send(request, cancellation)
            except Exception as exc:  # noqa: BLE001
                failure = exc

        result = self._classify(stopwatch.elapsed_ms, response, failure)
        self._log(result)
        return result

    async def _send(self, request: HttpRequest, cancellation: asyncio.Event | None) -> HttpResponse:
        send_task = asyncio.ensure_future(self._client.request(request))
        waiters: set[asyncio.Future] = {send_task}
        cancel_task: asyncio.Future | None = None
        if cancellation is not None:
            cancel_task = asyncio.ensure_future(cancellation.wait())
            waiters.add(cancel_task)

        try:
            done, pending = await asyncio.wait(
                waiters,
                timeout=self.config.timeout_seconds,
                return_when=asyncio.FIRST_COMPLETED,
            )
        except BaseException:
            for task in waiters:
                task.cancel()
            raise

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        if send_task in done:
            return send_task.result()
        if cancel_task is not None and cancel_task in done:
            raise ProbeCancelledError(f"{self.config.description} probe cancelled by caller")
        raise TimeoutError(
            f"{self.config.description} probe exceeded {_format_ms(self.config.cancellation_threshold)} ms"
        )

    def _classify(
        self,
        elapsed_ms: int,
        response: HttpResponse | None,
        failure: BaseException | None,
    ) -> ProbeResult:
        description = self.config.description
        common = {"elapsed_ms": elapsed_ms, "description": description, "url": self.config.url}

        if failure is None and response is not None and response.status_code is None:
            # Transport failure reported by value rather than raised.
            return ProbeResult(
                status=HealthStatus.UNHEALTHY,
                message=f"{description} probe failed due to exception",
                error_kind=response.error_category or ErrorCategory.UNKNOWN_ERROR,
                error_type=response.error_type,
                error_message=response.error_message,
                **common,
            )

        if failure is not None or response is None:
            return ProbeResult(
                status=HealthStatus.UNHEALTHY,
                message=f"{description} probe failed due to exception",
                error_kind=categorize_exception(failure) if failure is not None else ErrorCategory.UNKNOWN_ERROR,
                error_type=type(failure).__name__ if failure is not None else None,
                error_message=str(failure) if failure is not None else "client returned no response",
                **common,
            )

        status_code = response.status_code
        if not response.is_success:
            return ProbeResult(
                status=HealthStatus.UNHEALTHY,
                message=f"{description} probe failed: HTTP {status_code}",
                http_status_code=status_code,
                **common,
            )

        if elapsed_ms > self.config.degradation_threshold:
            return ProbeResult(
                status=HealthStatus.DEGRADED,
                message=f"{description} probe took more than {_format_ms(self.config.degradation_threshold)} ms",
                http_status_code=status_code,
                **common,
            )

        return ProbeResult(
            status=HealthStatus.HEALTHY,
            message=f"{description} probe completed in {elapsed_ms} ms",
            http_status_code=status_code,
            **common,
        )

    def _log(self, result: ProbeResult) -> None:
        if result.status == HealthStatus.HEALTHY:
            logger.debug("%s (%s)", result.message, self.config.url)
        elif result.status == HealthStatus.DEGRADED:
            logger.info("%s (%s, %d ms)", result.message, self.config.url, result.elapsed_ms)
        elif result.error_kind is not None:
            logger.warning("%s (%s): %s %s", result.message, self.config.url, result.error_kind.value, result.error_message)
        else:
            logger.warning("%s (%s)", result.message, self.config.url)

    def __repr__(self) -> str:
        return f"HttpHealthProbe(description={self.config.description!r}, url={self.config.url!r})"


__all__ = ["HttpHealthProbe"]
