# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process AsyncHttpClient implementations."""

from __future__ import annotations

import asyncio

from .client import AsyncHttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(AsyncHttpClient):
    """
    Deterministic, programmable AsyncHttpClient for tests.

    Each URL maps to a canned response or an exception to raise. An optional
    per-URL delay is awaited first, which lets callers exercise timeouts and
    cancellation without a network.
    """

    def __init__(self, responses: dict[str, HttpResponse | BaseException] | None = None):
        self._responses: dict[str, HttpResponse | BaseException] = dict(responses or {})
        self._delays: dict[str, float] = {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | BaseException, *, delay: float = 0.0) -> None:
        self._responses[url] = response
        if delay:
            self._delays[url] = delay

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        delay = self._delays.get(request.url)
        if delay:
            await asyncio.sleep(delay)
        outcome = self._responses.get(request.url)
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome is not None:
            return outcome
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    async def aclose(self) -> None:
        self.closed = True


class StubHttpClientFactory:
    """Factory returning pre-registered stub clients by name."""

    def __init__(self, clients: dict[str, AsyncHttpClient] | None = None):
        self._clients = dict(clients or {})
        self.requested: list[str] = []

    def add(self, name: str, client: AsyncHttpClient) -> None:
        self._clients[name] = client

    def create_client(self, name: str) -> AsyncHttpClient:
        self.requested.append(name)
        try:
            return self._clients[name]
        except KeyError:
            raise LookupError(f"No client registered for {name!r}") from None
