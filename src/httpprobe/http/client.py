# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factories."""

from typing import Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import HttpRequest, HttpResponse


class AsyncHttpClient(Protocol):
    """Minimal protocol for issuing HTTP requests without blocking the event loop."""

    async def request(self, request: HttpRequest) -> HttpResponse: ...

    async def aclose(self) -> None:  # pragma: no cover - optional for adapters
        ...


class HttpClientFactory(Protocol):
    """Hands out clients by logical name (one name per probed dependency)."""

    def create_client(self, name: str) -> AsyncHttpClient: ...


def create_default_http_client(settings: ProbeSettings | None = None) -> AsyncHttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxAsyncClient

    return HttpxAsyncClient(settings or load_probe_settings())
