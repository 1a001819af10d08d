# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed AsyncHttpClient implementation."""

from __future__ import annotations

import httpx

from ..config import ProbeSettings, load_probe_settings
from .client import AsyncHttpClient
from .models import HttpRequest, HttpResponse


def _build_httpx_client(settings: ProbeSettings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        follow_redirects=settings.allow_redirects,
        timeout=settings.timeout,
        verify=settings.verify_ssl,
    )


class HttpxAsyncClient(AsyncHttpClient):
    """
    Asynchronous httpx client wrapper.

    The wrapped `httpx.AsyncClient` is never reconfigured: timeouts travel with
    each request, so one pooled client can back probes with different thresholds.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        client: httpx.AsyncClient | None = None,
        *,
        name: str | None = None,
        owns_client: bool = True,
    ):
        self.settings = settings or load_probe_settings()
        self.name = name
        self._client = client or _build_httpx_client(self.settings)
        self._owns_client = owns_client

    async def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        max_body_bytes = self.settings.max_body_bytes

        try:
            async with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            ) as resp:
                content = bytearray()
                truncated = False
                async for chunk in resp.aiter_bytes():
                    remaining = max_body_bytes - len(content)
                    if len(chunk) > remaining:
                        content.extend(chunk[:remaining])
                        truncated = True
                        break
                    content.extend(chunk)

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=dict(resp.headers),
                text=text,
                content=bytes(content),
                url=str(resp.url),
                meta={
                    "client": self.name,
                    "body_truncated": truncated,
                    "body_bytes_read": len(content),
                },
            )
        except Exception as exc:  # noqa: BLE001
            return HttpResponse.from_exception(exc)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class SharedHttpClientFactory:
    """
    Named clients over one pooled `httpx.AsyncClient`.

    The pool is the only state shared between the clients it hands out and is
    closed once through `aclose()`; closing an individual named client is a no-op.
    """

    def __init__(self, settings: ProbeSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_probe_settings()
        self._client = client or _build_httpx_client(self.settings)
        self._named: dict[str, HttpxAsyncClient] = {}

    def create_client(self, name: str) -> HttpxAsyncClient:
        named = self._named.get(name)
        if named is None:
            named = HttpxAsyncClient(self.settings, self._client, name=name, owns_client=False)
            self._named[name] = named
        return named

    async def aclose(self) -> None:
        self._named.clear()
        await self._client.aclose()

    async def __aenter__(self) -> SharedHttpClientFactory:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()
