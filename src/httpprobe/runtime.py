# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""One-shot probe helpers for scripts and the CLI."""

from __future__ import annotations

import asyncio
from urllib.parse import urlsplit

from .config import ProbeSettings, load_probe_settings
from .health.probe import HttpHealthProbe
from .http.client import AsyncHttpClient, create_default_http_client
from .models.probe import ProbeResult


def _default_description(url: str) -> str:
    try:
        host = urlsplit(url).hostname
    except ValueError:
        host = None
    return host or "target"


async def acheck_url(
    url: str,
    *,
    description: str | None = None,
    settings: ProbeSettings | None = None,
    cancellation: asyncio.Event | None = None,
    client: AsyncHttpClient | None = None,
) -> ProbeResult:
    """
    Probe `url` once with thresholds taken from `settings` (or the environment).

    A client is created and closed around the call unless one is passed in.
    """
    settings = settings or load_probe_settings()
    owns_client = client is None
    http_client = client or create_default_http_client(settings)
    try:
        probe = HttpHealthProbe(
            description or _default_description(url),
            url,
            http_client,
            degradation_threshold=settings.degradation_threshold_ms,
            cancellation_threshold=settings.cancellation_threshold_ms,
        )
        return await probe.check(cancellation)
    finally:
        if owns_client:
            await http_client.aclose()


def check_url(
    url: str,
    *,
    description: str | None = None,
    settings: ProbeSettings | None = None,
) -> ProbeResult:
    """Blocking wrapper around `acheck_url` for code without an event loop."""
    return asyncio.run(acheck_url(url, description=description, settings=settings))


__all__ = ["acheck_url", "check_url"]
