# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient, StubHttpClientFactory
from .client import AsyncHttpClient, HttpClientFactory, create_default_http_client
from .httpx_client import HttpxAsyncClient, SharedHttpClientFactory
from .models import Headers, HttpRequest, HttpResponse

__all__ = [
    "AsyncHttpClient",
    "Headers",
    "HttpClientFactory",
    "HttpRequest",
    "HttpResponse",
    "HttpxAsyncClient",
    "SharedHttpClientFactory",
    "StubHttpClient",
    "StubHttpClientFactory",
    "create_default_http_client",
]
