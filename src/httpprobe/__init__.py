# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
httpprobe package entrypoint.

This package provides an HTTP health probe for service orchestration layers:
one GET per check, timed and classified as healthy, degraded or unhealthy,
with every failure of the target contained in the returned ProbeResult. HTTP
behavior is abstracted behind an injectable async client interface, and a
small registry of body formatters covers raw JSON request/response bodies.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import (
    ErrorCategory,
    FormatterError,
    HttpProbeError,
    ProbeCancelledError,
    ProbeConfigurationError,
)
from .formatters import (
    FormatterRegistry,
    RawJsonInputFormatter,
    RawJsonOutputFormatter,
    default_registry,
)
from .health import HttpHealthProbe
from .http import (
    AsyncHttpClient,
    HttpClientFactory,
    HttpRequest,
    HttpResponse,
    HttpxAsyncClient,
    SharedHttpClientFactory,
    create_default_http_client,
)
from .log import setup_logging
from .models import HealthStatus, ProbeConfig, ProbeResult
from .runtime import acheck_url, check_url
from .version import __version__

__all__ = [
    "AsyncHttpClient",
    "ErrorCategory",
    "FormatterError",
    "FormatterRegistry",
    "HealthStatus",
    "HttpClientFactory",
    "HttpHealthProbe",
    "HttpProbeError",
    "HttpRequest",
    "HttpResponse",
    "HttpxAsyncClient",
    "ProbeCancelledError",
    "ProbeConfig",
    "ProbeConfigurationError",
    "ProbeResult",
    "ProbeSettings",
    "RawJsonInputFormatter",
    "RawJsonOutputFormatter",
    "SharedHttpClientFactory",
    "acheck_url",
    "check_url",
    "create_default_http_client",
    "default_registry",
    "load_probe_settings",
    "setup_logging",
    "__version__",
]
