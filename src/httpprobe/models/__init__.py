# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for httpprobe."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .probe import HealthStatus, ProbeConfig, ProbeResult

__all__ = [
    "HealthStatus",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProbeConfig",
    "ProbeResult",
]
