# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe configuration and result models."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..config import DEFAULT_CANCELLATION_THRESHOLD_MS, DEFAULT_DEGRADATION_THRESHOLD_MS
from ..errors import ErrorCategory, ProbeConfigurationError


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


def _require_text(parameter: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ProbeConfigurationError(parameter, "must be a non-empty string")
    return value


def _require_threshold(parameter: str, value: Any) -> float:
    # bool is an int subclass; True/False as milliseconds is always a caller bug.
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ProbeConfigurationError(parameter, "must be a number of milliseconds")
    if not math.isfinite(value):
        raise ProbeConfigurationError(parameter, "must be a finite number")
    if value < 0:
        raise ProbeConfigurationError(parameter, "must be greater than or equal to zero")
    return value


@dataclass(frozen=True)
class ProbeConfig:
    """
    Immutable settings of one HTTP health probe.

    Thresholds are milliseconds. `cancellation_threshold` is the hard request
    timeout; zero means any request still in flight is abandoned at once.
    """

    description: str
    url: str
    degradation_threshold: float = DEFAULT_DEGRADATION_THRESHOLD_MS
    cancellation_threshold: float = DEFAULT_CANCELLATION_THRESHOLD_MS

    def __post_init__(self) -> None:
        _require_text("description", self.description)
        _require_text("url", self.url)
        _require_threshold("degradation_threshold", self.degradation_threshold)
        _require_threshold("cancellation_threshold", self.cancellation_threshold)

    @property
    def timeout_seconds(self) -> float:
        return self.cancellation_threshold / 1000.0


@dataclass(frozen=True)
class ProbeResult:
    status: HealthStatus
    elapsed_ms: int
    message: str
    description: str
    url: str
    http_status_code: int | None = None
    error_kind: ErrorCategory | None = None
    error_type: str | None = None
    error_message: str | None = None

    @property
    def is_healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": self.status.value,
            "elapsed_ms": self.elapsed_ms,
            "message": self.message,
            "description": self.description,
            "url": self.url,
        }
        if self.http_status_code is not None:
            data["http_status_code"] = self.http_status_code
        if self.error_kind is not None:
            data["error_kind"] = self.error_kind.value
            data["error_type"] = self.error_type
            data["error_message"] = self.error_message
        return data
