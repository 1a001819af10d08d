# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for httpprobe."""

import math
import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"httpprobe/{__version__}"
DEFAULT_DEGRADATION_THRESHOLD_MS = 1000
DEFAULT_CANCELLATION_THRESHOLD_MS = 2000


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _threshold_env(name: str, default: float) -> float:
    value = _float_env(name, default)
    return value if math.isfinite(value) and value >= 0 else default


@dataclass
class ProbeSettings:
    """Probe thresholds and HTTP client defaults."""

    degradation_threshold_ms: float = DEFAULT_DEGRADATION_THRESHOLD_MS
    cancellation_threshold_ms: float = DEFAULT_CANCELLATION_THRESHOLD_MS
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = 64 * 1024

    @property
    def timeout(self) -> float:
        """Client timeout in seconds."""
        return self.cancellation_threshold_ms / 1000.0

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("HTTPPROBE_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            degradation_threshold_ms=_threshold_env("HTTPPROBE_DEGRADATION_THRESHOLD_MS", cls.degradation_threshold_ms),
            cancellation_threshold_ms=_threshold_env("HTTPPROBE_CANCELLATION_THRESHOLD_MS", cls.cancellation_threshold_ms),
            user_agent=os.getenv("HTTPPROBE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("HTTPPROBE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("HTTPPROBE_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
