# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by probes and clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCategory, categorize_exception

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by AsyncHttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None
    allow_redirects: bool = True


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    Transport failures are reported by value: `ok=False` with no status code and
    the error fields populated. A response with a status code always has `ok=True`,
    whatever the status; success-range decisions belong to the caller.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        """True for a 2xx status."""
        return self.status_code is not None and 200 <= self.status_code <= 299

    @classmethod
    def from_exception(cls, exc: BaseException, *, category: ErrorCategory | None = None) -> HttpResponse:
        return cls(
            ok=False,
            error_message=str(exc),
            error_type=type(exc).__name__,
            error_category=category or categorize_exception(exc),
        )
