# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for httpprobe."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("HTTPPROBE_LOG_LEVEL") or "WARNING").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | None = None, *, force: bool = False) -> None:
    """
    Configure root logging for CLI use.

    Library code only creates module loggers; handlers are left to the host
    unless it calls this helper. The environment is read at call time so a
    `HTTPPROBE_LOG_LEVEL` set after import still applies.
    """
    logging.basicConfig(level=_resolve_level(level), format=LOG_FORMAT, force=force)


__all__ = ["LOG_FORMAT", "setup_logging"]
