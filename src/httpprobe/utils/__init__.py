# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .timing import Clock, Stopwatch

__all__ = ["Clock", "Stopwatch"]
