# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Monotonic stopwatch used to time probe requests."""

from __future__ import annotations

import time
from collections.abc import Callable
from types import TracebackType

Clock = Callable[[], float]


class Stopwatch:
    """
    Context-managed stopwatch over a seconds-based monotonic clock.

    Leaving the `with` block stops the watch whatever the exit path, so the
    measured duration is available after success, failure and cancellation alike.
    """

    def __init__(self, clock: Clock = time.perf_counter):
        self._clock = clock
        self._started: float | None = None
        self._stopped: float | None = None

    def start(self) -> Stopwatch:
        self._started = self._clock()
        self._stopped = None
        return self

    def stop(self) -> None:
        if self._started is not None and self._stopped is None:
            self._stopped = self._clock()

    @property
    def running(self) -> bool:
        return self._started is not None and self._stopped is None

    @property
    def elapsed_seconds(self) -> float:
        if self._started is None:
            return 0.0
        end = self._stopped if self._stopped is not None else self._clock()
        return max(0.0, end - self._started)

    @property
    def elapsed_ms(self) -> int:
        """Elapsed time rounded to whole milliseconds."""
        return int(round(self.elapsed_seconds * 1000))

    def __enter__(self) -> Stopwatch:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()


__all__ = ["Clock", "Stopwatch"]
