"""
Process-wide debug switch, compile tracing and timing stats.

Tracing goes through the ``dynoexpr`` logger at DEBUG level and is only
emitted while the debug flag is on.
"""

import logging
import threading
import time
from abc import ABC
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

IS_DEBUGGING = False

logger = logging.getLogger("dynoexpr")


def get_debug_state() -> bool:
    return IS_DEBUGGING


def set_debug_state(state: bool) -> None:
    global IS_DEBUGGING
    IS_DEBUGGING = bool(state)


def debug_log(message: str, *args) -> None:
    if IS_DEBUGGING:
        logger.debug(message, *args)


class Debug(ABC):
    """Mixin accumulating wall-clock timings of debugged calls."""

    def __init__(self):
        self._stats_lock = threading.Lock()
        self.reset_stats()

    @contextmanager
    def timed(self) -> Iterator[None]:
        started = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - started
            with self._stats_lock:
                self.last_elapsed = elapsed
                self.execution_time += elapsed
                self.call_count += 1

    def get_stats(self) -> Dict[str, float]:
        with self._stats_lock:
            return {
                "execution_time": self.execution_time,
                "call_count": self.call_count,
                "avg_time": self.execution_time / max(1, self.call_count),
                "last_time": self.last_elapsed,
            }

    def reset_stats(self) -> None:
        with self._stats_lock:
            self.execution_time = 0.0
            self.call_count = 0
            self.last_elapsed = 0.0


class DebuggingContext:
    """Temporarily switch debugging on or off.

    ``log_level`` optionally overrides the ``dynoexpr`` logger level for the
    duration of the block.
    """

    def __init__(self, enable: bool, *, log_level: Optional[int] = None):
        self.enable = enable
        self.log_level = log_level
        self._previous_state = False
        self._previous_level = logging.NOTSET

    def __enter__(self) -> "DebuggingContext":
        self._previous_state = get_debug_state()
        set_debug_state(self.enable)
        if self.log_level is not None:
            self._previous_level = logger.level
            logger.setLevel(self.log_level)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        set_debug_state(self._previous_state)
        if self.log_level is not None:
            logger.setLevel(self._previous_level)


__all__ = [
    "logger",
    "get_debug_state",
    "set_debug_state",
    "debug_log",
    "Debug",
    "DebuggingContext",
]
