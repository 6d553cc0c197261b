"""Fire-and-forget task runners for advisory side effects.

The repository hands cache write-through work to a runner and never looks
at the result. Both runners log and drop any exception the task raises.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, List, Optional

_log = logging.getLogger(__name__)


def _run_swallowing(fn: Callable[..., Any], args: tuple, name: str) -> None:
    try:
        fn(*args)
    except Exception:
        _log.warning("Detached task %s failed", name or getattr(fn, "__name__", "?"), exc_info=True)


class ThreadTaskRunner:
    """Start each task on its own daemon thread."""

    def __init__(self, *, name_prefix: str = "roster-task") -> None:
        self._name_prefix = name_prefix
        self._threads: List[threading.Thread] = []
        self._lock = threading.Lock()

    def spawn(self, fn: Callable[..., Any], *args: Any, name: str = "") -> None:
        worker = threading.Thread(
            target=_run_swallowing,
            args=(fn, args, name),
            name=f"{self._name_prefix}-{name}" if name else self._name_prefix,
            daemon=True,
        )
        with self._lock:
            self._threads = [thread for thread in self._threads if thread.is_alive()]
            self._threads.append(worker)
        worker.start()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for tasks started so far; return True when all finished."""
        with self._lock:
            pending = list(self._threads)
        for thread in pending:
            thread.join(timeout)
        return not any(thread.is_alive() for thread in pending)


class InlineTaskRunner:
    """Run tasks immediately on the caller's thread (tests, scripts)."""

    def spawn(self, fn: Callable[..., Any], *args: Any, name: str = "") -> None:
        _run_swallowing(fn, args, name)


__all__ = ["InlineTaskRunner", "ThreadTaskRunner"]
