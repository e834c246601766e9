"""Temp artifact cleanup on SIGINT / SIGTERM."""

import logging
import os
import signal
import threading
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)


class InterruptGuard:
    """
    Single-slot registry of the temp file currently in flight.

    Jobs run one at a time, so at most one temp WAV exists. The pipeline
    registers it right after creation and clears it during cleanup. If
    the process is signalled in between, the handler removes the file
    and exits without running any further job logic.

    The lock is re-entrant because Python runs signal handlers on the
    main thread, which may already hold it inside register() or clear().
    """

    def __init__(self, exit_func: Callable[[int], object] = os._exit):
        self._lock = threading.RLock()
        self._current: Path | None = None
        self._exit = exit_func

    @property
    def current(self) -> Path | None:
        with self._lock:
            return self._current

    def register(self, path: Path) -> None:
        with self._lock:
            self._current = path

    def clear(self) -> None:
        with self._lock:
            self._current = None

    def install(
        self,
        signals: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM),
    ) -> None:
        """Install the cleanup handler for the given signals."""
        for sig in signals:
            signal.signal(sig, self.handle_signal)

    def handle_signal(self, signum: int, frame=None) -> None:
        logger.warning("Interrupted, cleaning up...")
        path = self.current
        if path is not None:
            try:
                path.unlink()
            except OSError:
                pass
        self._exit(1)


# Process-wide guard used by the CLI and the default pipeline
interrupt_guard = InterruptGuard()
