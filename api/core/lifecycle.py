"""Process shutdown hook (persist the store once, whatever triggers it)."""
from __future__ import annotations

import logging
import signal
import sys
import threading
from typing import Callable, Iterable

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownHook:
    """Runs a callback exactly once, from the lifespan exit or a termination signal."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._lock = threading.Lock()
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def run(self, reason: str = "shutdown") -> bool:
        """Invoke the callback unless it already ran. Returns True when it ran now."""
        with self._lock:
            if self._done:
                return False
            self._done = True
            logger.info("Received %s. Saving employees...", reason)
            try:
                self._callback()
            except Exception:
                logger.exception("Shutdown callback failed")
            return True

    def install_signal_handlers(self, signals: Iterable[int] = TERMINATION_SIGNALS) -> None:
        """Route termination signals through the hook, then exit cleanly."""
        for signum in signals:
            signal.signal(signum, self._handle_signal)

    def _handle_signal(self, signum: int, frame) -> None:
        self.run(signal.Signals(signum).name)
        sys.exit(0)
