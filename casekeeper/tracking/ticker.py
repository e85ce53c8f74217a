"""Periodic display refresh for a running timer."""

import threading
from typing import Callable, Optional

from ..utils.logging import get_logger

logger = get_logger(__name__)


class DisplayTicker:
    """
    Calls a read-only callback at a fixed interval on a background thread.

    Start it when the watched task begins running; stop it when the task is
    paused or completed, or the observer goes away.
    """

    def __init__(self, callback: Callable[[], None], interval: float = 1.0) -> None:
        """
        Initialize the ticker.

        Args:
            callback: Called once per tick. Must not mutate case data.
            interval: Seconds between ticks.
        """
        self.callback = callback
        self.interval = interval

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def start(self) -> None:
        """Start ticking in a background thread."""
        if self.is_running():
            logger.debug("Ticker already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._tick_loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop ticking. Safe to call more than once."""
        self._stop_event.set()
        if self._thread is not None:
            if self._thread is not threading.current_thread():
                self._thread.join(timeout=self.interval + 1)
            self._thread = None

    def is_running(self) -> bool:
        """Check if the ticker thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def _tick_loop(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.callback()
            except Exception as e:
                logger.error(f"Error in timer display refresh: {e}")

    def __enter__(self) -> "DisplayTicker":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
