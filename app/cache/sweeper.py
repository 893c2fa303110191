"""
Periodic background eviction of expired cache entries.

Lazy expiry already keeps stale values from being served; the sweeper only
bounds memory held by keys that are written once and never read again.
"""
import threading
import logging
from typing import Optional

from .manager import TTLCache

logger = logging.getLogger("cache.sweeper")


class ExpirySweeper:
    """
    Daemon thread calling TTLCache.evict_expired() every interval_seconds.

    Usage:
        sweeper = ExpirySweeper(cache, interval_seconds=300)
        sweeper.start()
        ...
        sweeper.stop()
    """

    def __init__(self, cache: TTLCache, interval_seconds: float):
        self._cache = cache
        self._interval = interval_seconds
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._interval > 0

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """
        Start the sweep thread.

        Returns:
            True if a thread was started, False when disabled or already running
        """
        if not self.enabled:
            logger.info("Cache sweeper disabled (interval <= 0)")
            return False

        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return False
            # Each run gets its own event so a thread left over from a timed-out
            # stop() still sees its signal
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="cache-sweeper",
                daemon=True,
            )
            self._thread.start()

        logger.info(f"Cache sweeper started (every {self._interval}s)")
        return True

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Signal the thread to exit and wait for it."""
        with self._lock:
            thread = self._thread
            stop_event = self._stop_event
            self._thread = None
            self._stop_event = None
        if thread is None:
            return
        stop_event.set()
        thread.join(timeout=timeout)
        if thread.is_alive():
            logger.warning(f"Cache sweeper did not exit within {timeout}s")
        else:
            logger.info("Cache sweeper stopped")

    def sweep_once(self) -> int:
        """Run a single sweep on the calling thread."""
        return self._cache.evict_expired()

    def _run(self, stop_event: threading.Event) -> None:
        # wait() returns True once stop() sets the event
        while not stop_event.wait(self._interval):
            try:
                self.sweep_once()
            except Exception as e:
                logger.warning(f"Cache sweep failed: {e}")
