"""
Schedulers for delayed delivery.

The resolver computes its outcome synchronously and hands a zero-argument
delivery to a scheduler. A scheduler must run it exactly once, after at
least ``delay`` seconds; a delay of zero or less runs it without waiting.
"""

import asyncio
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional, Set

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """Base class for delivery schedulers."""

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` once after ``delay`` seconds."""
        pass

    def close(self) -> None:
        """Release resources. Safe to call multiple times."""
        pass


class BlockingScheduler(Scheduler):
    """
    Waits in the calling thread, then delivers.

    Useful for scripts and synchronous tests where the caller wants the
    callback to have fired when ``resolve`` returns.
    """

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self._sleep = sleep

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        if delay > 0:
            self._sleep(delay)
        callback()


class ThreadingScheduler(Scheduler):
    """
    Delivers on a ``threading.Timer`` thread.

    Zero delay runs the callback in the calling thread. ``close()`` cancels
    timers that have not fired yet.

    Example:
        >>> scheduler = ThreadingScheduler()
        >>> scheduler.schedule(1.5, lambda: print("delivered"))
        >>> scheduler.close()
    """

    def __init__(self):
        self._timers: Set[threading.Timer] = set()
        self._lock = threading.Lock()
        self._closed = False

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        if delay <= 0:
            callback()
            return

        timer: Optional[threading.Timer] = None

        def run():
            with self._lock:
                self._timers.discard(timer)
            callback()

        timer = threading.Timer(delay, run)
        timer.daemon = True

        with self._lock:
            if self._closed:
                logger.warning("Scheduler is closed, delivery dropped")
                return
            self._timers.add(timer)
        timer.start()

    @property
    def pending(self) -> int:
        """Number of timers that have not fired yet."""
        with self._lock:
            return len(self._timers)

    def close(self) -> None:
        with self._lock:
            self._closed = True
            timers = list(self._timers)
            self._timers.clear()

        for timer in timers:
            timer.cancel()


class AsyncioScheduler(Scheduler):
    """
    Delivers on an asyncio event loop.

    Safe to call from any thread; the callback always runs on the loop.

    Args:
        loop: Target loop (default: the running loop at construction time)

    Example:
        >>> scheduler = AsyncioScheduler(asyncio.get_running_loop())
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()
        self._handles: Set[asyncio.TimerHandle] = set()

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        if delay <= 0:
            self._loop.call_soon_threadsafe(callback)
            return
        self._loop.call_soon_threadsafe(self._arm, delay, callback)

    def _arm(self, delay: float, callback: Callable[[], None]) -> None:
        handle: Optional[asyncio.TimerHandle] = None

        def run():
            self._handles.discard(handle)
            callback()

        handle = self._loop.call_later(delay, run)
        self._handles.add(handle)

    def close(self) -> None:
        for handle in list(self._handles):
            handle.cancel()
        self._handles.clear()
