"""
One-shot shutdown signal.

The /api/shutdown route triggers it. `eatbite serve` registers a callback that
sets uvicorn's should_exit; under plain `uvicorn eatbite.main:app` the app
sends itself SIGINT instead. Either way uvicorn finishes the requests it is
already handling before it exits.
"""

import logging
import threading
from typing import Callable, List, Optional, Tuple

from .errors import AlreadyShutdown

logger = logging.getLogger(__name__)


class ShutdownSignal:
    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    def add_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._callbacks.append(callback)

    def trigger(self) -> None:
        """Fire once. A second call raises AlreadyShutdown instead of being ignored."""
        with self._lock:
            if self._event.is_set():
                raise AlreadyShutdown()
            self._event.set()
            callbacks = list(self._callbacks)

        logger.info("shutdown requested")
        for callback in callbacks:
            callback()

    @property
    def callbacks(self) -> Tuple[Callable[[], None], ...]:
        with self._lock:
            return tuple(self._callbacks)

    def is_set(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)
