"""One-shot "ready" notification.

Pages subscribe before rendering anything that depends on the app cache;
the bootstrap pipeline publishes exactly once when the cache is populated.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from pypoi._constants import READY_MESSAGE
from pypoi.exceptions import PoiStateError

_logger = logging.getLogger(__name__)

ReadyObserver = Callable[[str], None]


class ReadyChannel:
    """Observer list plus a single-resolution future.

    Observers are called with the message ``"ready"``. Subscribing after
    publication calls the observer immediately, so late pages never miss
    the notification.
    """

    def __init__(self) -> None:
        self._observers: list[ReadyObserver] = []
        self._future: asyncio.Future[str] | None = None
        self._published = False

    @property
    def published(self) -> bool:
        return self._published

    def _ensure_future(self) -> asyncio.Future[str]:
        if self._future is None:
            self._future = asyncio.get_running_loop().create_future()
            if self._published:
                self._future.set_result(READY_MESSAGE)
        return self._future

    def subscribe(self, observer: ReadyObserver) -> Callable[[], None]:
        """Register *observer*; returns a callable that unsubscribes it."""
        if self._published:
            self._notify(observer)
            return lambda: None
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def _notify(self, observer: ReadyObserver) -> None:
        try:
            observer(READY_MESSAGE)
        except Exception:
            _logger.warning("Ready observer %r failed", observer, exc_info=True)

    def publish(self) -> None:
        if self._published:
            raise PoiStateError("ready has already been published")
        self._published = True
        observers, self._observers = self._observers, []
        _logger.debug("Publishing %r to %d observer(s)", READY_MESSAGE, len(observers))
        for observer in observers:
            self._notify(observer)
        if self._future is not None and not self._future.done():
            self._future.set_result(READY_MESSAGE)

    async def wait(self) -> str:
        """Wait until ready has been published."""
        return await self._ensure_future()
