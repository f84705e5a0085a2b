from __future__ import annotations

import asyncio
from typing import Callable, Optional


class Debouncer:
    """Collapse a burst of ``trigger()`` calls into one deferred callback.

    Every trigger cancels the pending call and schedules a new one ``delay``
    seconds later, so the callback only runs once the caller has been idle
    for the whole window. There is no maximum wait. Must be used from a
    running event loop.
    """

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self.callback()
