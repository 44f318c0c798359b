"""Serialize outbound requests and keep a minimum spacing between them."""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional


class RequestSpacer:
    """Async context manager that admits one request at a time.

    Entering waits for the previous holder to exit and for at least
    ``min_interval`` seconds to pass since the previous request was sent.
    Owned by the client that calls the rate-limited service.
    """

    def __init__(
        self,
        min_interval: float,
        monotonic: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._min_interval = min_interval
        self._monotonic = monotonic
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_sent: Optional[float] = None

    async def __aenter__(self) -> "RequestSpacer":
        await self._lock.acquire()
        try:
            if self._last_sent is not None:
                wait = self._last_sent + self._min_interval - self._monotonic()
                if wait > 0:
                    await self._sleep(wait)
            self._last_sent = self._monotonic()
        except BaseException:
            self._lock.release()
            raise
        return self

    async def __aexit__(self, *args: Any) -> None:
        self._lock.release()
