"""Pacing utilities for sequential Admin API mutations."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable


class FixedIntervalPacer:
    """Waits a fixed interval after each call attempt."""

    def __init__(self, *, interval: float = 0.25, sleep: Callable[[float], Awaitable[None]] = asyncio.sleep) -> None:
        if interval < 0:
            raise ValueError("interval must be non-negative")
        self.interval = interval
        self._sleep = sleep
        self.pauses = 0

    async def pause(self) -> None:
        self.pauses += 1
        if self.interval:
            await self._sleep(self.interval)
