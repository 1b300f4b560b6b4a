"""Short lock after a story is generated, before the form can be used again.

Advisory only: it slows down repeated submissions from the same session,
it does not enforce anything.
"""

import asyncio
import math
import time
from typing import Awaitable, Callable, Optional

from masal.config import QUOTA_CONSTANTS


class CooldownGate:
    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.clock = clock
        self.sleep = sleep
        self.target: Optional[float] = None  # epoch seconds

    def arm(self, duration_seconds: float) -> None:
        self.target = self.clock() + duration_seconds

    def clear(self) -> None:
        self.target = None

    def is_locked(self) -> bool:
        return self.target is not None and self.clock() < self.target

    def seconds_left(self) -> int:
        if self.target is None:
            return 0
        return max(0, math.ceil(self.target - self.clock()))

    async def wait(
        self,
        on_tick: Optional[Callable[[int], None]] = None,
        tick_interval: float = QUOTA_CONSTANTS["cooldown_tick_seconds"],
    ) -> None:
        """Poll until the target passes, reporting seconds left on every tick, then clear."""
        while self.is_locked():
            if on_tick:
                on_tick(self.seconds_left())
            await self.sleep(tick_interval)
        self.clear()
