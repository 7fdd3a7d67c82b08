"""
Delay and clock primitives used between interaction steps.
"""
import asyncio
import time
from typing import Awaitable, Callable

SleepFn = Callable[[int], Awaitable[None]]
ClockFn = Callable[[], float]


async def sleep_ms(ms: int) -> None:
    """Suspend the calling coroutine for ``ms`` milliseconds."""
    await asyncio.sleep(max(ms, 0) / 1000)


def monotonic_ms() -> float:
    return time.monotonic() * 1000
