"""Cooperative cancellation token for async operations"""

import asyncio
from typing import Set


class CancellationToken:
    """
    One-shot signal an owner triggers at teardown.

    Work that receives a token races against `wait()` and drops its result once
    `cancelled` is set. Cancelling is idempotent. Waiters are plain futures on
    whichever loop awaits them, so a token may outlive a single event loop.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._waiters: Set[asyncio.Future] = set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_result(None)

    async def wait(self) -> None:
        if self._cancelled:
            return
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.add(waiter)
        try:
            await waiter
        finally:
            self._waiters.discard(waiter)
