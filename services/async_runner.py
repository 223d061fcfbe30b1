"""Run coroutines from synchronous request handlers."""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


def run_sync(coro: Awaitable[T]) -> T:
    """Execute a coroutine to completion on a private event loop.

    Request handlers run on worker threads that have no loop of their own.
    """
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        # Push deliveries run in the loop's default executor
        loop.run_until_complete(loop.shutdown_default_executor())
        loop.close()
