"""Cancel pending work when the inbound caller disconnects."""

import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import Request

from app.services.github.exceptions import ClientDisconnectedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_until_disconnected(
    request: Request, awaitable: Awaitable[T], poll_interval: float = 0.5
) -> T:
    """
    Await ``awaitable`` while watching the inbound connection.

    If the caller disconnects first, the pending work is cancelled and
    ClientDisconnectedError is raised.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("Caller disconnected, cancelling upstream lookup")
                raise ClientDisconnectedError("caller disconnected before upstream answered")
    finally:
        if not task.done():
            task.cancel()
