# src/core/inbound.py
"""Per-source inbound event loop.

SDK callbacks push events onto an InboundQueue; a single consumer task
handles them one at a time, so events from one source are processed in
arrival order. A handler exception is logged and the loop moves on.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from contextlib import suppress
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InboundQueue(Generic[T]):
    """FIFO of inbound events drained by one consumer task.

    Example:
        >>> queue = InboundQueue("slack", handle_event)
        >>> await queue.start()
        >>> await queue.submit(event)
        >>> await queue.shutdown()
    """

    def __init__(self, name: str, handler: Callable[[T], Awaitable[None]]) -> None:
        self.name = name
        self._handler = handler
        self._queue: asyncio.Queue[T] = asyncio.Queue()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"inbound-{self.name}")
        logger.debug("Inbound loop '%s' started", self.name)

    async def submit(self, event: T) -> None:
        await self._queue.put(event)

    async def join(self) -> None:
        """Wait until every submitted event has been handled."""
        await self._queue.join()

    async def shutdown(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.debug("Inbound loop '%s' stopped", self.name)

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._handler(event)
            except Exception as e:
                logger.exception("Error handling %s event: %s", self.name, e)
            finally:
                self._queue.task_done()
