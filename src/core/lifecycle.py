# src/core/lifecycle.py
"""Start/stop ordering for the bots.

Components are started in the order they were registered and stopped in
the reverse order. Only components whose start() succeeded are stopped.
start() and shutdown() may be plain or async methods.

Example:
    >>> lifecycle = LifecycleManager()
    >>> lifecycle.register("telegram", telegram_bot)
    >>> lifecycle.register("slack", slack_bot)
    >>> await lifecycle.startup()
    >>> await lifecycle.shutdown()
"""

import inspect
import logging
from typing import Any

logger = logging.getLogger(__name__)


async def _call(method: Any) -> None:
    result = method()
    if inspect.isawaitable(result):
        await result


class LifecycleManager:
    """Owns the start/stop sequence of long-running components."""

    def __init__(self) -> None:
        self._registered: list[tuple[str, Any]] = []
        self._running: list[tuple[str, Any]] = []
        self._started = False

    def register(self, name: str, component: Any) -> None:
        """Add a component exposing start() and shutdown()."""
        self._registered.append((name, component))
        logger.debug("Lifecycle component added: %s", name)

    async def startup(self) -> None:
        """Start every component; a failing one is logged and skipped."""
        if self._started:
            return

        for name, component in self._registered:
            logger.info("Starting %s", name)
            try:
                await _call(component.start)
            except Exception as e:
                logger.error("Error starting %s: %s", name, e)
                continue
            self._running.append((name, component))

        self._started = True
        logger.info(
            "%d of %d components started",
            len(self._running),
            len(self._registered),
        )

    async def shutdown(self) -> None:
        """Stop the started components, last started first."""
        if not self._started:
            return

        while self._running:
            name, component = self._running.pop()
            logger.info("Stopping %s", name)
            try:
                await _call(component.shutdown)
            except Exception as e:
                logger.error("Error stopping %s: %s", name, e)

        self._started = False
        logger.info("All components stopped")

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def component_count(self) -> int:
        return len(self._registered)

    @property
    def running_components(self) -> list[str]:
        """Names of the components that started successfully."""
        return [name for name, _ in self._running]
