"""Change notification for views that cache fault reports."""

import asyncio
import inspect
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

RefreshCallback = Callable[[], Any]


class RefreshSignal:
    """
    Zero-argument "something changed" signal.

    Pass an instance wherever a status-changed callback is expected.
    Subscribers re-fetch their own data; no payload is delivered.
    Coroutine subscribers are scheduled on the running loop.
    """

    def __init__(self) -> None:
        self._subscribers: list[RefreshCallback] = []
        self._tasks: set[asyncio.Task] = set()

    def subscribe(self, callback: RefreshCallback) -> Callable[[], None]:
        """Register a callback, returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def __call__(self) -> None:
        for callback in list(self._subscribers):
            try:
                result = callback()
            except Exception:
                logger.exception("[REFRESH] Subscriber failed")
                continue
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"[REFRESH] Subscriber failed: {task.exception()!r}")

    async def drain(self) -> None:
        """Wait for scheduled coroutine subscribers to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
