"""
AI Move Scheduler - Pacing delay before the AI replies.

The engine's request_ai_move() is synchronous and delay-free. The pause
a player sees before the AI answers lives here, at the boundary, as a
cancellable callback on the running asyncio loop. Resetting or ending a
session cancels its pending move.
"""

from __future__ import annotations
from typing import Any, Awaitable, Callable
import asyncio
import logging

logger = logging.getLogger(__name__)


class AIMoveScheduler:
    """
    One pending AI move per session key.

    Usage:
        scheduler = AIMoveScheduler(delay_seconds=0.7)
        scheduler.schedule(session_id, lambda: play_ai(session_id))
        ...
        scheduler.cancel(session_id)  # on reset

    Must be used from inside a running event loop.
    """

    def __init__(self, delay_seconds: float = 0.7):
        self.delay_seconds = delay_seconds
        self._pending: dict[str, asyncio.TimerHandle] = {}
        self._tasks: set[asyncio.Task] = set()

    def schedule(self, key: str, callback: Callable[[], Awaitable[Any] | Any]):
        """Run `callback` after the delay, replacing any pending one for `key`."""
        self.cancel(key)
        loop = asyncio.get_running_loop()
        self._pending[key] = loop.call_later(self.delay_seconds, self._fire, key, callback)
        logger.debug("Scheduled AI move for %s in %.3fs", key, self.delay_seconds)

    def cancel(self, key: str) -> bool:
        """Cancel the pending move for `key`. Returns True if one was pending."""
        handle = self._pending.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        logger.debug("Cancelled AI move for %s", key)
        return True

    def cancel_all(self):
        for key in list(self._pending):
            self.cancel(key)

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    def _fire(self, key: str, callback: Callable[[], Awaitable[Any] | Any]):
        self._pending.pop(key, None)
        try:
            result = callback()
        except Exception:
            logger.exception("Scheduled AI move for %s failed", key)
            return
        if asyncio.iscoroutine(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(lambda t: self._task_done(key, t))

    def _task_done(self, key: str, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Scheduled AI move for %s failed", key, exc_info=exc)
