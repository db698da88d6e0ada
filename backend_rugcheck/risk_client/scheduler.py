"""
Throttled priority scheduler for upstream risk report fetches.

One cooperative worker task drains a deque of pending lookups, one at a time:
at most one fetcher call is in flight per scheduler, and each completion is
followed by a fixed throttle delay before the next call starts. This is the
only backpressure protecting the rate-limited RugCheck API.

Ordering: priority items are inserted at the front, normal items at the back.
Priority items are therefore served LIFO among themselves, normal items FIFO,
and every queued priority item is served before every queued normal item.

No per-key dedup: two queued lookups for the same mint make two upstream calls.
No retries and no timeouts; callers race the returned future themselves.
"""

from __future__ import annotations

import asyncio
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from backend_rugcheck.config.settings import DEFAULT_THROTTLE_DELAY_SEC
from backend_rugcheck.risk_client.cache import TTLCache
from backend_rugcheck.risk_client.errors import SchedulerClosedError
from backend_rugcheck.rugcheck_logging import bind_mint, get_logger

logger = get_logger(__name__)

# Upstream call: mint -> payload, or None for "no data" (must not raise for transport errors)
Fetcher = Callable[[str], Awaitable[Any]]


@dataclass
class QueueItem:
    """One pending lookup. The future is settled exactly once."""

    key: str
    future: asyncio.Future
    priority: bool = False
    enqueued_at: float = field(default_factory=time.monotonic)


def _settle(item: QueueItem, result: Any = None, exc: BaseException | None = None) -> None:
    """Resolve or reject the item's future unless the caller already cancelled it."""
    if item.future.done():
        logger.debug("risk_queue_future_abandoned", mint=item.key)
        return
    if exc is not None:
        item.future.set_exception(exc)
    else:
        item.future.set_result(result)


class ThrottledPriorityScheduler:
    """
    Single-worker queue in front of a Fetcher.

    enqueue() is synchronous and must be called from the event loop thread.
    The active flag is checked and set with no await in between, so only one
    worker task can exist at a time.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        cache: TTLCache,
        *,
        throttle_delay_sec: float = DEFAULT_THROTTLE_DELAY_SEC,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._delay = max(0.0, throttle_delay_sec)
        self._queue: deque[QueueItem] = deque()
        self._active = False
        self._closed = False
        self._task: asyncio.Task[None] | None = None
        self._current: QueueItem | None = None

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def throttle_delay_sec(self) -> float:
        return self._delay

    def enqueue(self, key: str, priority: bool = False) -> asyncio.Future:
        """
        Queue a lookup for key and return its future (payload or None).

        Raises:
            SchedulerClosedError: after aclose().
        """
        if self._closed:
            raise SchedulerClosedError(key)
        loop = asyncio.get_running_loop()
        item = QueueItem(key=key, future=loop.create_future(), priority=priority)
        if priority:
            self._queue.appendleft(item)
        else:
            self._queue.append(item)
        logger.debug(
            "risk_queue_enqueued",
            mint=key,
            priority=priority,
            pending=len(self._queue),
            worker_active=self._active,
        )
        self._start_worker()
        return item.future

    def _start_worker(self) -> None:
        if self._active or not self._queue:
            return
        self._active = True
        self._task = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self) -> None:
        try:
            while self._queue:
                item = self._queue.popleft()
                self._current = item
                try:
                    await self._process(item)
                finally:
                    self._current = None
                await asyncio.sleep(self._delay)
        finally:
            self._active = False
            self._task = None

    async def _process(self, item: QueueItem) -> None:
        waited_ms = round((time.monotonic() - item.enqueued_at) * 1000, 1)
        log = bind_mint(item.key, __name__)
        log.info("risk_queue_processing", priority=item.priority, waited_ms=waited_ms)
        try:
            payload = await self._fetcher(item.key)
        except asyncio.CancelledError:
            _settle(item, exc=SchedulerClosedError(item.key))
            raise
        except Exception as e:
            log.error("risk_queue_fetch_failed", error=str(e), error_type=type(e).__name__)
            _settle(item, exc=e)
            return
        if payload is None:
            log.info("risk_queue_no_data")
        else:
            self._cache.put(item.key, payload)
        _settle(item, result=payload)

    async def aclose(self) -> None:
        """Stop the worker; the in-flight and queued futures fail with SchedulerClosedError."""
        if self._closed:
            return
        self._closed = True
        task = self._task
        if task is not None:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            self._task = None
        dropped = 0
        while self._queue:
            item = self._queue.popleft()
            _settle(item, exc=SchedulerClosedError(item.key))
            dropped += 1
        self._active = False
        logger.info("risk_queue_closed", dropped=dropped)
