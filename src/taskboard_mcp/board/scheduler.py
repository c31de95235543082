"""
Debounced persistence scheduler.

Turns local field edits into remote writes. Each (entity id, field) key
moves through a small state machine::

    IDLE --edit--> PENDING --delay elapsed--> WRITING --done--> IDLE
                     |  ^
                     +--+ edit (timer restarted from zero)

    IDLE --immediate edit--> WRITING

Only the most recent write for a key is ever issued; values superseded
inside the delay are dropped. Writes for one key run one at a time in the
order they were issued, so the last value always lands last. A write that
has started is never cancelled.
Failures are logged and reported through ``on_error``; nothing is retried
and nothing is rolled back.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Hashable

from taskboard_mcp.constants import DEFAULT_DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)

WriteFn = Callable[[], Awaitable[None]]
ErrorCallback = Callable[[Hashable, Exception], None]


class KeyState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    WRITING = "writing"


@dataclass
class _Pending:
    write: WriteFn
    timer: asyncio.Task[None] | None = field(default=None, repr=False)


class PersistenceScheduler:
    """
    Per-key debounce of remote writes.

    Usage:
        scheduler = PersistenceScheduler(delay=1.5, on_error=report)
        await scheduler.schedule(("task-1", "notes"), lambda: client.update_task(...))
        ...
        await scheduler.close()
    """

    def __init__(
        self,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.delay = delay
        self._on_error = on_error
        self._pending: dict[Hashable, _Pending] = {}
        self._writing: dict[Hashable, int] = {}
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._inflight: set[asyncio.Task[bool]] = set()
        self._closed = False

    # =========================================================================
    # Introspection
    # =========================================================================

    def state(self, key: Hashable) -> KeyState:
        if key in self._pending:
            return KeyState.PENDING
        if self._writing.get(key):
            return KeyState.WRITING
        return KeyState.IDLE

    @property
    def pending_keys(self) -> list[Hashable]:
        return list(self._pending)

    @property
    def closed(self) -> bool:
        return self._closed

    # =========================================================================
    # Scheduling
    # =========================================================================

    async def schedule(self, key: Hashable, write: WriteFn, immediate: bool = False) -> bool:
        """
        Arrange for ``write`` to persist the latest value of ``key``.

        Any pending write for the key is discarded. In immediate mode the
        write runs now and this call returns once it has finished.

        Returns:
            For immediate writes, whether the write succeeded. Deferred
            writes always return True.

        Raises:
            RuntimeError: the scheduler has been closed
        """
        if self._closed:
            raise RuntimeError("Scheduler is closed")

        self.cancel(key)

        if immediate:
            return await self._run_write(key, write)

        entry = _Pending(write=write)
        entry.timer = asyncio.create_task(self._deferred(key, entry), name=f"debounce:{key}")
        self._pending[key] = entry
        return True

    def cancel(self, key: Hashable) -> bool:
        """Drop the pending write for ``key``; returns whether one existed."""
        entry = self._pending.pop(key, None)
        if entry is None:
            return False
        if entry.timer is not None:
            entry.timer.cancel()
        return True

    async def flush(self) -> None:
        """Issue every pending write now and wait for all writes to finish."""
        pending = list(self._pending.items())
        self._pending.clear()
        for key, entry in pending:
            if entry.timer is not None:
                entry.timer.cancel()
            self._start_write(key, entry.write)
        await self.wait_idle()

    async def wait_idle(self) -> None:
        """Wait until no write is in flight."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def close(self) -> None:
        """
        Tear down: discard every pending write.

        Writes already in flight run to completion; the call waits for them.
        """
        self._closed = True
        dropped = list(self._pending)
        for key in dropped:
            self.cancel(key)
        if dropped:
            logger.info("Discarded %d pending write(s) on teardown", len(dropped))
        await self.wait_idle()

    # =========================================================================
    # Internals
    # =========================================================================

    async def _deferred(self, key: Hashable, entry: _Pending) -> None:
        await asyncio.sleep(self.delay)

        if self._pending.get(key) is not entry:
            return
        del self._pending[key]
        # The write gets its own task so a later edit cancelling this
        # timer cannot interrupt it.
        self._start_write(key, entry.write)

    def _start_write(self, key: Hashable, write: WriteFn) -> None:
        task = asyncio.create_task(self._run_write(key, write), name=f"write:{key}")
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _run_write(self, key: Hashable, write: WriteFn) -> bool:
        self._writing[key] = self._writing.get(key, 0) + 1
        # asyncio.Lock wakes waiters in FIFO order
        lock = self._locks.setdefault(key, asyncio.Lock())
        try:
            async with lock:
                await write()
        except Exception as e:
            logger.error("Write for %s failed: %s", key, e)
            if self._on_error is not None:
                self._on_error(key, e)
            return False
        finally:
            self._writing[key] -= 1
            if not self._writing[key]:
                del self._writing[key]
                del self._locks[key]
        logger.debug("Write for %s persisted", key)
        return True
