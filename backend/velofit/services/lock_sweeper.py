"""
Expired reservation lock sweeper.

Deletes booking_locks rows whose expires_at has passed: once immediately
on start, then every `interval` seconds.

Runs as an asyncio task in the backend lifespan.
Uses synchronous DB (via asyncio.to_thread).
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.orm import Session

from .slots.locks import purge_expired_locks
from .storage import SqlStorage

logger = logging.getLogger(__name__)

CHECK_INTERVAL = 300  # seconds between sweeps


class LockSweeper:
    """Recurring purge of expired locks with explicit start/stop."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        interval: float = CHECK_INTERVAL,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.session_factory = session_factory
        self.interval = interval
        self.clock = clock
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="lock-sweeper")

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("lock_sweeper stopped")

    def sweep_once(self) -> int:
        """Purge expired locks (synchronous)."""
        db = self.session_factory()
        try:
            return purge_expired_locks(SqlStorage(db), now=self.clock())
        finally:
            db.close()

    async def _loop(self) -> None:
        logger.info(f"lock_sweeper started (every {self.interval}s)")

        while True:
            try:
                await asyncio.to_thread(self.sweep_once)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("lock_sweeper error")

            await asyncio.sleep(self.interval)
