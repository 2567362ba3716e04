# backend/velofit/services/slots/locks.py
"""
Reservation locks: short-lived soft holds on a slot while a customer
completes the booking form.

Locks do not re-check availability and two overlapping acquires may both
succeed. Only the booking transaction guarantees exclusivity.
"""

import logging
from datetime import datetime, timedelta

from ...models.generated import BookingLocks
from ..storage import Storage
from .config import BookingConfig, get_booking_config
from .intervals import Interval

logger = logging.getLogger(__name__)


def acquire_lock(
    storage: Storage,
    store_id: int,
    start_datetime: datetime,
    end_datetime: datetime,
    session_id: str,
    technician_id: int | None = None,
    config: BookingConfig | None = None,
    now: datetime | None = None,
) -> BookingLocks:
    """Hold [start, end) for session_id for config.lock_minutes."""
    config = config or get_booking_config()
    now = now or datetime.now()
    Interval(start_datetime, end_datetime)

    lock = BookingLocks(
        store_id=store_id,
        technician_id=technician_id,
        start_datetime=start_datetime,
        end_datetime=end_datetime,
        session_id=session_id,
        expires_at=now + timedelta(minutes=config.lock_minutes),
        created_at=now,
    )
    with storage.transaction():
        storage.add(lock)

    logger.info(
        f"Lock acquired: store={store_id} {start_datetime:%Y-%m-%d %H:%M}-{end_datetime:%H:%M} "
        f"session={session_id} until {lock.expires_at:%H:%M:%S}"
    )
    return lock


def release_lock(storage: Storage, session_id: str) -> int:
    """Delete every lock held by session_id. Returns number of deleted locks."""
    with storage.transaction():
        deleted = storage.delete_locks_for_session(session_id)

    if deleted:
        logger.info(f"Released {deleted} lock(s) for session={session_id}")
    return deleted


def purge_expired_locks(storage: Storage, now: datetime | None = None) -> int:
    """Delete locks whose expires_at has passed. Idempotent."""
    now = now or datetime.now()
    with storage.transaction():
        deleted = storage.delete_expired_locks(now)

    if deleted:
        logger.info(f"Purged {deleted} expired lock(s)")
    return deleted
