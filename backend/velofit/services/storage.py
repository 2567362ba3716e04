"""
Storage capability used by the booking engine.

The engine only talks to the `Storage` protocol; `SqlStorage` is the
SQLAlchemy implementation over one Session. Database errors are re-raised
as TransientStorageError.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import ContextManager, Iterator, Optional, Protocol

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import TransientStorageError
from ..models.generated import (
    AvailabilityBlocks,
    BookingLocks,
    Bookings,
    Services,
    Stores,
    Technicians,
)

logger = logging.getLogger(__name__)

OCCUPYING_STATUSES = ("pending", "confirmed", "completed", "no_show")


@dataclass
class BookingChanges:
    """Explicit set of fields a booking update may touch. None = unchanged."""
    start_datetime: Optional[datetime] = None
    end_datetime: Optional[datetime] = None
    customer_firstname: Optional[str] = None
    customer_lastname: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_data: Optional[str] = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.start_datetime,
                self.end_datetime,
                self.customer_firstname,
                self.customer_lastname,
                self.customer_email,
                self.customer_phone,
                self.customer_data,
            )
        )


class Storage(Protocol):
    def get_store(self, store_id: int) -> Stores | None: ...

    def get_service(self, service_id: int, store_id: int) -> Services | None: ...

    def get_technician(self, technician_id: int, store_id: int) -> Technicians | None: ...

    def list_bookings(
        self,
        store_id: int,
        target_date: date,
        margin_minutes: int = 0,
        exclude_booking_id: int | None = None,
    ) -> list[Bookings]: ...

    def list_blocks(self, store_id: int, target_date: date) -> list[AvailabilityBlocks]: ...

    def list_active_locks(
        self,
        store_id: int,
        target_date: date,
        now: datetime,
        exclude_session_id: str | None = None,
    ) -> list[BookingLocks]: ...

    def add(self, obj) -> None: ...

    def delete(self, obj) -> None: ...

    def delete_locks_for_session(self, session_id: str) -> int: ...

    def delete_expired_locks(self, now: datetime) -> int: ...

    def guard_store(self, store_id: int) -> None: ...

    def get_booking_by_token(self, token: str) -> Bookings | None: ...

    def get_booking(self, booking_id: int) -> Bookings | None: ...

    def get_block(self, block_id: int) -> AvailabilityBlocks | None: ...

    def apply_booking_changes(self, booking: Bookings, changes: BookingChanges) -> None: ...

    def transaction(self) -> ContextManager["Storage"]: ...


def _day_window(target_date: date) -> tuple[datetime, datetime]:
    start = datetime.combine(target_date, datetime.min.time())
    return start, start + timedelta(days=1)


class SqlStorage:
    """Storage over a SQLAlchemy Session."""

    def __init__(self, db: Session):
        self.db = db

    # ── Reads ────────────────────────────────────────────────────────────

    def get_store(self, store_id: int) -> Stores | None:
        with self._errors():
            return self.db.query(Stores).filter(
                Stores.id == store_id,
                Stores.is_active == 1,
            ).first()

    def get_service(self, service_id: int, store_id: int) -> Services | None:
        """Active service belonging to the store, or a global one."""
        with self._errors():
            return self.db.query(Services).filter(
                Services.id == service_id,
                Services.is_active == 1,
                or_(Services.store_id == store_id, Services.store_id.is_(None)),
            ).first()

    def get_technician(self, technician_id: int, store_id: int) -> Technicians | None:
        with self._errors():
            return self.db.query(Technicians).filter(
                Technicians.id == technician_id,
                Technicians.store_id == store_id,
                Technicians.is_active == 1,
            ).first()

    def list_bookings(
        self,
        store_id: int,
        target_date: date,
        margin_minutes: int = 0,
        exclude_booking_id: int | None = None,
    ) -> list[Bookings]:
        """
        Non-cancelled bookings intersecting the day.

        margin_minutes widens the window backwards so bookings whose buffer
        spills into the day are included.
        """
        day_start, day_end = _day_window(target_date)
        with self._errors():
            query = self.db.query(Bookings).filter(
                Bookings.store_id == store_id,
                Bookings.status.in_(OCCUPYING_STATUSES),
                Bookings.start_datetime < day_end,
                Bookings.end_datetime > day_start - timedelta(minutes=margin_minutes),
            )
            if exclude_booking_id is not None:
                query = query.filter(Bookings.id != exclude_booking_id)
            return query.order_by(Bookings.start_datetime).all()

    def list_blocks(self, store_id: int, target_date: date) -> list[AvailabilityBlocks]:
        day_start, day_end = _day_window(target_date)
        with self._errors():
            return self.db.query(AvailabilityBlocks).filter(
                AvailabilityBlocks.store_id == store_id,
                AvailabilityBlocks.start_datetime < day_end,
                AvailabilityBlocks.end_datetime > day_start,
            ).all()

    def list_active_locks(
        self,
        store_id: int,
        target_date: date,
        now: datetime,
        exclude_session_id: str | None = None,
    ) -> list[BookingLocks]:
        day_start, day_end = _day_window(target_date)
        with self._errors():
            query = self.db.query(BookingLocks).filter(
                BookingLocks.store_id == store_id,
                BookingLocks.start_datetime < day_end,
                BookingLocks.end_datetime > day_start,
                BookingLocks.expires_at > now,
            )
            if exclude_session_id is not None:
                query = query.filter(BookingLocks.session_id != exclude_session_id)
            return query.all()

    def get_booking_by_token(self, token: str) -> Bookings | None:
        with self._errors():
            return self.db.query(Bookings).filter(Bookings.booking_token == token).first()

    def get_booking(self, booking_id: int) -> Bookings | None:
        with self._errors():
            return self.db.get(Bookings, booking_id)

    def get_block(self, block_id: int) -> AvailabilityBlocks | None:
        with self._errors():
            return self.db.get(AvailabilityBlocks, block_id)

    # ── Writes ───────────────────────────────────────────────────────────

    def add(self, obj) -> None:
        with self._errors():
            self.db.add(obj)
            self.db.flush()

    def delete(self, obj) -> None:
        with self._errors():
            self.db.delete(obj)
            self.db.flush()

    def delete_locks_for_session(self, session_id: str) -> int:
        with self._errors():
            return self.db.query(BookingLocks).filter(
                BookingLocks.session_id == session_id,
            ).delete(synchronize_session=False)

    def delete_expired_locks(self, now: datetime) -> int:
        with self._errors():
            return self.db.query(BookingLocks).filter(
                BookingLocks.expires_at <= now,
            ).delete(synchronize_session=False)

    def guard_store(self, store_id: int) -> None:
        """
        Serialize booking writes for one store.

        Row lock on the store (SELECT ... FOR UPDATE). SQLite ignores FOR
        UPDATE; there the booking session already holds the database write
        lock since BEGIN IMMEDIATE.
        """
        with self._errors():
            self.db.query(Stores.id).filter(Stores.id == store_id).with_for_update().first()

    def apply_booking_changes(self, booking: Bookings, changes: BookingChanges) -> None:
        if changes.start_datetime is not None:
            booking.start_datetime = changes.start_datetime
        if changes.end_datetime is not None:
            booking.end_datetime = changes.end_datetime
        if changes.customer_firstname is not None:
            booking.customer_firstname = changes.customer_firstname
        if changes.customer_lastname is not None:
            booking.customer_lastname = changes.customer_lastname
        if changes.customer_email is not None:
            booking.customer_email = changes.customer_email
        if changes.customer_phone is not None:
            booking.customer_phone = changes.customer_phone
        if changes.customer_data is not None:
            booking.customer_data = changes.customer_data

    # ── Transactions ─────────────────────────────────────────────────────

    @contextmanager
    def transaction(self) -> Iterator["SqlStorage"]:
        """Commit on success, roll back on any error."""
        try:
            yield self
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Transaction rolled back: {e}")
            raise TransientStorageError() from e
        except BaseException:
            self.db.rollback()
            raise

    @contextmanager
    def _errors(self):
        try:
            yield
        except SQLAlchemyError as e:
            raise TransientStorageError() from e
