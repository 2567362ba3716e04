"""
Booking transactions.

create_booking is the only guard against double-booking: the availability
re-check and the insert run in one transaction that holds the store write
guard (SQLite: BEGIN IMMEDIATE; server databases: SELECT ... FOR UPDATE on
the store row). Reservation locks alone are not enough.
"""

import json
import logging
import secrets
from datetime import datetime, timedelta

from ..errors import (
    BookingNotEditable,
    BookingNotFound,
    InvalidStatus,
    ServiceNotFound,
    SlotConflict,
    StoreNotFound,
)
from ..models.generated import Bookings
from ..schemas.bookings import BookingCreate, BookingUpdate
from .events import emit_booking_event
from .slots.availability import is_slot_available
from .slots.config import BookingConfig, get_booking_config
from .storage import BookingChanges, Storage

logger = logging.getLogger(__name__)

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled", "no_show")
EDITABLE_STATUSES = ("pending", "confirmed", "no_show")
CANCELLABLE_STATUSES = ("pending", "confirmed")


def generate_booking_token() -> str:
    return secrets.token_urlsafe(24)


def create_booking(
    storage: Storage,
    data: BookingCreate,
    config: BookingConfig | None = None,
    now: datetime | None = None,
) -> Bookings:
    """
    Re-validate the slot and insert a pending booking atomically.

    The caller's own reservation lock (data.session_id) does not count as a
    conflict and is deleted in the same transaction.

    Raises:
        SlotConflict: slot taken, blocked, locked by another session or
            outside the booking window. Nothing is written.
    """
    config = config or get_booking_config()
    now = now or datetime.now()

    with storage.transaction():
        storage.guard_store(data.store_id)

        if not storage.get_store(data.store_id):
            raise StoreNotFound(f"Store {data.store_id} not found")

        service = storage.get_service(data.service_id, data.store_id)
        if not service:
            raise ServiceNotFound(f"Service {data.service_id} not found for store {data.store_id}")

        available = is_slot_available(
            storage,
            data.store_id,
            data.service_id,
            data.start_datetime,
            config=config,
            now=now,
            technician_id=data.technician_id,
            exclude_session_id=data.session_id,
        )
        if not available:
            logger.info(
                f"Slot conflict: store={data.store_id} service={data.service_id} "
                f"start={data.start_datetime.isoformat()}"
            )
            raise SlotConflict()

        booking = Bookings(
            booking_token=generate_booking_token(),
            store_id=data.store_id,
            service_id=data.service_id,
            technician_id=data.technician_id,
            start_datetime=data.start_datetime,
            end_datetime=data.start_datetime + timedelta(minutes=service.duration_minutes),
            status="pending",
            customer_firstname=data.customer_firstname,
            customer_lastname=data.customer_lastname,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone,
            customer_data=json.dumps(data.customer_data or {}),
            internal_notes=None,
            cancellation_reason=None,
            cancelled_at=None,
            created_at=now,
            updated_at=now,
        )
        storage.add(booking)

        if data.session_id:
            storage.delete_locks_for_session(data.session_id)

    logger.info(
        f"Booking created: id={booking.id} store={booking.store_id} "
        f"{booking.start_datetime:%Y-%m-%d %H:%M}-{booking.end_datetime:%H:%M}"
    )
    emit_booking_event("booking_created", booking)
    return booking


def get_booking_by_token(storage: Storage, token: str) -> Bookings:
    booking = storage.get_booking_by_token(token)
    if not booking:
        raise BookingNotFound()
    return booking


def update_booking(
    storage: Storage,
    token: str,
    data: BookingUpdate,
    config: BookingConfig | None = None,
    now: datetime | None = None,
) -> Bookings:
    """
    Update customer fields and/or move a booking to a new start.

    A new start is re-validated the same way as a new booking, ignoring the
    booking itself.
    """
    config = config or get_booking_config()
    now = now or datetime.now()
    moved = False

    with storage.transaction():
        booking = storage.get_booking_by_token(token)
        if not booking:
            raise BookingNotFound()
        if booking.status not in EDITABLE_STATUSES:
            raise BookingNotEditable()

        changes = BookingChanges(
            customer_firstname=data.customer_firstname,
            customer_lastname=data.customer_lastname,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone,
            customer_data=json.dumps(data.customer_data) if data.customer_data is not None else None,
        )

        if data.start_datetime is not None and data.start_datetime != booking.start_datetime:
            storage.guard_store(booking.store_id)

            service = storage.get_service(booking.service_id, booking.store_id)
            if not service:
                raise ServiceNotFound()

            available = is_slot_available(
                storage,
                booking.store_id,
                booking.service_id,
                data.start_datetime,
                config=config,
                now=now,
                technician_id=booking.technician_id,
                exclude_session_id=data.session_id,
                exclude_booking_id=booking.id,
            )
            if not available:
                raise SlotConflict()

            changes.start_datetime = data.start_datetime
            changes.end_datetime = data.start_datetime + timedelta(minutes=service.duration_minutes)
            moved = True

        if changes.is_empty():
            raise BookingNotEditable("No changes provided")

        storage.apply_booking_changes(booking, changes)
        booking.updated_at = now

        if moved and data.session_id:
            storage.delete_locks_for_session(data.session_id)

    if moved:
        logger.info(f"Booking {booking.id} moved to {booking.start_datetime:%Y-%m-%d %H:%M}")
        emit_booking_event("booking_rescheduled", booking)
    else:
        emit_booking_event("booking_updated", booking)
    return booking


def cancel_booking(
    storage: Storage,
    token: str,
    reason: str | None = None,
    now: datetime | None = None,
) -> Bookings:
    """Cancel a pending/confirmed booking; its slot is free immediately."""
    now = now or datetime.now()

    with storage.transaction():
        booking = storage.get_booking_by_token(token)
        if not booking:
            raise BookingNotFound()
        if booking.status not in CANCELLABLE_STATUSES:
            raise BookingNotEditable("Booking is already cancelled or completed")

        booking.status = "cancelled"
        booking.cancelled_at = now
        booking.cancellation_reason = reason
        booking.updated_at = now

    logger.info(f"Booking {booking.id} cancelled")
    emit_booking_event("booking_cancelled", booking, cancellation_reason=reason)
    return booking


def update_booking_status(
    storage: Storage,
    booking_id: int,
    status: str,
    internal_notes: str | None = None,
    now: datetime | None = None,
) -> Bookings:
    """
    Admin status change.

    A cancelled booking stays cancelled: reviving it would occupy a slot
    without the availability re-check.
    """
    if status not in BOOKING_STATUSES:
        raise InvalidStatus(f"Unknown booking status: {status}")
    now = now or datetime.now()

    with storage.transaction():
        booking = storage.get_booking(booking_id)
        if not booking:
            raise BookingNotFound()
        if booking.status == "cancelled" and status != "cancelled":
            raise BookingNotEditable("Cancelled bookings cannot be reopened")

        previous = booking.status
        booking.status = status
        if internal_notes is not None:
            booking.internal_notes = internal_notes
        if status == "cancelled" and previous != "cancelled":
            booking.cancelled_at = now
        booking.updated_at = now

    logger.info(f"Booking {booking.id} status {previous} → {status}")
    emit_booking_event("booking_status_changed", booking, previous_status=previous)
    return booking
