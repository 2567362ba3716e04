# backend/velofit/services/slots/availability.py
"""
Service availability for a store on a specific day.

Pipeline:
1. Store and service lookup (StoreNotFound / ServiceNotFound)
2. Booking window gate (lead time, horizon) → [] outside the window
3. Opening hours of the day → [] when closed
4. Candidate generation
5. Conflict filter against bookings (+buffer), blocks and active locks

Nothing is cached: every call, including is_slot_available, reads the
current bookings, blocks and locks.
"""

from datetime import date, datetime, timedelta

from ...errors import ServiceNotFound, StoreNotFound, TechnicianNotFound
from ..storage import Storage
from .calculator import TimeSlot, generate_candidates
from .config import BookingConfig, get_booking_config
from .conflicts import apply_conflicts
from .intervals import add_months
from .schedule import resolve_day

# Requested start and slot start are considered equal within this tolerance
MATCH_TOLERANCE = timedelta(minutes=1)


def get_available_slots(
    storage: Storage,
    store_id: int,
    service_id: int,
    target_date: date,
    config: BookingConfig | None = None,
    now: datetime | None = None,
    technician_id: int | None = None,
    exclude_session_id: str | None = None,
    exclude_booking_id: int | None = None,
) -> list[TimeSlot]:
    """
    Calculate the time slots of a service on target_date.

    Args:
        technician_id: Restrict conflicts to store-wide occupiers and this technician
        exclude_session_id: Ignore reservation locks held by this session
        exclude_booking_id: Ignore this booking (when moving it)

    Returns:
        Chronological list of TimeSlot; empty when outside the booking
        window or when the store is closed that day.
    """
    config = config or get_booking_config()
    now = now or datetime.now()

    # Step 1: Store, service, technician
    store = storage.get_store(store_id)
    if not store:
        raise StoreNotFound(f"Store {store_id} not found")

    service = storage.get_service(service_id, store_id)
    if not service:
        raise ServiceNotFound(f"Service {service_id} not found for store {store_id}")

    technician_name = None
    if technician_id is not None:
        technician = storage.get_technician(technician_id, store_id)
        if not technician:
            raise TechnicianNotFound(f"Technician {technician_id} not found for store {store_id}")
        technician_name = technician.name

    # Step 2: Booking window
    earliest_start = now + timedelta(hours=config.min_booking_hours)
    latest_start = add_months(now, config.max_booking_months)
    if target_date < earliest_start.date() or target_date > latest_start.date():
        return []

    # Step 3: Opening hours
    open_interval = resolve_day(store.opening_hours, target_date)
    if open_interval is None:
        return []

    # Step 4: Candidates
    candidates = generate_candidates(
        open_interval,
        service.duration_minutes,
        config.slot_step_minutes,
        technician_id=technician_id,
        technician_name=technician_name,
    )
    if not candidates:
        return []

    # Step 5: Conflicts
    bookings = storage.list_bookings(
        store_id,
        target_date,
        margin_minutes=config.buffer_minutes,
        exclude_booking_id=exclude_booking_id,
    )
    blocks = storage.list_blocks(store_id, target_date)
    locks = storage.list_active_locks(
        store_id, target_date, now, exclude_session_id=exclude_session_id
    )

    return apply_conflicts(
        candidates,
        bookings,
        blocks,
        locks,
        now=now,
        buffer_minutes=config.buffer_minutes,
        earliest_start=earliest_start,
        technician_id=technician_id,
    )


def is_slot_available(
    storage: Storage,
    store_id: int,
    service_id: int,
    start_datetime: datetime,
    config: BookingConfig | None = None,
    now: datetime | None = None,
    technician_id: int | None = None,
    exclude_session_id: str | None = None,
    exclude_booking_id: int | None = None,
) -> bool:
    """Recompute the day and check the slot starting at start_datetime."""
    slots = get_available_slots(
        storage,
        store_id,
        service_id,
        start_datetime.date(),
        config=config,
        now=now,
        technician_id=technician_id,
        exclude_session_id=exclude_session_id,
        exclude_booking_id=exclude_booking_id,
    )

    for slot in slots:
        if abs(slot.start_datetime - start_datetime) < MATCH_TOLERANCE:
            return slot.available
    return False
