# backend/velofit/services/slots/__init__.py
"""
Slots calculation module.

Availability is recomputed on every call from opening hours, bookings,
availability blocks and reservation locks.
"""

from .config import BookingConfig, get_booking_config
from .calculator import TimeSlot, generate_candidates
from .availability import get_available_slots, is_slot_available
from .locks import acquire_lock, release_lock, purge_expired_locks

__all__ = [
    "BookingConfig",
    "get_booking_config",
    "TimeSlot",
    "generate_candidates",
    "get_available_slots",
    "is_slot_available",
    "acquire_lock",
    "release_lock",
    "purge_expired_locks",
]
