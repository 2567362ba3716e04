# backend/velofit/services/slots/config.py
"""
Booking configuration for slots calculation.
"""

from dataclasses import dataclass
from functools import lru_cache

from ...config import settings


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the booking/slots engine.

    Attributes:
        min_booking_hours: Minimum notice before a slot can be booked
        max_booking_months: How many months ahead slots are offered
        buffer_minutes: Gap kept free after every booking
        lock_minutes: Lifetime of a reservation lock
        slot_step_minutes: Candidate grid step in minutes (15/30/60)
        lock_sweep_interval_seconds: Period of the expired-lock purge
    """
    min_booking_hours: int = 48
    max_booking_months: int = 3
    buffer_minutes: int = 15
    lock_minutes: int = 10
    slot_step_minutes: int = 30  # 15 / 30 / 60
    lock_sweep_interval_seconds: int = 300

    def __post_init__(self):
        """Validate configuration."""
        if self.slot_step_minutes not in (15, 30, 60):
            raise ValueError(f"slot_step_minutes must be 15, 30, or 60, got {self.slot_step_minutes}")
        if self.min_booking_hours < 0:
            raise ValueError(f"min_booking_hours must be >= 0, got {self.min_booking_hours}")
        if self.max_booking_months < 1:
            raise ValueError(f"max_booking_months must be >= 1, got {self.max_booking_months}")
        if self.buffer_minutes < 0:
            raise ValueError(f"buffer_minutes must be >= 0, got {self.buffer_minutes}")
        if self.lock_minutes < 1:
            raise ValueError(f"lock_minutes must be >= 1, got {self.lock_minutes}")
        if self.lock_sweep_interval_seconds < 1:
            raise ValueError(
                f"lock_sweep_interval_seconds must be >= 1, got {self.lock_sweep_interval_seconds}"
            )


@lru_cache
def get_booking_config() -> BookingConfig:
    """Get booking configuration (singleton) from environment settings."""
    return BookingConfig(
        min_booking_hours=settings.min_booking_hours,
        max_booking_months=settings.max_booking_months,
        buffer_minutes=settings.buffer_minutes,
        lock_minutes=settings.booking_lock_minutes,
        slot_step_minutes=settings.slot_step_minutes,
        lock_sweep_interval_seconds=settings.lock_sweep_interval_seconds,
    )


def time_str_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hour, minute = value.strip().split(":")
    return int(hour) * 60 + int(minute)
