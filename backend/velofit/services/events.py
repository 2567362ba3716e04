"""
backend/velofit/services/events.py

Event emitter: pushes booking lifecycle events to a Redis list for the
notification consumers (confirmation/cancellation emails).

Queue: events:bookings
"""

import json
import time
import logging

from ..redis_client import redis_client

logger = logging.getLogger(__name__)

BOOKING_EVENTS_QUEUE = "events:bookings"


def emit_event(event_type: str, payload: dict) -> None:
    """
    Emit a booking event.

    Failures are logged and not raised: the booking itself is already committed.
    """
    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis_client.rpush(BOOKING_EVENTS_QUEUE, json.dumps(event, default=str))
        logger.info(f"Event emitted: {event_type} → {BOOKING_EVENTS_QUEUE}")
    except Exception as e:
        logger.error(f"Failed to emit event {event_type}: {e}")


def emit_booking_event(event_type: str, booking, **extra) -> None:
    """Emit an event describing a booking row."""
    emit_event(event_type, {
        "booking_id": booking.id,
        "booking_token": booking.booking_token,
        "store_id": booking.store_id,
        "service_id": booking.service_id,
        "technician_id": booking.technician_id,
        "start_datetime": booking.start_datetime.isoformat(),
        "end_datetime": booking.end_datetime.isoformat(),
        "status": booking.status,
        **extra,
    })
