"""Shared test fixtures and helpers."""

import json
from datetime import date, datetime
from typing import Optional
from unittest.mock import patch

import pytest

from velofit.database import build_engine, init_db, make_session_factories
from velofit.models.generated import (
    AvailabilityBlocks,
    BookingLocks,
    Bookings,
    Services,
    Stores,
    Technicians,
)
from velofit.schemas.bookings import BookingCreate
from velofit.services.slots.config import BookingConfig
from velofit.services.storage import SqlStorage

# Monday 09:00; MONDAY is one week later, well past the 48h lead time
NOW = datetime(2025, 3, 3, 9, 0)
MONDAY = date(2025, 3, 10)
SUNDAY = date(2025, 3, 9)

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def opening_hours(open_: str = "09:00", close: str = "19:00", closed_days=("sunday",)) -> str:
    return json.dumps({
        day: {"open": open_, "close": close, "closed": day in closed_days}
        for day in WEEKDAYS
    })


def at(hour: int, minute: int = 0, day: date = MONDAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


@pytest.fixture(autouse=True)
def redis_mock():
    """Events never reach a real Redis."""
    with patch("velofit.services.events.redis_client") as mock:
        yield mock


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'velofit.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factories(engine):
    return make_session_factories(engine)


@pytest.fixture
def db(session_factories):
    session = session_factories[0]()
    yield session
    session.close()


@pytest.fixture
def storage(db):
    return SqlStorage(db)


@pytest.fixture
def config():
    return BookingConfig()


@pytest.fixture
def store(db):
    obj = Stores(name="Velofit Lyon", city="Lyon", opening_hours=opening_hours(), is_active=1)
    db.add(obj)
    db.commit()
    return obj


@pytest.fixture
def service(db, store):
    obj = Services(
        store_id=store.id,
        name="Étude posturale",
        service_type="bike_fitting",
        duration_minutes=60,
        price=150.0,
        is_active=1,
    )
    db.add(obj)
    db.commit()
    return obj


@pytest.fixture
def technician(db, store):
    obj = Technicians(store_id=store.id, name="Julien", is_active=1)
    db.add(obj)
    db.commit()
    return obj


def add_booking(
    db,
    store_id: int,
    service_id: int,
    start: datetime,
    end: datetime,
    status: str = "pending",
    technician_id: Optional[int] = None,
    token: Optional[str] = None,
) -> Bookings:
    obj = Bookings(
        booking_token=token or f"tok-{start:%Y%m%d%H%M}-{status}-{technician_id}",
        store_id=store_id,
        service_id=service_id,
        technician_id=technician_id,
        start_datetime=start,
        end_datetime=end,
        status=status,
        customer_firstname="Anna",
        customer_lastname="Martin",
        customer_email="anna@example.com",
        customer_phone="0612345678",
        customer_data="{}",
        created_at=NOW,
        updated_at=NOW,
    )
    db.add(obj)
    db.commit()
    return obj


def add_block(db, store_id: int, start: datetime, end: datetime, technician_id: Optional[int] = None):
    obj = AvailabilityBlocks(
        store_id=store_id,
        technician_id=technician_id,
        start_datetime=start,
        end_datetime=end,
        reason="Maintenance",
        block_type="maintenance",
    )
    db.add(obj)
    db.commit()
    return obj


def lock_count(db) -> int:
    return db.query(BookingLocks).count()


def booking_data(
    store_id: int,
    service_id: int,
    start: datetime,
    session_id: Optional[str] = None,
    technician_id: Optional[int] = None,
    email: str = "paul@example.com",
) -> BookingCreate:
    return BookingCreate(
        store_id=store_id,
        service_id=service_id,
        technician_id=technician_id,
        start_datetime=start,
        customer_firstname="Paul",
        customer_lastname="Durand",
        customer_email=email,
        customer_phone="0612345678",
        customer_data={"height": 180, "bike_info": "Route carbone"},
        session_id=session_id,
    )
