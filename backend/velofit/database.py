from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from .config import settings
from .models.generated import Base

# Execution option marking connections that must start with a write lock
EXCLUSIVE_BEGIN = "velofit_exclusive_begin"


def build_engine(url: str, timeout: float | None = None) -> Engine:
    """
    Create the SQLAlchemy engine.

    SQLite: pysqlite's own transaction handling is disabled and BEGIN is
    emitted by us, so booking transactions can open with BEGIN IMMEDIATE
    (database write lock taken before the availability re-check).
    """
    timeout = settings.db_timeout_seconds if timeout is None else timeout

    if not url.startswith("sqlite"):
        return create_engine(
            url,
            pool_pre_ping=True,
            pool_timeout=timeout,
            connect_args=server_connect_args(url, timeout),
        )

    # check_same_thread=False: FastAPI serves sync endpoints from a thread pool
    engine = create_engine(
        url,
        connect_args={"check_same_thread": False, "timeout": timeout},
    )

    @event.listens_for(engine, "connect")
    def enable_sqlite_pragmas(dbapi_connection, _):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        # WAL: open readers do not block a booking transaction's commit
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def sqlite_begin(conn):
        if conn.get_execution_options().get(EXCLUSIVE_BEGIN):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")

    return engine


def server_connect_args(url: str, timeout: float) -> dict:
    """
    Driver arguments bounding statement duration on server databases.

    pool_timeout only bounds the wait for a pooled connection.
    PostgreSQL: server-side statement_timeout. MySQL: socket read timeout.
    Other backends get no statement limit.
    """
    backend = make_url(url).get_backend_name()
    if backend == "postgresql":
        return {
            "options": f"-c statement_timeout={int(timeout * 1000)}",
            "connect_timeout": max(1, int(timeout)),
        }
    if backend == "mysql":
        return {"read_timeout": max(1, int(timeout)), "connect_timeout": max(1, int(timeout))}
    return {}


def make_session_factories(engine: Engine) -> tuple[sessionmaker, sessionmaker]:
    """
    Returns:
        (regular session factory, booking session factory).
        Booking sessions start every transaction with an exclusive write lock.
    """
    regular = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    # expire_on_commit=False: reading the committed booking must not open a
    # new exclusive transaction
    booking = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine.execution_options(**{EXCLUSIVE_BEGIN: True}),
    )
    return regular, booking


def init_db(engine: Engine) -> None:
    """Create missing tables (and the sqlite data directory)."""
    if engine.url.get_backend_name() == "sqlite" and engine.url.database:
        Path(engine.url.database).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)


engine = build_engine(settings.resolved_database_url)

# SessionLocal: reads and plain writes. BookingSessionLocal: booking transactions
SessionLocal, BookingSessionLocal = make_session_factories(engine)


# Dependencies for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_booking_db():
    db = BookingSessionLocal()
    try:
        yield db
    finally:
        db.close()
