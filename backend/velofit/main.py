import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import settings
from .database import SessionLocal, engine, init_db
from .errors import BookingError
from .redis_client import redis_client
from .routers import availability_blocks, booking_locks, bookings, services, slots, stores
from .services.lock_sweeper import LockSweeper
from .services.slots import get_booking_config

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(engine)
    sweeper = LockSweeper(
        SessionLocal,
        interval=get_booking_config().lock_sweep_interval_seconds,
    )
    sweeper.start()
    try:
        yield
    finally:
        await sweeper.stop()


app = FastAPI(title="Velofit Booking API", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


app.include_router(stores.router)
app.include_router(services.router)
app.include_router(slots.router)
app.include_router(bookings.router)
app.include_router(availability_blocks.router)
app.include_router(booking_locks.router)


@app.get("/health")
def health():
    try:
        redis_ok = bool(redis_client.ping())
    except Exception:
        redis_ok = False
    return {"redis": redis_ok}
