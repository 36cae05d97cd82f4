import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError

from brewtable.core.config import settings
from brewtable.core.errors import BookingError, StoreFailure, ValidationError
from brewtable.db.init_db import create_database, seed_database
from brewtable.db.session import engine, SessionLocal
from brewtable.api.v1.router import api_router
from brewtable.schemas.common import HealthResponse

logger = logging.getLogger(__name__)


def _log_upcoming_bookings() -> int:
    """Log every confirmed booking starting soon, per location. Returns the count."""
    from brewtable.utils.bookings import get_upcoming_bookings, list_locations

    db = SessionLocal()
    try:
        total = 0
        for location in list_locations(db):
            upcoming = get_upcoming_bookings(db, location.id, settings.ALERT_LOOKAHEAD_MINUTES)
            for booking in upcoming:
                logger.info(
                    "Upcoming at %s: %s (party of %d) at %s, booking %d.",
                    location.name,
                    booking.customer_name,
                    booking.party_size,
                    booking.start_time.strftime("%H:%M"),
                    booking.id,
                )
            total += len(upcoming)
        return total
    finally:
        db.close()


async def _upcoming_alert_loop() -> None:
    """Background task: report upcoming confirmed bookings every ALERT_INTERVAL_SECONDS."""
    while True:
        try:
            await asyncio.to_thread(_log_upcoming_bookings)
        except Exception:
            logger.exception("Error during upcoming-bookings check.")
        await asyncio.sleep(settings.ALERT_INTERVAL_SECONDS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: ensure DB exists, create tables, seed placeholders
    create_database(engine)
    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()

    alert_task = None
    if settings.ENABLE_UPCOMING_ALERTS:
        alert_task = asyncio.create_task(_upcoming_alert_loop())
    yield

    # Shutdown: cancel background task
    if alert_task:
        alert_task.cancel()
        try:
            await alert_task
        except asyncio.CancelledError:
            pass


from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render pydantic request errors in the same shape as engine ValidationErrors."""
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, exc.errors())
    first = exc.errors()[0] if exc.errors() else {}
    # loc is e.g. ("body", "customer_email") or ("query", "date")
    loc = [part for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = str(loc[-1]) if loc else None
    error = ValidationError(first.get("msg", "Invalid request"), field=field)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Unhandled database error on %s %s", request.method, request.url.path, exc_info=exc)
    failure = StoreFailure("The booking store is unavailable, please try again")
    return JSONResponse(status_code=failure.status_code, content=failure.to_dict())


app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}
