"""
Availability and conflict engine.

Every function takes the SQLAlchemy session it should work against, so each
request (or test) brings its own store. Reads never raise for missing rows:
they return ``None`` or an empty list. Writes validate first, then run the
availability re-check and the insert inside one write transaction.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import exists
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from brewtable.core.config import settings
from brewtable.core.errors import (
    BookingError,
    SlotConflict,
    StoreFailure,
    UnknownLocation,
    ValidationError,
)
from brewtable.db.session import SQLITE_BEGIN_OPTION
from brewtable.models.blocked_window import BlockedWindow
from brewtable.models.booking import Booking, BookingStatus
from brewtable.models.location import Location
from brewtable.schemas.blocked_window import BlockReason
from brewtable.utils.timeslots import format_hhmm, generate_slots, overlaps, parse_hhmm

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _begin_write(db: Session) -> None:
    """
    Open a write transaction on ``db``.

    On SQLite this is BEGIN IMMEDIATE, so a concurrent writer waits until we
    commit and then sees our row. Any read transaction already open on the
    session is committed first so the write starts from current state.
    """
    if db.in_transaction():
        db.commit()
    db.connection(execution_options={SQLITE_BEGIN_OPTION: "IMMEDIATE"})


def _to_time(value, field: str) -> time:
    try:
        return parse_hhmm(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a wall-clock time (HH:MM)", field=field)


def _check_interval(start_time, end_time) -> tuple:
    start = _to_time(start_time, "start_time")
    end = _to_time(end_time, "end_time")
    if start >= end:
        raise ValidationError("start_time must be before end_time", field="end_time")
    return start, end


def _validate_email(value) -> str:
    try:
        return str(_email_adapter.validate_python(value))
    except PydanticValidationError:
        raise ValidationError(f"{value!r} is not a valid email address", field="customer_email")


def _live_bookings(db: Session, location_id: int, booking_date: date) -> List[Booking]:
    """Non-cancelled bookings for a location/date, ordered by start."""
    return (
        db.query(Booking)
        .filter(
            Booking.location_id == location_id,
            Booking.booking_date == booking_date,
            Booking.status != BookingStatus.CANCELLED,
        )
        .order_by(Booking.start_time)
        .all()
    )


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


def list_locations(db: Session) -> List[Location]:
    return db.query(Location).order_by(Location.name).all()


def get_location(db: Session, location_id: int) -> Optional[Location]:
    return db.get(Location, location_id)


# ---------------------------------------------------------------------------
# Availability
# ---------------------------------------------------------------------------


def is_slot_available(
    db: Session,
    location_id: int,
    booking_date: date,
    start_time: time,
    end_time: time,
) -> bool:
    """
    True unless [start_time, end_time) overlaps a non-cancelled booking or a
    blocked window for the location/date. One existence query per category.
    """
    booked = db.query(
        exists().where(
            Booking.location_id == location_id,
            Booking.booking_date == booking_date,
            Booking.status != BookingStatus.CANCELLED,
            Booking.start_time < end_time,
            Booking.end_time > start_time,
        )
    ).scalar()
    if booked:
        return False

    blocked = db.query(
        exists().where(
            BlockedWindow.location_id == location_id,
            BlockedWindow.date == booking_date,
            BlockedWindow.start_time < end_time,
            BlockedWindow.end_time > start_time,
        )
    ).scalar()
    return not blocked


def get_available_slots(db: Session, location_id: int, booking_date: date) -> List[dict]:
    """
    Return the slot grid for a location/date as ``{"start", "end", "available"}``
    dicts (HH:MM strings), in start order. Unknown location -> [].

    Bookings and blocks for the day are loaded once and every slot is checked
    against all of them, which gives the same answer as ``is_slot_available``
    per slot.
    """
    location = get_location(db, location_id)
    if not location:
        return []

    taken = [(b.start_time, b.end_time) for b in _live_bookings(db, location_id, booking_date)]
    blocked = [(w.start_time, w.end_time) for w in list_blocked_windows(db, location_id, booking_date)]

    slots = []
    for start, end in generate_slots(location.hours_open, location.hours_close):
        is_booked = any(overlaps(start, end, s, e) for s, e in taken)
        is_blocked = any(overlaps(start, end, s, e) for s, e in blocked)
        slots.append(
            {
                "start": format_hhmm(start),
                "end": format_hhmm(end),
                "available": not (is_booked or is_blocked),
            }
        )
    return slots


# ---------------------------------------------------------------------------
# Bookings
# ---------------------------------------------------------------------------


def create_booking(
    db: Session,
    *,
    location_id: int,
    booking_date: date,
    start_time,
    end_time,
    customer_name: str,
    customer_email: str,
    customer_phone: Optional[str] = None,
    party_size: Optional[int] = None,
    payment_id: Optional[str] = None,
) -> Booking:
    """
    Validate and store a booking.

    Status is ``confirmed`` when a payment reference is supplied, otherwise
    ``pending``. Raises ValidationError, UnknownLocation, SlotConflict (the
    interval is taken or blocked) or StoreFailure. Nothing is written unless
    every check passes.
    """
    name = customer_name.strip() if isinstance(customer_name, str) else ""
    if not name:
        raise ValidationError("Customer name is required", field="customer_name")
    email = _validate_email(customer_email)
    start, end = _check_interval(start_time, end_time)

    if party_size is None:
        party_size = settings.DEFAULT_PARTY_SIZE
    if party_size < 1:
        raise ValidationError("party_size must be at least 1", field="party_size")

    status = BookingStatus.CONFIRMED if payment_id else BookingStatus.PENDING

    try:
        _begin_write(db)

        # Row lock on server databases; SQLite is already serialized by BEGIN IMMEDIATE
        location = (
            db.query(Location)
            .filter(Location.id == location_id)
            .with_for_update()
            .first()
        )
        if not location:
            raise UnknownLocation(location_id)

        if not is_slot_available(db, location_id, booking_date, start, end):
            raise SlotConflict(
                f"{format_hhmm(start)}-{format_hhmm(end)} on {booking_date} "
                f"is no longer available at {location.name}"
            )

        booking = Booking(
            location_id=location_id,
            booking_date=booking_date,
            start_time=start,
            end_time=end,
            customer_name=name,
            customer_email=email,
            customer_phone=customer_phone or None,
            party_size=party_size,
            status=status,
            payment_id=payment_id,
            payment_amount=settings.PAYMENT_AMOUNT_CENTS,
        )
        db.add(booking)
        db.commit()
    except SlotConflict:
        db.rollback()
        logger.warning(
            "Slot conflict for location %s on %s %s-%s",
            location_id, booking_date, format_hhmm(start), format_hhmm(end),
        )
        raise
    except BookingError:
        db.rollback()
        raise
    except IntegrityError as exc:
        # A racing writer got the same start time past the check
        db.rollback()
        logger.warning("Unique slot index rejected booking for location %s on %s", location_id, booking_date)
        raise SlotConflict(
            f"{format_hhmm(start)}-{format_hhmm(end)} on {booking_date} is no longer available"
        ) from exc
    except OperationalError as exc:
        db.rollback()
        logger.exception("Booking store failure while creating booking.")
        raise StoreFailure("Failed to create booking") from exc

    db.refresh(booking)
    logger.info(
        "Created %s booking %d for location %d on %s %s-%s.",
        booking.status.value, booking.id, location_id, booking_date,
        format_hhmm(start), format_hhmm(end),
    )
    return booking


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return db.get(Booking, booking_id)


def get_bookings_for_date(db: Session, location_id: int, booking_date: date) -> List[Booking]:
    """Manager day view: every non-cancelled booking, earliest first."""
    return _live_bookings(db, location_id, booking_date)


def cancel_booking(db: Session, booking_id: int) -> bool:
    """
    Mark a booking cancelled. Returns False when no such booking exists.

    Cancelling twice is harmless: the status stays ``cancelled`` and True is
    returned again. Only the status column is touched.
    """
    try:
        _begin_write(db)
        updated = (
            db.query(Booking)
            .filter(Booking.id == booking_id)
            .update({"status": BookingStatus.CANCELLED}, synchronize_session="fetch")
        )
        db.commit()
    except OperationalError as exc:
        db.rollback()
        logger.exception("Booking store failure while cancelling booking %s.", booking_id)
        raise StoreFailure("Failed to cancel booking") from exc

    if updated:
        logger.info("Cancelled booking %d.", booking_id)
    return updated > 0


def get_upcoming_bookings(
    db: Session,
    location_id: int,
    minutes_ahead: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Booking]:
    """
    Confirmed bookings for today whose start falls in [now, now + minutes_ahead].

    Times compare at minute precision: ``now`` is truncated to the minute, so
    at 09:00:45 a booking that started at 09:00 is still reported. A window
    running past midnight stops at the end of today.
    """
    if minutes_ahead is None:
        minutes_ahead = settings.ALERT_LOOKAHEAD_MINUTES
    now = (now or datetime.now()).replace(second=0, microsecond=0)
    today = now.date()
    horizon = now + timedelta(minutes=minutes_ahead)
    upper = horizon.time() if horizon.date() == today else time.max

    return (
        db.query(Booking)
        .filter(
            Booking.location_id == location_id,
            Booking.booking_date == today,
            Booking.start_time >= now.time(),
            Booking.start_time <= upper,
            Booking.status == BookingStatus.CONFIRMED,
        )
        .order_by(Booking.start_time)
        .all()
    )


# ---------------------------------------------------------------------------
# Blocked windows
# ---------------------------------------------------------------------------


def _reason_label(reason, custom_reason: Optional[str]) -> str:
    try:
        reason = BlockReason(reason)
    except ValueError:
        allowed = ", ".join(r.value for r in BlockReason)
        raise ValidationError(f"reason must be one of: {allowed}", field="reason")

    if reason == BlockReason.OTHER:
        text = (custom_reason or "").strip()
        if not text:
            raise ValidationError("custom_reason is required when reason is 'other'", field="custom_reason")
        return text
    return reason.value


def create_blocked_window(
    db: Session,
    *,
    location_id: int,
    block_date: date,
    start_time,
    end_time,
    reason="peak_hours",
    custom_reason: Optional[str] = None,
    created_by: Optional[int] = None,
) -> BlockedWindow:
    """
    Store a staff blackout. Overlapping windows are allowed (union semantics)
    and existing bookings inside the window are left alone: blocking only
    affects availability computed afterwards.
    """
    start, end = _check_interval(start_time, end_time)
    label = _reason_label(reason, custom_reason)

    try:
        _begin_write(db)
        if not get_location(db, location_id):
            raise UnknownLocation(location_id)

        window = BlockedWindow(
            location_id=location_id,
            date=block_date,
            start_time=start,
            end_time=end,
            reason=label,
            created_by=created_by,
        )
        db.add(window)
        db.commit()
    except BookingError:
        db.rollback()
        raise
    except OperationalError as exc:
        db.rollback()
        logger.exception("Booking store failure while blocking time.")
        raise StoreFailure("Failed to block time") from exc

    db.refresh(window)
    logger.info(
        "Blocked location %d on %s %s-%s (%s).",
        location_id, block_date, format_hhmm(start), format_hhmm(end), label,
    )
    return window


def list_blocked_windows(db: Session, location_id: int, block_date: date) -> List[BlockedWindow]:
    return (
        db.query(BlockedWindow)
        .filter(
            BlockedWindow.location_id == location_id,
            BlockedWindow.date == block_date,
        )
        .order_by(BlockedWindow.start_time)
        .all()
    )
