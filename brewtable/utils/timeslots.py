from datetime import date, datetime, time, timedelta
from typing import List, Tuple

from brewtable.core.config import settings

# Any fixed day works: slots are wall-clock only, the date just anchors arithmetic
_ANCHOR = date(2000, 1, 1)


def parse_hhmm(value) -> time:
    """Accept a ``time`` or an ``"HH:MM"`` / ``"HH:MM:SS"`` string."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise TypeError(f"expected a time or an HH:MM string, got {type(value).__name__}")
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value, fmt).time()


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def overlaps(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """
    Half-open interval intersection: [start_a, end_a) and [start_b, end_b)
    overlap iff start_a < end_b and start_b < end_a.

    Touching intervals (one ends exactly when the other starts) do not overlap.
    """
    return start_a < end_b and start_b < end_a


def generate_slots(
    hours_open: time,
    hours_close: time,
    slot_minutes: int = None,
) -> List[Tuple[time, time]]:
    """
    Build the fixed slot grid covering [hours_open, hours_close).

    Slots are consecutive and ``slot_minutes`` wide (30 by default). A trailing
    partial slot is dropped, so 07:00-08:15 gives 07:00, 07:30 and nothing for
    the last 15 minutes. Returns an empty list when hours_close <= hours_open.
    Raises ValueError for a non-positive slot width.
    """
    step = timedelta(minutes=slot_minutes or settings.SLOT_MINUTES)
    if step <= timedelta(0):
        raise ValueError("slot_minutes must be positive")
    open_dt = datetime.combine(_ANCHOR, parse_hhmm(hours_open))
    close_dt = datetime.combine(_ANCHOR, parse_hhmm(hours_close))

    slots: List[Tuple[time, time]] = []
    current = open_dt
    while current + step <= close_dt:
        slots.append((current.time(), (current + step).time()))
        current += step
    return slots
