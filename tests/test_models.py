"""ORM mapping and schema checks."""
from sqlalchemy import inspect
from sqlalchemy.orm import configure_mappers

from brewtable.db.base import Base
from brewtable import schemas


def test_orm_mappings_are_valid():
    configure_mappers()
    assert {"locations", "bookings", "blocked_times", "managers"} <= set(Base.metadata.tables)


def test_overlap_query_indexes_exist(engine):
    inspector = inspect(engine)
    booking_indexes = {ix["name"] for ix in inspector.get_indexes("bookings")}
    block_indexes = {ix["name"] for ix in inspector.get_indexes("blocked_times")}

    assert "idx_bookings_location_date" in booking_indexes
    assert "uq_bookings_live_slot" in booking_indexes
    assert "idx_blocked_times_location_date" in block_indexes


def test_booking_schema_rejects_bad_email():
    import pytest
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        schemas.BookingCreate(
            location_id=1,
            booking_date="2025-06-01",
            start_time="07:00",
            end_time="07:30",
            customer_name="Ada",
            customer_email="not-an-email",
        )


def test_booking_schema_blank_optionals_become_none():
    data = schemas.BookingCreate(
        location_id=1,
        booking_date="2025-06-01",
        start_time="07:00",
        end_time="07:30",
        customer_name="Ada",
        customer_email="ada@example.com",
        customer_phone="",
        payment_id="",
    )
    assert data.customer_phone is None
    assert data.payment_id is None
    assert data.party_size is None
