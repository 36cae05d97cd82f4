"""Shared test fixtures."""
import os

# Settings are read at import time; keep the app from seeding or polling during tests
os.environ.setdefault("ENABLE_UPCOMING_ALERTS", "false")
os.environ.setdefault("SEED_DEMO_DATA", "false")

from datetime import date, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from brewtable.core.security import create_access_token, get_password_hash
from brewtable.db.base import Base, Location, Manager
from brewtable.db.session import get_db, make_engine
from brewtable.main import app

BOOKING_DATE = date(2025, 6, 1)


@pytest.fixture
def engine(tmp_path):
    """A file-backed SQLite database per test so several connections can race."""
    engine = make_engine(f"sqlite:///{tmp_path / 'brewtable-test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def location(db) -> Location:
    """A location open 07:00-08:00: exactly two slots."""
    loc = Location(
        name="Test Cafe",
        address="1 Bean Street",
        city="Auburn",
        state="AL",
        zip="36830",
        hours_open=time(7, 0),
        hours_close=time(8, 0),
        num_tables=1,
    )
    db.add(loc)
    db.commit()
    db.refresh(loc)
    return loc


@pytest.fixture
def manager(db) -> Manager:
    mgr = Manager(
        email="manager@example.com",
        password_hash=get_password_hash("espresso"),
        name="Test Manager",
        location_ids="",
    )
    db.add(mgr)
    db.commit()
    db.refresh(mgr)
    return mgr


@pytest.fixture
def auth_headers(manager) -> dict:
    return {"Authorization": f"Bearer {create_access_token(manager.id)}"}


@pytest.fixture
def client(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()
