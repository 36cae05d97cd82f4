import logging
from datetime import time
from pathlib import Path

from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session

from brewtable.core.config import settings
from brewtable.core.security import get_password_hash
from brewtable.db.base import Base, Location, Manager

logger = logging.getLogger(__name__)

# Placeholder locations for a fresh install
SEED_LOCATIONS = [
    ("Downtown Auburn", "123 Main Street", "Auburn", "AL", "36830", time(7, 0), time(18, 0), 1),
    ("West Midtown Atlanta", "456 Howell Mill Rd", "Atlanta", "GA", "30318", time(7, 0), time(19, 0), 1),
    ("Star Metals Atlanta", "789 Star Metals Way", "Atlanta", "GA", "30318", time(7, 0), time(19, 0), 1),
]


def create_database(engine: Engine) -> None:
    """Make sure the database file's directory exists (SQLite), then create tables."""
    url = make_url(str(engine.url))
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        db_dir = Path(url.database).parent
        if not db_dir.exists():
            logger.info("Creating database directory %s", db_dir)
            db_dir.mkdir(parents=True, exist_ok=True)

    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized.")


def seed_database(db: Session) -> None:
    """Insert placeholder locations and the first manager when the tables are empty."""
    if db.query(Location).count() == 0:
        for name, address, city, state, zip_code, hours_open, hours_close, num_tables in SEED_LOCATIONS:
            db.add(
                Location(
                    name=name,
                    address=address,
                    city=city,
                    state=state,
                    zip=zip_code,
                    hours_open=hours_open,
                    hours_close=hours_close,
                    num_tables=num_tables,
                )
            )
        db.commit()
        logger.info("Seed data inserted (%d placeholder locations).", len(SEED_LOCATIONS))

    if db.query(Manager).count() == 0:
        db.add(
            Manager(
                email=settings.ADMIN_EMAIL,
                password_hash=get_password_hash(settings.ADMIN_PASSWORD),
                name=settings.ADMIN_NAME,
                location_ids="",
            )
        )
        db.commit()
        logger.info("Seed manager %s created.", settings.ADMIN_EMAIL)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    from brewtable.db.session import SessionLocal, engine

    create_database(engine)
    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()
