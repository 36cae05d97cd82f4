from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Brewtable Reservations API"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "changeme"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12

    # Database
    # SQLite by default; any SQLAlchemy URL works (postgresql://... needs psycopg2)
    DATABASE_URL: str = "sqlite:///./data/brewtable.db"
    SQLITE_BUSY_TIMEOUT: int = 30  # seconds a writer waits for the lock

    # Booking rules
    SLOT_MINUTES: int = Field(30, gt=0)
    DEFAULT_PARTY_SIZE: int = 6
    PAYMENT_AMOUNT_CENTS: int = 500

    # POS alerts: confirmed bookings starting within the lookahead are logged
    ENABLE_UPCOMING_ALERTS: bool = True
    ALERT_LOOKAHEAD_MINUTES: int = 10
    ALERT_INTERVAL_SECONDS: int = 60

    # Seed data
    SEED_DEMO_DATA: bool = True
    ADMIN_EMAIL: str = "admin@brewtable.example.com"
    ADMIN_PASSWORD: str = "change-this-admin-password"
    ADMIN_NAME: str = "Shop Manager"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )


settings = Settings()
