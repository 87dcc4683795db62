from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    # Pydantic Settings will automatically look for these as environment variables
    # or in a .env file

    # Database Settings
    POSTGRES_USER: str = "user"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "mentor_scheduling_db"
    DATABASE_URL: Optional[str] = None # Overrides the POSTGRES_* parts when set (e.g. "sqlite://")

    # SQLAlchemy Connection Pooling Settings
    # Refer to https://docs.sqlalchemy.org/en/20/core/engines.html#connection-pooling-options
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30 # seconds
    DB_POOL_RECYCLE: int = 1800 # seconds (30 minutes)

    # Tables are owned by the hosted backend; only create them for local development
    DB_CREATE_TABLES: bool = False

    # Booking Rule Settings
    BOOKING_TIMEZONE: str = "UTC" # Zone in which booking windows' day/time are interpreted
    DEFAULT_ADVANCE_BOOKING_WEEKS: int = 1
    DEFAULT_SLOT_DURATION_MINUTES: int = 60
    AVAILABLE_SLOTS_LIMIT: int = 50

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore" # Ignore extra env variables not defined here
    )

@lru_cache() # Cache settings to avoid re-reading on every call
def get_settings():
    """Returns a cached instance of the Settings."""
    return Settings()
