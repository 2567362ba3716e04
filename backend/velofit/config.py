# backend/velofit/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repository root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/velofit.db"
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout: float = 2.0
    db_timeout_seconds: float = 5.0

    # Booking policy
    min_booking_hours: int = 48
    max_booking_months: int = 3
    buffer_minutes: int = 15
    booking_lock_minutes: int = 10
    slot_step_minutes: int = 30
    lock_sweep_interval_seconds: int = 300

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # Relative sqlite paths are anchored at the repository root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
