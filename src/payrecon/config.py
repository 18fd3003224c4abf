"""Application settings, loaded from the environment and an optional .env file."""
from __future__ import annotations
from datetime import time
from functools import cached_property
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATA_DIR: Path = Path("data")
    DATABASE_URL: str = "sqlite:///data/payrecon.db"
    LOG_LEVEL: str = "INFO"

    # Business calendar. All week/day boundaries are computed here, never in host-local time.
    BUSINESS_TIMEZONE: str = "America/New_York"

    # The time clock force-closes open shifts at this minute.
    AUTO_CLOCKOUT_TIME: str = "18:30"
    AUTO_CLOCKOUT_TOLERANCE_MINUTES: int = 0

    SUSPICIOUS_SHIFT_HOURS: float = 5 / 60
    RED_FLAG_MAX_HOURS: float = 13.0
    RED_FLAG_MIN_HOURS: float = 0.5

    # Hours the Biweekly arrangement absorbs before the Weekly one gets overtime.
    SPLIT_PAY_BASE_HOURS: float = 40.0

    API_BASE_URL: str = "http://127.0.0.1:8000"

    @field_validator("AUTO_CLOCKOUT_TIME")
    @classmethod
    def _valid_hhmm(cls, v: str) -> str:
        time.fromisoformat(v)
        return v

    @field_validator("BUSINESS_TIMEZONE")
    @classmethod
    def _valid_zone(cls, v: str) -> str:
        ZoneInfo(v)
        return v

    @property
    def data_dir(self) -> Path:
        return self.DATA_DIR

    @cached_property
    def business_tz(self) -> ZoneInfo:
        return ZoneInfo(self.BUSINESS_TIMEZONE)

    @property
    def auto_clockout_cutoff(self) -> time:
        return time.fromisoformat(self.AUTO_CLOCKOUT_TIME)


settings = Settings()
