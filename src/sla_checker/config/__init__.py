"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from datetime import timedelta
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="sla-checker", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== Holiday Source (date.nager.at) ==========
    holiday_api_url: str = Field(
        default="https://date.nager.at/api/v3/PublicHolidays",
        description="Base URL of the public holidays API"
    )
    holiday_country_code: str = Field(
        default="GB",
        description="ISO 3166-1 alpha-2 country used when a request names none",
        min_length=2,
        max_length=2
    )
    holiday_cache_ttl_seconds: int = Field(
        default=7 * 24 * 3600,
        description="How long fetched holiday lists stay cached",
        ge=1
    )
    holiday_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for holiday API calls",
        ge=0.1,
        le=60
    )
    holiday_max_retries: int = Field(
        default=3,
        description="Attempts per holiday fetch before giving up",
        ge=1,
        le=10
    )

    # ========== SLA Profile ==========
    sla_profile_path: Path = Field(
        default=Path("sla_profile.yaml"),
        description="Path to the SLA profile YAML file"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class TimeUnit(str, Enum):
    """Units an SLA duration can be expressed in."""
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"


class Weekday(int, Enum):
    """Weekdays, numbered like datetime.weekday()."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


# ========== Lists for validation ==========

VALID_TIME_UNITS = [unit.value for unit in TimeUnit]
WEEKDAY_NAMES = {day.name.lower(): day.value for day in Weekday}
WORKING_WEEK = frozenset(day.value for day in (
    Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY,
    Weekday.THURSDAY, Weekday.FRIDAY
))

# Longest SLA accepted, in business time. Bounds the hour-by-hour deadline walk.
MAX_SLA_DURATION = timedelta(days=366)
MAX_DURATION_AMOUNT = int(MAX_SLA_DURATION.total_seconds())
