"""
SLA Value Objects
==================

Immutable value objects for the SLA domain.

Value objects are defined by their attributes rather than an identity.
They are immutable and can be freely shared between concurrent
calculations.
"""

from datetime import date, datetime
from typing import Any, FrozenSet, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sla_checker.config import MAX_DURATION_AMOUNT, WEEKDAY_NAMES, WORKING_WEEK, TimeUnit


def parse_weekdays(values: Iterable[Any]) -> FrozenSet[int]:
    """
    Normalise weekday names ("monday") or numbers (0-6, Monday=0).

    Raises:
        ValueError: on an unknown name or out-of-range number
    """
    days = set()
    for value in values:
        if isinstance(value, str) and not value.isdigit():
            key = value.strip().lower()
            if key not in WEEKDAY_NAMES:
                raise ValueError(f"unknown weekday: {value!r}")
            days.add(WEEKDAY_NAMES[key])
            continue
        day = int(value)
        if not 0 <= day <= 6:
            raise ValueError(f"weekday must be in 0..6, got {day}")
        days.add(day)
    return frozenset(days)


def required_weekdays(values: Iterable[Any]) -> FrozenSet[int]:
    """Parse weekdays; an empty set would never reach a business day."""
    days = parse_weekdays(values)
    if not days:
        raise ValueError("valid_days must contain at least one weekday")
    return days


class BusinessHours(BaseModel):
    """
    Daily business window, half-open: [start_hour, end_hour).

    end_hour may be 24 to run the window to midnight.
    """
    model_config = ConfigDict(frozen=True)

    start_hour: int = Field(default=9, ge=0, le=23, description="First business hour")
    end_hour: int = Field(default=17, ge=1, le=24, description="Hour the window closes")

    @model_validator(mode="after")
    def validate_window(self) -> "BusinessHours":
        if self.start_hour >= self.end_hour:
            raise ValueError(
                f"start_hour ({self.start_hour}) must be before end_hour ({self.end_hour})"
            )
        return self


class SLAConfig(BaseModel):
    """
    Everything one deadline calculation needs.

    duration_unit stays a plain string: an unknown unit is a configuration
    error raised by the calculation, not by construction.
    """
    model_config = ConfigDict(frozen=True)

    start_time: datetime = Field(..., description="Instant the SLA clock starts")
    duration_amount: int = Field(..., ge=0, le=MAX_DURATION_AMOUNT, description="SLA length, e.g. 4")
    duration_unit: str = Field(default=TimeUnit.HOURS.value, description="seconds, minutes, hours or days")
    business_hours: BusinessHours = Field(default_factory=BusinessHours)
    valid_days: FrozenSet[int] = Field(
        default=frozenset(WORKING_WEEK),
        description="Weekdays eligible for business time (Monday=0)"
    )
    holidays: FrozenSet[date] = Field(
        default_factory=frozenset,
        description="Calendar dates excluded from business time"
    )
    ignore_holidays: bool = Field(default=False, description="Never consult holidays")

    @field_validator("valid_days", mode="before")
    @classmethod
    def validate_valid_days(cls, v: Any) -> FrozenSet[int]:
        """Accept names or numbers."""
        return required_weekdays(v)

    @field_validator("holidays", mode="before")
    @classmethod
    def validate_holidays(cls, v: Any) -> Any:
        """Reduce datetimes to their calendar date."""
        if v is None:
            return frozenset()
        return [item.date() if isinstance(item, datetime) else item for item in v]


class SLAProfile(BaseModel):
    """
    Reusable SLA policy without a start time, loaded from YAML.

    Defaults describe a 4 business-hour SLA, 09:00-17:00, Monday to Friday.
    """
    duration_amount: int = Field(default=4, ge=0, le=MAX_DURATION_AMOUNT)
    duration_unit: str = Field(default=TimeUnit.HOURS.value)
    business_hours: BusinessHours = Field(default_factory=BusinessHours)
    valid_days: FrozenSet[int] = Field(default=frozenset(WORKING_WEEK))
    ignore_holidays: bool = False
    country_code: Optional[str] = Field(default=None, min_length=2, max_length=2)

    @field_validator("valid_days", mode="before")
    @classmethod
    def validate_valid_days(cls, v: Any) -> FrozenSet[int]:
        return required_weekdays(v)

    @field_validator("country_code")
    @classmethod
    def normalise_country(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v

    def to_config(
        self,
        start_time: datetime,
        holidays: Iterable[date] = ()
    ) -> SLAConfig:
        """Bind the profile to a start time and a holiday list."""
        return SLAConfig(
            start_time=start_time,
            duration_amount=self.duration_amount,
            duration_unit=self.duration_unit,
            business_hours=self.business_hours,
            valid_days=self.valid_days,
            holidays=list(holidays),
            ignore_holidays=self.ignore_holidays,
        )
