"""
SLA Application DTOs
=====================

Data Transfer Objects for the SLA API layer.

These Pydantic models handle serialization/deserialization and validation
for API requests and responses. Response field names match the JSON
consumed by existing clients (isWithinSLA, workingTimeRemaining).
"""

from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from sla_checker.config import MAX_DURATION_AMOUNT
from sla_checker.sla.domain import BusinessHours, SLAProfile, SLAResult


# ========== Type Aliases for Literals ==========
WeekdayName = Literal[
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
]


# ========== Request DTOs ==========

class SLACheckRequest(BaseModel):
    """Request model for an SLA check."""
    start_time: datetime = Field(..., description="When the SLA clock started")
    duration_amount: int = Field(
        ...,
        ge=0,
        le=MAX_DURATION_AMOUNT,
        description="SLA length, e.g. 4; the whole SLA may not exceed 366 days"
    )
    duration_unit: str = Field(default="hours", description="seconds, minutes, hours or days")
    business_hours: BusinessHours = Field(default_factory=BusinessHours)
    valid_days: List[Union[WeekdayName, int]] = Field(
        default_factory=lambda: ["monday", "tuesday", "wednesday", "thursday", "friday"],
        description="Weekdays eligible for business time"
    )
    holidays: List[date] = Field(
        default_factory=list,
        description="Extra dates excluded from business time"
    )
    ignore_holidays: bool = Field(default=False, description="Skip holiday lookups entirely")
    country_code: Optional[str] = Field(
        default=None,
        min_length=2,
        max_length=2,
        description="Country for public holidays (defaults to server setting)"
    )
    now: Optional[datetime] = Field(default=None, description="Evaluation instant (defaults to now)")

    def to_profile(self) -> SLAProfile:
        return SLAProfile(
            duration_amount=self.duration_amount,
            duration_unit=self.duration_unit,
            business_hours=self.business_hours,
            valid_days=self.valid_days,
            ignore_holidays=self.ignore_holidays,
            country_code=self.country_code,
        )


class ProfileCheckRequest(BaseModel):
    """Request model for checking against the server's SLA profile."""
    start_time: datetime = Field(..., description="When the SLA clock started")
    now: Optional[datetime] = Field(default=None, description="Evaluation instant (defaults to now)")
    holidays: List[date] = Field(default_factory=list, description="Extra dates excluded from business time")
    country_code: Optional[str] = Field(default=None, min_length=2, max_length=2)


# ========== Response DTOs ==========

class SLACheckResponse(BaseModel):
    """Result of an SLA check in the established wire format."""
    model_config = ConfigDict(populate_by_name=True)

    is_within_sla: bool = Field(..., alias="isWithinSLA")
    deadline: datetime
    remaining: str = Field(..., description="Wall-clock time left, HH:MM:SS")
    overage: str = Field(..., description="Wall-clock time past the deadline, HH:MM:SS")
    working_time_remaining: str = Field(
        ...,
        alias="workingTimeRemaining",
        description="Business time left, HH:MM:SS"
    )

    @classmethod
    def from_result(cls, result: SLAResult) -> "SLACheckResponse":
        return cls(
            is_within_sla=result.is_within_sla,
            deadline=result.deadline,
            remaining=result.remaining,
            overage=result.overage,
            working_time_remaining=result.working_time_remaining,
        )


class HolidayListResponse(BaseModel):
    """Public holidays for one year and country."""
    year: int
    country_code: str
    holidays: List[date]
