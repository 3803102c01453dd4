"""Shared fixtures for the SLA checker tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from sla_checker.core.exceptions import HolidaySourceException
from sla_checker.sla.application import IHolidayProvider
from sla_checker.sla.domain import BusinessHours, SLAConfig

UTC = timezone.utc

# 2024-08-30 is a Friday, 2024-09-02 the following Monday.
FRIDAY = date(2024, 8, 30)
MONDAY = date(2024, 9, 2)
INDEPENDENCE_DAY = date(2024, 7, 4)  # Thursday


def at(day: date, hour: int, minute: int = 0, tz=UTC) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: Any) -> None:
        self.now += timedelta(**kwargs)


class FakeHolidayProvider(IHolidayProvider):
    """Holiday provider serving fixed dates and recording lookups."""

    def __init__(
        self,
        holidays: Optional[Dict[int, List[date]]] = None,
        error: Optional[HolidaySourceException] = None
    ):
        self.holidays = holidays or {}
        self.error = error
        self.calls: List[Tuple[int, str]] = []

    def fetch_holidays(self, year: int, country_code: str) -> List[date]:
        self.calls.append((year, country_code))
        if self.error is not None:
            raise self.error
        return list(self.holidays.get(year, []))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def make_config() -> Callable[..., SLAConfig]:
    """Factory for SLA configs: 4 hours, 09-17, Monday-Friday, no holidays."""

    def _make(**overrides: Any) -> SLAConfig:
        values: Dict[str, Any] = {
            "start_time": at(FRIDAY, 16),
            "duration_amount": 4,
            "duration_unit": "hours",
            "business_hours": BusinessHours(start_hour=9, end_hour=17),
            "valid_days": [0, 1, 2, 3, 4],
            "holidays": [],
            "ignore_holidays": False,
        }
        values.update(overrides)
        return SLAConfig(**values)

    return _make
