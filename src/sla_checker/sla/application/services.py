"""
SLA Application Services
=========================

Application services orchestrate business logic and coordinate between
the domain calculator and the holiday source.

Following SOLID principles:
- Single Responsibility: Each service has one clear purpose
- Dependency Inversion: Depend on abstractions (providers), not concrete clients
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Iterable, List, Optional

from sla_checker.core.exceptions import ValidationException
from sla_checker.shared.infrastructure.logging import get_logger, log_latency
from sla_checker.sla.domain import SLACalculator, SLAConfig, SLAProfile, SLAResult

logger = get_logger(__name__)


# ========== Provider Interfaces (Dependency Inversion) ==========

class IHolidayProvider(ABC):
    """Interface for public holiday lookups."""

    @abstractmethod
    def fetch_holidays(self, year: int, country_code: str) -> List[date]:
        """Public holiday dates for a year and ISO country code."""


# ========== Application Services ==========

class SLAService:
    """
    Service for building SLA configurations and checking them.

    Holidays are resolved here, before the configuration is built; the
    calculator itself never calls out.
    """

    def __init__(
        self,
        holiday_provider: Optional[IHolidayProvider],
        default_country_code: str = "GB"
    ):
        self._holiday_provider = holiday_provider
        self._default_country_code = default_country_code

    def resolve_holidays(self, start_time: datetime, country_code: Optional[str]) -> List[date]:
        """
        Holidays for the start year and the following one.

        A deadline computed near the end of December can fall in January,
        so both years are fetched.

        Raises:
            HolidaySourceException: when the provider fails
        """
        if self._holiday_provider is None:
            raise ValueError("Holiday provider not configured")

        country = (country_code or self._default_country_code).upper()
        holidays: List[date] = []
        for year in (start_time.year, start_time.year + 1):
            holidays.extend(self._holiday_provider.fetch_holidays(year, country))
        return holidays

    def build_config(
        self,
        profile: SLAProfile,
        start_time: datetime,
        extra_holidays: Iterable[date] = (),
        country_code: Optional[str] = None
    ) -> SLAConfig:
        """
        Bind a profile to a start time, fetching holidays unless ignored.

        Args:
            profile: SLA policy (duration, business hours, valid days)
            start_time: When the SLA clock starts
            extra_holidays: Dates excluded in addition to public holidays
            country_code: Overrides the profile's and the default country
        """
        holidays = list(extra_holidays)
        if not profile.ignore_holidays and self._holiday_provider is not None:
            holidays.extend(
                self.resolve_holidays(start_time, country_code or profile.country_code)
            )
        return profile.to_config(start_time, holidays)

    def check_sla(self, config: SLAConfig, now: Optional[datetime] = None) -> SLAResult:
        """
        Evaluate config at now (defaults to the current time in start_time's zone).

        Raises:
            ConfigurationException: on an unknown or oversized duration
            ValidationException: when only one of now and start_time carries
                a time zone
        """
        current_time = now or datetime.now(config.start_time.tzinfo)
        if (current_time.tzinfo is None) != (config.start_time.tzinfo is None):
            raise ValidationException(
                "now and start_time must both be naive or both carry a time zone",
                {
                    "start_time": config.start_time.isoformat(),
                    "now": current_time.isoformat(),
                }
            )

        with log_latency(logger, "sla_check", duration_unit=config.duration_unit):
            result = SLACalculator.check(config, current_time)

        logger.info(
            "SLA checked",
            extra={
                "deadline": result.deadline.isoformat(),
                "is_within_sla": result.is_within_sla,
            }
        )
        return result
