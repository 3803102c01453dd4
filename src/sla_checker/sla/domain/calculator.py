"""
SLA Calculator
==============

Business-time deadline arithmetic.

The deadline walk advances one hour at a time, counting an hour only when
it starts on a valid weekday, inside business hours, on a date that is not
a holiday. The working-time walk sums the same business windows between
two instants, so both agree on what counts as business time.
"""

from datetime import datetime, timedelta

from sla_checker.config import MAX_SLA_DURATION, VALID_TIME_UNITS, TimeUnit
from sla_checker.core.exceptions import ConfigurationException
from sla_checker.shared.infrastructure.logging import get_logger
from sla_checker.sla.domain.entities import SLAResult
from sla_checker.sla.domain.value_objects import SLAConfig

logger = get_logger(__name__)

ONE_HOUR = timedelta(hours=1)
ONE_DAY = timedelta(days=1)
ZERO = timedelta(0)


def format_duration(delta: timedelta) -> str:
    """
    Format a duration as zero-padded HH:MM:SS.

    The sign is dropped and hours are not wrapped at 24.
    """
    total_seconds = int(abs(delta).total_seconds())
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _at_hour(t: datetime, hour: int) -> datetime:
    """Same calendar day and time reference as t, at hour:00:00 (hour may be 24)."""
    midnight = t.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(hours=hour)


class SLACalculator:
    """
    Pure functions for SLA calculations.

    Stateless: every method depends only on its arguments, so concurrent
    calls on distinct configurations never interact.
    """

    @staticmethod
    def duration_budget(config: SLAConfig) -> timedelta:
        """
        Convert the configured amount and unit into business time.

        A day is 24 hours of business time, not one business day.

        Raises:
            ConfigurationException: on an unknown unit, or a duration longer
                than MAX_SLA_DURATION
        """
        try:
            unit = TimeUnit(config.duration_unit)
        except ValueError:
            raise ConfigurationException(
                f"Unknown SLA duration unit: {config.duration_unit!r}, "
                f"expected one of {', '.join(VALID_TIME_UNITS)}",
                {"duration_unit": config.duration_unit}
            ) from None

        details = {"duration_amount": config.duration_amount, "duration_unit": unit.value}
        try:
            budget = timedelta(**{unit.value: config.duration_amount})
        except OverflowError:
            raise ConfigurationException(
                "SLA duration is out of range", details
            ) from None

        if budget > MAX_SLA_DURATION:
            raise ConfigurationException(
                f"SLA duration exceeds {MAX_SLA_DURATION.days} days", details
            )
        return budget

    @staticmethod
    def is_valid_day(config: SLAConfig, t: datetime) -> bool:
        return t.weekday() in config.valid_days

    @staticmethod
    def is_within_business_hours(config: SLAConfig, t: datetime) -> bool:
        hours = config.business_hours
        return hours.start_hour <= t.hour < hours.end_hour

    @staticmethod
    def is_holiday(config: SLAConfig, t: datetime) -> bool:
        """Holidays match on calendar date only; ignore_holidays disables the check."""
        if config.ignore_holidays:
            return False
        return t.date() in config.holidays

    @staticmethod
    def is_business_time(config: SLAConfig, t: datetime) -> bool:
        return (
            SLACalculator.is_valid_day(config, t)
            and SLACalculator.is_within_business_hours(config, t)
            and not SLACalculator.is_holiday(config, t)
        )

    @staticmethod
    def next_business_start(
        config: SLAConfig,
        t: datetime,
        inclusive: bool = False
    ) -> datetime:
        """
        Opening time of the next business window after t.

        Before opening hour the candidate is the same day; otherwise the
        following day. Invalid weekdays and holidays are then skipped a day
        at a time.

        With inclusive, an opening time equal to t is kept. A 00-24 window
        closes at the instant the next one opens, and the working-time walk
        must not skip that day.
        """
        candidate = _at_hour(t, config.business_hours.start_hour)
        if t > candidate or (t == candidate and not inclusive):
            candidate += ONE_DAY

        while (not SLACalculator.is_valid_day(config, candidate)
               or SLACalculator.is_holiday(config, candidate)):
            candidate += ONE_DAY

        return candidate

    @staticmethod
    def calculate_deadline(config: SLAConfig) -> datetime:
        """
        Walk forward from start_time until the business-time budget is spent.

        Deadlines resolve to whole hours of business time. A partial hour
        left in the budget deliberately consumes a full hour slot (30
        minutes from 09:00 is due at 10:00, not 09:30). A deadline reached
        exactly at closing time stays there instead of rolling over.

        Raises:
            ConfigurationException: on an unknown or oversized duration
        """
        remaining = SLACalculator.duration_budget(config)
        current = config.start_time

        while remaining > ZERO:
            if SLACalculator.is_business_time(config, current):
                remaining -= ONE_HOUR

            current += ONE_HOUR

            if remaining > ZERO and not SLACalculator.is_within_business_hours(config, current):
                current = SLACalculator.next_business_start(config, current)

        logger.debug(
            "SLA deadline calculated",
            extra={
                "start_time": config.start_time.isoformat(),
                "deadline": current.isoformat(),
                "duration_amount": config.duration_amount,
                "duration_unit": config.duration_unit,
            }
        )
        return current

    @staticmethod
    def calculate_working_time_remaining(
        config: SLAConfig,
        now: datetime,
        deadline: datetime
    ) -> timedelta:
        """
        Business time between now and deadline.

        Sums, one business day at a time, the part of each business window
        that lies before the deadline. Zero once now has reached the deadline.
        """
        if now >= deadline:
            return ZERO

        current = now
        if not SLACalculator.is_business_time(config, current):
            current = SLACalculator.next_business_start(config, current)

        total = ZERO
        while current < deadline:
            day_end = _at_hour(current, config.business_hours.end_hour)
            segment_end = min(day_end, deadline)
            if segment_end > current:
                total += segment_end - current
            current = SLACalculator.next_business_start(config, day_end, inclusive=True)

        return total

    @staticmethod
    def is_within_sla(config: SLAConfig, now: datetime) -> bool:
        """Check whether now is strictly before the SLA deadline."""
        return now < SLACalculator.calculate_deadline(config)

    @staticmethod
    def check(config: SLAConfig, now: datetime) -> SLAResult:
        """
        Evaluate the SLA at now.

        Raises:
            ConfigurationException: on an unknown duration unit; no partial
                result is produced
        """
        deadline = SLACalculator.calculate_deadline(config)

        remaining = max(deadline - now, ZERO)
        overage = max(now - deadline, ZERO)
        working = SLACalculator.calculate_working_time_remaining(config, now, deadline)

        return SLAResult(
            is_within_sla=now < deadline,
            deadline=deadline,
            remaining=format_duration(remaining),
            overage=format_duration(overage),
            working_time_remaining=format_duration(working),
        )
