"""
SLA Domain Layer
================

Domain layer for the SLA checker.

Contains:
- Entities: SLAResult
- Value Objects: BusinessHours, SLAConfig, SLAProfile
- Domain Services: Stateless business-time arithmetic (SLACalculator)

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from sla_checker.sla.domain.entities import SLAResult
from sla_checker.sla.domain.value_objects import (
    BusinessHours,
    SLAConfig,
    SLAProfile,
    parse_weekdays,
)
from sla_checker.sla.domain.calculator import SLACalculator, format_duration

__all__ = [
    # Entities
    "SLAResult",
    # Value Objects
    "BusinessHours",
    "SLAConfig",
    "SLAProfile",
    "parse_weekdays",
    # Domain Services
    "SLACalculator",
    "format_duration",
]
