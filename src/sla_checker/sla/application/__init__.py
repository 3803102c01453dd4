"""
SLA Application Layer
======================

Application layer for the SLA checker.

Contains:
- Services: Resolve holidays, build configurations and run checks
- DTOs: Data transfer objects for API serialization

This layer depends on the domain layer and provider interfaces,
but not on concrete infrastructure implementations.
"""

from sla_checker.sla.application.dto import (
    SLACheckRequest,
    SLACheckResponse,
    HolidayListResponse,
    ProfileCheckRequest,
)
from sla_checker.sla.application.services import (
    SLAService,
    IHolidayProvider,
)

__all__ = [
    # DTOs
    "SLACheckRequest",
    "SLACheckResponse",
    "HolidayListResponse",
    "ProfileCheckRequest",
    # Services
    "SLAService",
    # Provider Interfaces
    "IHolidayProvider",
]
