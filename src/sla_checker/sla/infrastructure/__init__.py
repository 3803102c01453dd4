"""
SLA Infrastructure Layer
=========================

Infrastructure implementations for SLA checking:
- External: public holiday API client, YAML profile loader
"""

from sla_checker.sla.infrastructure.external import (
    NagerHolidayClient,
    SLAProfileLoader,
)

__all__ = [
    "NagerHolidayClient",
    "SLAProfileLoader",
]
