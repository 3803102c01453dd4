"""
SLA Domain Entities
====================

Results produced by the SLA engine.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SLAResult:
    """
    Outcome of checking one SLA configuration at one instant.

    remaining and overage are wall-clock gaps to the deadline; only one of
    them is non-zero. working_time_remaining counts business time only.
    """

    is_within_sla: bool
    deadline: datetime
    remaining: str
    overage: str
    working_time_remaining: str

    @property
    def is_breached(self) -> bool:
        return not self.is_within_sla

    def to_dict(self) -> dict:
        """Convert to the wire format consumed by existing clients."""
        return {
            "isWithinSLA": self.is_within_sla,
            "deadline": self.deadline.isoformat(),
            "remaining": self.remaining,
            "overage": self.overage,
            "workingTimeRemaining": self.working_time_remaining,
        }
