"""
SLA Module
==========

Bounded context for business-time SLA checking.

Responsibilities:
- Compute SLA deadlines counting only business hours on valid,
  non-holiday days
- Report wall-clock and business time remaining (or overage)
- Resolve public holidays through a cached external source
"""
