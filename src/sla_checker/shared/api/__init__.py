"""
Shared API
==========

Middleware shared by the HTTP interface.
"""

from sla_checker.shared.api.middleware import (
    CORRELATION_HEADER,
    CorrelationIDMiddleware,
    LoggingMiddleware,
)

__all__ = [
    "CORRELATION_HEADER",
    "CorrelationIDMiddleware",
    "LoggingMiddleware",
]
