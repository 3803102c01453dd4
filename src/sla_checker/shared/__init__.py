"""
Shared Kernel Module
====================

Generic infrastructure used across the SLA checker (logging, caching,
request tracing).

DO NOT add SLA business logic to the shared kernel.
"""
