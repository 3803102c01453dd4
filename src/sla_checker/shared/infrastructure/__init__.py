"""
Infrastructure Layer
=====================

Low-level technical concerns shared by every module:
- Logging setup
- In-memory expiring cache
"""

from sla_checker.shared.infrastructure.cache import CacheEntry, ExpiringCache

__all__ = ["CacheEntry", "ExpiringCache"]
