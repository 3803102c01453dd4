"""
SLA External Service Integrations
==================================

External services for SLA checking:
- Public holiday source (date.nager.at) with an expiring cache in front
- YAML SLA profile loader
"""

import time
from datetime import date, timedelta
from pathlib import Path
from typing import Any, List, Optional

import httpx
import yaml
from pydantic import ValidationError

from sla_checker.config import settings
from sla_checker.core.exceptions import ConfigurationException, HolidaySourceException
from sla_checker.shared.infrastructure.cache import ExpiringCache
from sla_checker.shared.infrastructure.logging import get_logger
from sla_checker.sla.application.services import IHolidayProvider
from sla_checker.sla.domain.value_objects import SLAProfile

logger = get_logger(__name__)


class NagerHolidayClient(IHolidayProvider):
    """
    Public holiday client for the date.nager.at API.

    Handles:
    - One-week expiring cache keyed by year and country
    - Exponential backoff retry on transport errors and 5xx responses
    - Timeout handling

    Failed fetches are never cached.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        cache: Optional[ExpiringCache[List[date]]] = None,
        http_client: Optional[httpx.Client] = None,
        backoff_seconds: float = 1.0
    ):
        self.base_url = (base_url or settings.holiday_api_url).rstrip("/")
        self.timeout = timeout or settings.holiday_timeout_seconds
        self.max_retries = max_retries or settings.holiday_max_retries
        self.backoff_seconds = backoff_seconds
        if cache is None:
            cache = ExpiringCache(timedelta(seconds=settings.holiday_cache_ttl_seconds))
        self._cache = cache
        self._http_client = http_client

    @property
    def cache(self) -> ExpiringCache[List[date]]:
        return self._cache

    @staticmethod
    def cache_key(year: int, country_code: str) -> str:
        return f"{year}_{country_code.upper()}"

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=self.timeout)
        return self._http_client

    def fetch_holidays(self, year: int, country_code: str) -> List[date]:
        """
        Public holidays for a year and country, served from cache when fresh.

        Raises:
            HolidaySourceException: on network, HTTP status or parse failures
        """
        key = self.cache_key(year, country_code)
        cached, found = self._cache.get(key)
        if found:
            return list(cached)

        url = f"{self.base_url}/{year}/{country_code.upper()}"
        payload = self._request(url, year, country_code)
        holidays = self._parse(payload)

        self._cache.set(key, holidays)
        logger.info(
            "Holidays fetched",
            extra={"year": year, "country_code": country_code, "count": len(holidays)}
        )
        return list(holidays)

    def _request(self, url: str, year: int, country_code: str) -> Any:
        details = {"year": year, "country_code": country_code, "url": url}
        last_error = "no attempt made"

        for attempt in range(self.max_retries):
            try:
                response = self._get_client().get(url)
            except httpx.HTTPError as e:
                last_error = str(e)
                logger.warning(
                    "Holiday request failed",
                    extra={"error": last_error, "attempt": attempt + 1, **details}
                )
            else:
                if response.status_code == 200:
                    try:
                        return response.json()
                    except ValueError as e:
                        raise HolidaySourceException(
                            f"error decoding JSON: {e}", details
                        ) from e

                last_error = f"failed to fetch holidays, status code: {response.status_code}"
                logger.warning(
                    "Holiday API returned non-200",
                    extra={"status_code": response.status_code, "attempt": attempt + 1, **details}
                )
                if response.status_code < 500:
                    raise HolidaySourceException(last_error, details)

            if attempt < self.max_retries - 1:
                time.sleep(self.backoff_seconds * 2 ** attempt)

        raise HolidaySourceException(last_error, details)

    @staticmethod
    def _parse(payload: Any) -> List[date]:
        if not isinstance(payload, list):
            raise HolidaySourceException("expected a JSON list of holidays")

        holidays = []
        for item in payload:
            raw = item.get("date") if isinstance(item, dict) else None
            try:
                holidays.append(date.fromisoformat(str(raw)))
            except ValueError as e:
                raise HolidaySourceException(
                    f"error parsing date {raw}: {e}", {"date": raw}
                ) from e
        return holidays

    def close(self) -> None:
        """Close HTTP client."""
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None


class SLAProfileLoader:
    """Loads the SLA profile (policy without a start time) from YAML."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or settings.sla_profile_path)

    def load(self) -> SLAProfile:
        """
        Parse the profile file; a missing file yields the default profile.

        Raises:
            ConfigurationException: on invalid YAML or invalid profile values
        """
        if not self.path.exists():
            logger.warning(f"SLA profile not found: {self.path}, using defaults")
            return SLAProfile()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return SLAProfile(**data)
        except (yaml.YAMLError, ValidationError, TypeError) as e:
            raise ConfigurationException(
                f"Invalid SLA profile {self.path}: {e}",
                {"path": str(self.path)}
            ) from e
