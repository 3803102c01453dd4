"""Tests for the holiday API client and the YAML profile loader."""

from datetime import date, timedelta

import httpx
import pytest

from sla_checker.core.exceptions import ConfigurationException, HolidaySourceException
from sla_checker.shared.infrastructure.cache import ExpiringCache
from sla_checker.sla.domain import BusinessHours
from sla_checker.sla.infrastructure import NagerHolidayClient, SLAProfileLoader

BASE_URL = "https://holidays.test/api/v3/PublicHolidays"

MOCK_HOLIDAYS = [
    {"date": "2023-01-01", "localName": "Neujahr", "name": "New Year's Day", "countryCode": "DE"},
    {"date": "2023-12-25", "localName": "Weihnachtstag", "name": "Christmas Day", "countryCode": "DE"},
]


class Recorder:
    """MockTransport handler replaying canned responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def make_client(handler, clock=None, max_retries=3):
    return NagerHolidayClient(
        base_url=BASE_URL,
        max_retries=max_retries,
        cache=ExpiringCache(timedelta(days=7), clock=clock),
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        backoff_seconds=0,
    )


def test_fetch_holidays_parses_dates():
    handler = Recorder(httpx.Response(200, json=MOCK_HOLIDAYS))
    client = make_client(handler)

    holidays = client.fetch_holidays(2023, "DE")

    assert holidays == [date(2023, 1, 1), date(2023, 12, 25)]
    assert str(handler.requests[0].url) == f"{BASE_URL}/2023/DE"


def test_second_fetch_is_served_from_cache():
    handler = Recorder(httpx.Response(200, json=MOCK_HOLIDAYS))
    client = make_client(handler)

    first = client.fetch_holidays(2023, "DE")
    second = client.fetch_holidays(2023, "de")

    assert first == second
    assert len(handler.requests) == 1
    assert client.cache.get("2023_DE") == (first, True)


def test_cache_expiry_triggers_refetch(clock):
    handler = Recorder(httpx.Response(200, json=MOCK_HOLIDAYS))
    client = make_client(handler, clock=clock)

    client.fetch_holidays(2023, "DE")
    clock.advance(days=7, seconds=1)
    client.fetch_holidays(2023, "DE")

    assert len(handler.requests) == 2


def test_server_error_is_retried():
    handler = Recorder(
        httpx.Response(503),
        httpx.Response(200, json=MOCK_HOLIDAYS),
    )
    client = make_client(handler)

    assert len(client.fetch_holidays(2023, "DE")) == 2
    assert len(handler.requests) == 2


def test_persistent_server_error_raises_after_retries():
    handler = Recorder(httpx.Response(500))
    client = make_client(handler, max_retries=3)

    with pytest.raises(HolidaySourceException) as exc_info:
        client.fetch_holidays(2023, "DE")

    assert "status code: 500" in exc_info.value.message
    assert len(handler.requests) == 3
    assert client.cache.get("2023_DE") == (None, False)


def test_client_error_is_not_retried():
    handler = Recorder(httpx.Response(404))
    client = make_client(handler)

    with pytest.raises(HolidaySourceException):
        client.fetch_holidays(2023, "XX")

    assert len(handler.requests) == 1


def test_transport_error_is_retried_then_raised():
    handler = Recorder(httpx.ConnectError("connection refused"))
    client = make_client(handler, max_retries=2)

    with pytest.raises(HolidaySourceException) as exc_info:
        client.fetch_holidays(2023, "DE")

    assert exc_info.value.service_name == "Holiday Source"
    assert len(handler.requests) == 2


def test_invalid_json_raises():
    handler = Recorder(httpx.Response(200, text="<html>not json</html>"))
    client = make_client(handler)

    with pytest.raises(HolidaySourceException, match="decoding JSON"):
        client.fetch_holidays(2023, "DE")


def test_invalid_date_raises():
    handler = Recorder(httpx.Response(200, json=[{"date": "2023-13-45"}]))
    client = make_client(handler)

    with pytest.raises(HolidaySourceException, match="parsing date"):
        client.fetch_holidays(2023, "DE")


def test_non_list_payload_raises():
    handler = Recorder(httpx.Response(200, json={"error": "nope"}))
    client = make_client(handler)

    with pytest.raises(HolidaySourceException):
        client.fetch_holidays(2023, "DE")


# ── SLA profile loader ───────────────────────────────────────────


def test_profile_loader_reads_yaml(tmp_path):
    path = tmp_path / "sla_profile.yaml"
    path.write_text(
        "duration_amount: 2\n"
        "duration_unit: days\n"
        "business_hours:\n"
        "  start_hour: 8\n"
        "  end_hour: 18\n"
        "valid_days: [monday, wednesday]\n"
        "ignore_holidays: true\n"
        "country_code: ie\n",
        encoding="utf-8",
    )

    profile = SLAProfileLoader(path).load()

    assert profile.duration_amount == 2
    assert profile.duration_unit == "days"
    assert profile.business_hours == BusinessHours(start_hour=8, end_hour=18)
    assert profile.valid_days == frozenset({0, 2})
    assert profile.ignore_holidays is True
    assert profile.country_code == "IE"


def test_profile_loader_defaults_when_missing(tmp_path):
    profile = SLAProfileLoader(tmp_path / "absent.yaml").load()

    assert profile.duration_amount == 4
    assert profile.duration_unit == "hours"
    assert profile.valid_days == frozenset({0, 1, 2, 3, 4})


def test_profile_loader_rejects_invalid_values(tmp_path):
    path = tmp_path / "sla_profile.yaml"
    path.write_text("business_hours:\n  start_hour: 18\n  end_hour: 9\n", encoding="utf-8")

    with pytest.raises(ConfigurationException):
        SLAProfileLoader(path).load()


def test_profile_loader_rejects_empty_valid_days(tmp_path):
    path = tmp_path / "sla_profile.yaml"
    path.write_text("valid_days: []\n", encoding="utf-8")

    with pytest.raises(ConfigurationException):
        SLAProfileLoader(path).load()


def test_profile_loader_rejects_malformed_yaml(tmp_path):
    path = tmp_path / "sla_profile.yaml"
    path.write_text("duration_amount: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigurationException):
        SLAProfileLoader(path).load()
