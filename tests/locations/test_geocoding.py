import pytest
import requests

from src.timesheet_payroll.timesheet_payroll.common.retry import RetryPolicy
from src.timesheet_payroll.timesheet_payroll.locations.geocoding import (
    GeocodeCache,
    GeocodeResult,
    ReverseGeocoder,
    coordinates_key,
    fallback_address,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class FakeResponse:
    def __init__(self, payload, status_ok=True):
        self._payload = payload
        self._status_ok = status_ok

    def raise_for_status(self):
        if not self._status_ok:
            raise requests.HTTPError("500 Server Error")

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _geocoder(session, cache=None):
    return ReverseGeocoder(
        cache or GeocodeCache(),
        session=session,
        retry_policy=RetryPolicy(max_attempts=2, base_delay=0, retry_on=(requests.ConnectionError,), sleep=lambda _: None),
    )


def test_coordinates_key_rounds_to_four_decimals():
    assert coordinates_key(-23.550512, -46.633308) == "-23.5505,-46.6333"
    assert fallback_address(1.5, 2) == "Lat: 1.500000, Lng: 2.000000"


def test_cache_entries_expire_after_ttl():
    clock = FakeClock()
    cache = GeocodeCache(ttl_seconds=60, clock=clock)
    cache.put(1.0, 2.0, GeocodeResult(address="X", success=True))

    clock.now = 59
    assert cache.get(1.0, 2.0).address == "X"
    clock.now = 60
    assert cache.get(1.0, 2.0) is None
    assert len(cache) == 0


def test_cache_evicts_oldest_entry_when_full():
    cache = GeocodeCache(max_entries=2, clock=FakeClock())
    cache.put(1, 1, GeocodeResult("a", True))
    cache.put(2, 2, GeocodeResult("b", True))
    cache.put(3, 3, GeocodeResult("c", True))

    assert len(cache) == 2
    assert cache.get(1, 1) is None
    assert cache.get(3, 3).address == "c"


def test_cache_size_must_be_positive():
    with pytest.raises(ValueError):
        GeocodeCache(max_entries=0)


def test_reverse_returns_display_name_and_caches_it():
    session = FakeSession([FakeResponse({"display_name": "Av. Paulista, Sao Paulo"})])
    geocoder = _geocoder(session)

    first = geocoder.reverse(-23.5505, -46.6333)
    second = geocoder.reverse(-23.55051, -46.63331)

    assert first == GeocodeResult(address="Av. Paulista, Sao Paulo", success=True)
    assert second == first
    assert len(session.calls) == 1
    assert session.calls[0]["params"]["lon"] == -46.6333


def test_reverse_retries_connection_errors():
    session = FakeSession([requests.ConnectionError("boom"), FakeResponse({"display_name": "Rua A"})])

    result = _geocoder(session).reverse(1.0, 2.0)

    assert result.success is True
    assert len(session.calls) == 2


def test_reverse_falls_back_to_coordinates_on_failure():
    session = FakeSession([FakeResponse({}, status_ok=False)])

    result = _geocoder(session).reverse(1.0, 2.0)

    assert result == GeocodeResult(address="Lat: 1.000000, Lng: 2.000000", success=False)
    assert len(session.calls) == 1


def test_reverse_without_display_name_is_a_failure():
    session = FakeSession([FakeResponse({"error": "Unable to geocode"})])

    assert _geocoder(session).reverse(1.0, 2.0).success is False


def test_reverse_with_non_object_body_is_a_failure():
    session = FakeSession([FakeResponse([])])

    result = _geocoder(session).reverse(1.0, 2.0)

    assert result == GeocodeResult(address="Lat: 1.000000, Lng: 2.000000", success=False)
