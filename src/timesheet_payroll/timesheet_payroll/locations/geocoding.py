from __future__ import annotations

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from ..common.retry import RetryPolicy
from ..core.constants import (
    DEFAULT_GEOCODE_CACHE_SIZE,
    DEFAULT_GEOCODE_CACHE_TTL_SECONDS,
    GEOCODE_KEY_DECIMALS,
)

logger = logging.getLogger(__name__)

NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"


@dataclass(frozen=True)
class GeocodeResult:
    address: str
    success: bool


def coordinates_key(latitude: float, longitude: float) -> str:
    return f"{latitude:.{GEOCODE_KEY_DECIMALS}f},{longitude:.{GEOCODE_KEY_DECIMALS}f}"


def fallback_address(latitude: float, longitude: float) -> str:
    return f"Lat: {latitude:.6f}, Lng: {longitude:.6f}"


class GeocodeCache:
    """Reverse-geocode results keyed by rounded coordinates.

    Entries expire ``ttl_seconds`` after being stored; when more than
    ``max_entries`` are held, the oldest stored entries are evicted first.
    """

    def __init__(
        self,
        *,
        max_entries: int = DEFAULT_GEOCODE_CACHE_SIZE,
        ttl_seconds: float = DEFAULT_GEOCODE_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._max_entries = int(max_entries)
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._entries: "OrderedDict[str, tuple[float, GeocodeResult]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, latitude: float, longitude: float) -> Optional[GeocodeResult]:
        key = coordinates_key(latitude, longitude)
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, result = entry
        if self._clock() - stored_at >= self._ttl:
            del self._entries[key]
            return None
        return result

    def put(self, latitude: float, longitude: float, result: GeocodeResult) -> None:
        key = coordinates_key(latitude, longitude)
        self._entries.pop(key, None)
        self._entries[key] = (self._clock(), result)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()


class ReverseGeocoder:
    """Address lookup for a coordinate pair (OpenStreetMap Nominatim).

    Never raises: when the service is unreachable or returns nothing, the
    formatted coordinates are returned with ``success=False``.
    """

    def __init__(
        self,
        cache: GeocodeCache,
        *,
        session: Optional[requests.Session] = None,
        retry_policy: Optional[RetryPolicy] = None,
        base_url: str = NOMINATIM_REVERSE_URL,
        user_agent: str = "timesheet-payroll/1.0",
        timeout: float = 3.0,
    ):
        self._cache = cache
        self._session = session or requests.Session()
        self._retry = retry_policy or RetryPolicy(
            max_attempts=2,
            retry_on=(requests.ConnectionError, requests.Timeout),
        )
        self._base_url = base_url
        self._user_agent = user_agent
        self._timeout = float(timeout)

    def reverse(self, latitude: float, longitude: float) -> GeocodeResult:
        cached = self._cache.get(latitude, longitude)
        if cached is not None:
            return cached

        try:
            address = self._retry.call(self._fetch_address, latitude, longitude)
            result = GeocodeResult(address=address, success=True)
        except (requests.RequestException, ValueError, LookupError) as e:
            logger.warning("Reverse geocoding failed for %s,%s: %s", latitude, longitude, e)
            result = GeocodeResult(address=fallback_address(latitude, longitude), success=False)

        self._cache.put(latitude, longitude, result)
        return result

    def _fetch_address(self, latitude: float, longitude: float) -> str:
        response = self._session.get(
            self._base_url,
            params={"format": "json", "lat": latitude, "lon": longitude, "addressdetails": 1},
            headers={"User-Agent": self._user_agent},
            timeout=self._timeout,
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict) or not data.get("display_name"):
            raise LookupError("No address found")
        return data["display_name"]
