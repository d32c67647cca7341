"""Geofence check for a punch: is the device inside one of the allowed work sites?

The allowed radius of a site grows with the reported GPS accuracy, so a
coarse fix near the site is not rejected outright.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.constants import DEFAULT_GPS_ACCURACY_METERS, EARTH_RADIUS_METERS, MAX_ADAPTIVE_RANGE_METERS


@dataclass(frozen=True)
class AllowedLocation:
    id: str
    name: str
    latitude: float
    longitude: float
    range_meters: float
    address: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class GeofenceCheck:
    allowed: bool
    message: str
    location: Optional[AllowedLocation] = None
    distance_meters: Optional[float] = None
    range_meters: Optional[float] = None


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle (haversine) distance in meters."""

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def adaptive_range(base_range: float, gps_accuracy: float) -> float:
    if gps_accuracy <= 50:
        return float(base_range)
    if gps_accuracy <= 100:
        return float(base_range + gps_accuracy)
    if gps_accuracy <= 200:
        return float(base_range + gps_accuracy * 1.5)
    return min(MAX_ADAPTIVE_RANGE_METERS, float(base_range + gps_accuracy * 2))


def check_location(
    latitude: float,
    longitude: float,
    allowed_locations: Iterable[AllowedLocation],
    *,
    gps_accuracy: float = DEFAULT_GPS_ACCURACY_METERS,
) -> GeofenceCheck:
    """First active site whose adaptive range contains the point; otherwise the closest one."""

    active = [loc for loc in allowed_locations if loc.is_active]
    if not active:
        return GeofenceCheck(allowed=False, message="No allowed locations are configured")

    closest: Optional[AllowedLocation] = None
    closest_distance = math.inf
    closest_range: Optional[float] = None

    for loc in active:
        distance = calculate_distance(latitude, longitude, loc.latitude, loc.longitude)
        radius = adaptive_range(loc.range_meters, gps_accuracy)
        if distance <= radius:
            return GeofenceCheck(
                allowed=True,
                message=f"Location authorized at {loc.name}",
                location=loc,
                distance_meters=distance,
                range_meters=radius,
            )
        if distance < closest_distance:
            closest, closest_distance, closest_range = loc, distance, radius

    return GeofenceCheck(
        allowed=False,
        message=f"You are {round(closest_distance)}m from {closest.name}. Move closer to register.",
        location=closest,
        distance_meters=closest_distance,
        range_meters=closest_range,
    )
