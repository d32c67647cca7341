from __future__ import annotations

from typing import Any, Dict, Sequence

from ..database.mysql_base import MySQLRepository, db_cursor, fetchall
from .geofence import AllowedLocation
from .repository import AllowedLocationRepository


def _to_location(r: Dict[str, Any]) -> AllowedLocation:
    return AllowedLocation(
        id=str(r["id"]),
        name=r["name"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        range_meters=float(r.get("range_meters") or 0),
        address=r.get("address") or "",
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLAllowedLocationRepository(MySQLRepository, AllowedLocationRepository):
    def list_active(self) -> Sequence[AllowedLocation]:
        return self._run(self._list_active)

    def _list_active(self) -> Sequence[AllowedLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, address, latitude, longitude, range_meters, is_active
                FROM allowed_locations
                WHERE is_active = 1
                ORDER BY name ASC
                """
            )
            return [_to_location(r) for r in fetchall(cur)]
