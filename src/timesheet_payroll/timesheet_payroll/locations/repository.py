from __future__ import annotations

from typing import Protocol, Sequence

from .geofence import AllowedLocation


class AllowedLocationRepository(Protocol):
    def list_active(self) -> Sequence[AllowedLocation]:
        raise NotImplementedError
