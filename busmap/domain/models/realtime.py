from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class VehiclePosition:
    """One live sample of a transit vehicle as reported by the feed.

    ``observed_at`` is kept exactly as the feed formats it.
    """

    line_id: str
    vehicle_id: str
    lat: float
    lon: float
    brigade: str | None = None
    observed_at: str | None = None

    @property
    def has_valid_position(self) -> bool:
        # The feed reports (0, 0) for vehicles without a GPS fix.
        if self.lat == 0.0 and self.lon == 0.0:
            return False
        return -90.0 <= self.lat <= 90.0 and -180.0 <= self.lon <= 180.0

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lon=self.lon)

    @property
    def marker_title(self) -> str:
        return f"Line: {self.line_id} | Vehicle ID: {self.vehicle_id}"


@dataclass(frozen=True, slots=True)
class FleetSnapshot:
    vehicles: tuple[VehiclePosition, ...]
    fetched_at: datetime
