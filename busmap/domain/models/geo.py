from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValueError(f"Invalid longitude: {self.lon}")


@dataclass(frozen=True, slots=True)
class ViewportBounds:
    """Axis-aligned rectangle of the visible map region.

    No date-line wraparound: the northeast corner must not be south or
    west of the southwest corner.
    """

    southwest: GeoPoint
    northeast: GeoPoint

    def __post_init__(self) -> None:
        if self.northeast.lat < self.southwest.lat:
            raise ValueError(
                f"Northeast latitude {self.northeast.lat} is below southwest "
                f"latitude {self.southwest.lat}"
            )
        if self.northeast.lon < self.southwest.lon:
            raise ValueError(
                f"Northeast longitude {self.northeast.lon} is west of southwest "
                f"longitude {self.southwest.lon}"
            )

    def contains(self, lat: float, lon: float) -> bool:
        """Closed-rectangle containment; points on an edge are inside."""

        return (
            self.southwest.lat <= lat <= self.northeast.lat
            and self.southwest.lon <= lon <= self.northeast.lon
        )

    @staticmethod
    def enclosing(points: Sequence[GeoPoint]) -> ViewportBounds:
        if not points:
            raise ValueError("Cannot build bounds from an empty set of points")
        return ViewportBounds(
            southwest=GeoPoint(
                lat=min(p.lat for p in points), lon=min(p.lon for p in points)
            ),
            northeast=GeoPoint(
                lat=max(p.lat for p in points), lon=max(p.lon for p in points)
            ),
        )

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(
            lat=(self.southwest.lat + self.northeast.lat) / 2.0,
            lon=(self.southwest.lon + self.northeast.lon) / 2.0,
        )
