from __future__ import annotations

from typing import Iterable

from busmap.domain.models import VehiclePosition, ViewportBounds


def filter_within_bounds(
    bounds: ViewportBounds | None, vehicles: Iterable[VehiclePosition]
) -> tuple[VehiclePosition, ...]:
    """Vehicles inside ``bounds`` (edges inclusive), in input order.

    Without bounds nothing is returned, never the unfiltered fleet.
    """

    if bounds is None:
        return ()
    return tuple(v for v in vehicles if bounds.contains(v.lat, v.lon))


def with_valid_position(
    vehicles: Iterable[VehiclePosition],
) -> tuple[VehiclePosition, ...]:
    return tuple(v for v in vehicles if v.has_valid_position)


def filter_by_line(
    line_id: str, vehicles: Iterable[VehiclePosition]
) -> tuple[VehiclePosition, ...]:
    return tuple(v for v in vehicles if v.line_id == line_id)
