from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .geo import GeoPoint, ViewportBounds
from .realtime import VehiclePosition

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


class AdvisoryKind(str, Enum):
    STALE_DATA = "stale_data"
    NO_DATA = "no_data"
    API_ERROR = "api_error"
    CONNECTION_ERROR = "connection_error"
    NO_DATA_FOR_LINE = "no_data_for_line"


@dataclass(frozen=True, slots=True)
class Advisory:
    """User-facing notice about the freshness or absence of data.

    ``as_of`` is the ``fetched_at`` of the snapshot still on screen, or
    None when there is nothing to fall back to.
    """

    kind: AdvisoryKind
    as_of: datetime | None = None
    line_id: str | None = None

    @property
    def message(self) -> str:
        if self.kind is AdvisoryKind.NO_DATA_FOR_LINE:
            return f"No buses available for line: {self.line_id}"

        prefix = {
            AdvisoryKind.STALE_DATA: "No new data",
            AdvisoryKind.NO_DATA: "No new data",
            AdvisoryKind.API_ERROR: "API error",
            AdvisoryKind.CONNECTION_ERROR: "Connection error",
        }[self.kind]

        if self.as_of is None:
            if self.kind in (AdvisoryKind.STALE_DATA, AdvisoryKind.NO_DATA):
                return "No data to display."
            return f"{prefix} and no data to display."
        return f"{prefix}. Showing last loaded data from: {format_timestamp(self.as_of)}"


@dataclass(frozen=True, slots=True)
class CameraTarget:
    """Instruction for the host to move the camera.

    Either fit ``bounds`` with ``padding_px`` around it, or center on
    ``center`` at ``zoom``.
    """

    bounds: ViewportBounds | None = None
    padding_px: int = 0
    center: GeoPoint | None = None
    zoom: float | None = None


@dataclass(frozen=True, slots=True)
class DisplayFrame:
    """Complete marker set the host should show; replaces all markers.

    An empty ``vehicles`` tuple means the map is cleared.
    """

    vehicles: tuple[VehiclePosition, ...] = ()
    selected_vehicle_id: str | None = None
    advisory: Advisory | None = None
    recenter: CameraTarget | None = None
