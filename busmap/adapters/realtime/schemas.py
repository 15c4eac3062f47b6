from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from busmap.domain.models import VehiclePosition


class VehicleRecordSchema(BaseModel):
    """One element of the ``result`` array of ``busestrams_get``."""

    model_config = ConfigDict(populate_by_name=True)

    lines: str = Field(..., alias="Lines")
    lon: float = Field(..., alias="Lon")
    lat: float = Field(..., alias="Lat")
    time: str | None = Field(default=None, alias="Time")
    vehicle_number: str = Field(..., alias="VehicleNumber")
    brigade: str | None = Field(default=None, alias="Brigade")

    @property
    def in_range(self) -> bool:
        return -90.0 <= self.lat <= 90.0 and -180.0 <= self.lon <= 180.0

    def to_domain(self) -> VehiclePosition:
        return VehiclePosition(
            line_id=self.lines.strip(),
            vehicle_id=self.vehicle_number,
            lat=self.lat,
            lon=self.lon,
            brigade=self.brigade or None,
            observed_at=self.time,
        )


class VehiclesResponseSchema(BaseModel):
    # On bad parameters the API answers 200 with a string here instead
    # of a list, which fails validation.
    result: list[VehicleRecordSchema]
