from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from busmap.domain.models import GeoPoint, ViewportBounds


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)

    def to_domain(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lon=self.lon)


class BoundsSchema(BaseModel):
    southwest: GeoPointSchema
    northeast: GeoPointSchema

    @model_validator(mode="after")
    def _corners_ordered(self) -> "BoundsSchema":
        if self.northeast.lat < self.southwest.lat:
            raise ValueError("northeast.lat must be >= southwest.lat")
        if self.northeast.lon < self.southwest.lon:
            raise ValueError("northeast.lon must be >= southwest.lon")
        return self

    def to_domain(self) -> ViewportBounds:
        return ViewportBounds(
            southwest=self.southwest.to_domain(), northeast=self.northeast.to_domain()
        )


class ViewportChangeSchema(BaseModel):
    bounds: BoundsSchema
    zoom: float = Field(..., ge=0.0, le=30.0)
    center: GeoPointSchema | None = None


class LineSelectionSchema(BaseModel):
    # null returns to "show all buses"
    line_id: str | None = None


class MarkerTapSchema(BaseModel):
    vehicle_id: str | None = None


class VehicleSchema(BaseModel):
    vehicle_id: str
    line_id: str
    lat: float
    lon: float
    brigade: str | None = None
    observed_at: str | None = None
    title: str


class AdvisorySchema(BaseModel):
    kind: str
    message: str
    as_of: datetime | None = None
    line_id: str | None = None


class CameraTargetSchema(BaseModel):
    bounds: BoundsSchema | None = None
    padding_px: int = 0
    center: GeoPointSchema | None = None
    zoom: float | None = None


class FrameSchema(BaseModel):
    revision: int
    vehicles: list[VehicleSchema]
    selected_vehicle_id: str | None = None
    advisory: AdvisorySchema | None = None
    recenter: CameraTargetSchema | None = None


class LinesResponseSchema(BaseModel):
    lines: list[str]
