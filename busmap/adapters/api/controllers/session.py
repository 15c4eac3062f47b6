from __future__ import annotations

from fastapi import APIRouter, Depends

from busmap.adapters.api.dependencies import get_map_session
from busmap.adapters.api.schemas.session import (
    AdvisorySchema,
    BoundsSchema,
    CameraTargetSchema,
    FrameSchema,
    GeoPointSchema,
    LineSelectionSchema,
    LinesResponseSchema,
    MarkerTapSchema,
    VehicleSchema,
    ViewportChangeSchema,
)
from busmap.adapters.session import FrameBuffer, MapSession
from busmap.domain.models import CameraTarget, ViewportBounds

router = APIRouter(prefix="/session", tags=["session"])


def _bounds_schema(bounds: ViewportBounds) -> BoundsSchema:
    return BoundsSchema(
        southwest=GeoPointSchema(lat=bounds.southwest.lat, lon=bounds.southwest.lon),
        northeast=GeoPointSchema(lat=bounds.northeast.lat, lon=bounds.northeast.lon),
    )


def _camera_schema(target: CameraTarget) -> CameraTargetSchema:
    return CameraTargetSchema(
        bounds=_bounds_schema(target.bounds) if target.bounds else None,
        padding_px=target.padding_px,
        center=(
            GeoPointSchema(lat=target.center.lat, lon=target.center.lon)
            if target.center
            else None
        ),
        zoom=target.zoom,
    )


def _frame_schema(session: MapSession) -> FrameSchema:
    buffer = session.scheduler.view
    if not isinstance(buffer, FrameBuffer):
        raise RuntimeError("Map session does not buffer frames")

    frame = buffer.frame
    advisory = frame.advisory
    return FrameSchema(
        revision=buffer.revision,
        vehicles=[
            VehicleSchema(
                vehicle_id=v.vehicle_id,
                line_id=v.line_id,
                lat=v.lat,
                lon=v.lon,
                brigade=v.brigade,
                observed_at=v.observed_at,
                title=v.marker_title,
            )
            for v in frame.vehicles
        ],
        selected_vehicle_id=frame.selected_vehicle_id,
        advisory=(
            AdvisorySchema(
                kind=advisory.kind.value,
                message=advisory.message,
                as_of=advisory.as_of,
                line_id=advisory.line_id,
            )
            if advisory
            else None
        ),
        recenter=_camera_schema(frame.recenter) if frame.recenter else None,
    )


# Session endpoints are async so they run on the loop that owns the timers.


@router.get("/frame", response_model=FrameSchema)
async def get_frame(session: MapSession = Depends(get_map_session)) -> FrameSchema:
    return _frame_schema(session)


@router.post("/viewport", response_model=FrameSchema)
async def post_viewport(
    body: ViewportChangeSchema,
    session: MapSession = Depends(get_map_session),
) -> FrameSchema:
    session.viewport_changed(
        body.bounds.to_domain(),
        body.zoom,
        center=body.center.to_domain() if body.center else None,
    )
    return _frame_schema(session)


@router.post("/line", response_model=FrameSchema)
async def post_line(
    body: LineSelectionSchema,
    session: MapSession = Depends(get_map_session),
) -> FrameSchema:
    session.select_line(body.line_id)
    return _frame_schema(session)


@router.post("/marker", response_model=FrameSchema)
async def post_marker(
    body: MarkerTapSchema,
    session: MapSession = Depends(get_map_session),
) -> FrameSchema:
    session.marker_tapped(body.vehicle_id)
    return _frame_schema(session)


@router.get("/lines", response_model=LinesResponseSchema)
async def get_lines(
    session: MapSession = Depends(get_map_session),
) -> LinesResponseSchema:
    return LinesResponseSchema(lines=list(session.line_menu()))
