from .display import (
    Advisory,
    AdvisoryKind,
    CameraTarget,
    DisplayFrame,
    format_timestamp,
)
from .fetch import FailureKind, FetchEmpty, FetchFailure, FetchResult, FetchSuccess
from .geo import GeoPoint, ViewportBounds
from .policy import RefreshPolicy
from .realtime import FleetSnapshot, VehiclePosition

__all__ = [
    "Advisory",
    "AdvisoryKind",
    "CameraTarget",
    "DisplayFrame",
    "FailureKind",
    "FetchEmpty",
    "FetchFailure",
    "FetchResult",
    "FetchSuccess",
    "FleetSnapshot",
    "GeoPoint",
    "RefreshPolicy",
    "VehiclePosition",
    "ViewportBounds",
    "format_timestamp",
]
