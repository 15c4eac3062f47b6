from .fetch_executor import IFetchExecutor
from .map_view import IMapView
from .vehicle_fetcher import IVehicleFetcher

__all__ = [
    "IFetchExecutor",
    "IMapView",
    "IVehicleFetcher",
]
