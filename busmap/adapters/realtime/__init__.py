from .http_warsaw_vehicle_fetcher import HttpWarsawVehicleFetcher

__all__ = ["HttpWarsawVehicleFetcher"]
