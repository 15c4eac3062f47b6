from .fetch import FetchError, FetchServerError, FetchTransportError

__all__ = ["FetchError", "FetchServerError", "FetchTransportError"]
