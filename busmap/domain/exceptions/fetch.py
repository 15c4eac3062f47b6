class FetchError(Exception):
    """Base exception for vehicle feed fetch failures."""


class FetchTransportError(FetchError):
    """No response was received (connectivity, DNS, timeout)."""


class FetchServerError(FetchError):
    """The feed answered, but not with a usable vehicle list."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
