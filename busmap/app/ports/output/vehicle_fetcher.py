from __future__ import annotations

from abc import ABC, abstractmethod

from busmap.domain.models import VehiclePosition


class IVehicleFetcher(ABC):
    """Port for obtaining the live fleet from a transit feed.

    Implementations raise ``FetchTransportError`` when no response was
    received and ``FetchServerError`` for unusable responses. They never
    retry on their own.
    """

    @abstractmethod
    async def fetch(self, line: str | None = None) -> tuple[VehiclePosition, ...]:
        raise NotImplementedError
