from __future__ import annotations

from abc import ABC, abstractmethod

from busmap.domain.models import DisplayFrame


class IMapView(ABC):
    """Port for the map surface that draws markers and moves the camera."""

    @abstractmethod
    def render(self, frame: DisplayFrame) -> None:
        raise NotImplementedError
