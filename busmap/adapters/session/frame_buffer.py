from __future__ import annotations

from dataclasses import dataclass, field

from busmap.app.ports.output import IMapView
from busmap.domain.models import DisplayFrame


@dataclass(slots=True)
class FrameBuffer(IMapView):
    """Keeps the latest frame for clients that poll instead of listening.

    ``revision`` increases on every render so pollers can skip redraws.
    """

    frame: DisplayFrame = field(default_factory=DisplayFrame)
    revision: int = 0

    def render(self, frame: DisplayFrame) -> None:
        self.frame = frame
        self.revision += 1
