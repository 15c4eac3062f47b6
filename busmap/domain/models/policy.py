from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class RefreshPolicy:
    """Timing and display thresholds for the refresh scheduler."""

    min_api_call_interval_s: float = 5.0
    refresh_interval_high_zoom_s: float = 5.0
    refresh_interval_low_zoom_s: float = 15.0
    min_zoom_level: float = 14.0
    idle_debounce_s: float = 1.0
    recenter_padding_px: int = 100
    default_zoom: float = 15.0
    default_center: GeoPoint = GeoPoint(lat=52.2881717, lon=21.0061544)

    def cadence_interval_s(self, zoom_level: float) -> float:
        if zoom_level >= self.min_zoom_level:
            return self.refresh_interval_high_zoom_s
        return self.refresh_interval_low_zoom_s
