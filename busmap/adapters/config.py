from __future__ import annotations

import os
from dataclasses import dataclass

from busmap.domain.models import RefreshPolicy


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return float(raw)


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    policy: RefreshPolicy
    reveal_errors: bool

    @staticmethod
    def from_env() -> "RuntimeConfig":
        defaults = RefreshPolicy()
        policy = RefreshPolicy(
            min_api_call_interval_s=_env_float(
                "BUSMAP_MIN_API_CALL_INTERVAL_S", defaults.min_api_call_interval_s
            ),
            refresh_interval_high_zoom_s=_env_float(
                "BUSMAP_REFRESH_HIGH_ZOOM_S", defaults.refresh_interval_high_zoom_s
            ),
            refresh_interval_low_zoom_s=_env_float(
                "BUSMAP_REFRESH_LOW_ZOOM_S", defaults.refresh_interval_low_zoom_s
            ),
            min_zoom_level=_env_float("BUSMAP_MIN_ZOOM", defaults.min_zoom_level),
            idle_debounce_s=_env_float(
                "BUSMAP_IDLE_DEBOUNCE_S", defaults.idle_debounce_s
            ),
            recenter_padding_px=int(
                _env_float("BUSMAP_RECENTER_PADDING_PX", defaults.recenter_padding_px)
            ),
        )
        return RuntimeConfig(
            policy=policy,
            reveal_errors=_env_bool("BUSMAP_REVEAL_ERRORS", False),
        )
