from __future__ import annotations

import pytest

from busmap.adapters.config import RuntimeConfig
from busmap.domain.models import RefreshPolicy


def test_defaults_match_refresh_policy(monkeypatch) -> None:
    for name in (
        "BUSMAP_MIN_API_CALL_INTERVAL_S",
        "BUSMAP_REFRESH_HIGH_ZOOM_S",
        "BUSMAP_REFRESH_LOW_ZOOM_S",
        "BUSMAP_MIN_ZOOM",
        "BUSMAP_IDLE_DEBOUNCE_S",
        "BUSMAP_RECENTER_PADDING_PX",
        "BUSMAP_REVEAL_ERRORS",
    ):
        monkeypatch.delenv(name, raising=False)

    cfg = RuntimeConfig.from_env()

    assert cfg.policy == RefreshPolicy()
    assert cfg.reveal_errors is False


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("BUSMAP_MIN_API_CALL_INTERVAL_S", "2.5")
    monkeypatch.setenv("BUSMAP_MIN_ZOOM", "13")
    monkeypatch.setenv("BUSMAP_RECENTER_PADDING_PX", "64")
    monkeypatch.setenv("BUSMAP_REVEAL_ERRORS", "yes")

    cfg = RuntimeConfig.from_env()

    assert cfg.policy.min_api_call_interval_s == 2.5
    assert cfg.policy.min_zoom_level == 13.0
    assert cfg.policy.recenter_padding_px == 64
    assert cfg.reveal_errors is True


@pytest.mark.parametrize(
    ("zoom", "expected"),
    [(14.0, 5.0), (17.5, 5.0), (13.99, 15.0), (3.0, 15.0)],
)
def test_cadence_interval_switches_at_min_zoom(zoom: float, expected: float) -> None:
    assert RefreshPolicy().cadence_interval_s(zoom) == expected
