from __future__ import annotations

import asyncio

import pytest

from busmap.adapters.realtime import HttpWarsawVehicleFetcher
from busmap.app.services.fetch_runner import run_fetch
from busmap.domain.models import FetchEmpty, FetchSuccess


@pytest.mark.integration
def test_live_feed_returns_positioned_vehicles(require_warsaw_api_key: str) -> None:
    fetcher = HttpWarsawVehicleFetcher(api_key=require_warsaw_api_key)

    result = asyncio.run(run_fetch(fetcher))

    # The feed is legitimately empty at night.
    assert isinstance(result, (FetchSuccess, FetchEmpty))
    if isinstance(result, FetchSuccess):
        assert all(v.vehicle_id for v in result.vehicles)
        assert any(v.has_valid_position for v in result.vehicles)
