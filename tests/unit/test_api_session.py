from __future__ import annotations

import asyncio
from dataclasses import dataclass

import httpx
import pytest

from busmap.adapters.api.dependencies import get_map_session
from busmap.adapters.session import MapSession
from busmap.domain.models import GeoPoint, RefreshPolicy, VehiclePosition, ViewportBounds
from busmap.main import app

FLEET = (
    VehiclePosition(
        line_id="523",
        vehicle_id="1000",
        lat=52.2297,
        lon=21.0122,
        brigade="3",
        observed_at="2024-01-01 10:00:00",
    ),
    VehiclePosition(line_id="N61", vehicle_id="1001", lat=52.2397, lon=21.0222),
    VehiclePosition(line_id="20", vehicle_id="1002", lat=52.2350, lon=21.0150),
)

BOUNDS = ViewportBounds(
    southwest=GeoPoint(lat=52.2297, lon=21.0122),
    northeast=GeoPoint(lat=52.2397, lon=21.0222),
)


@dataclass(slots=True)
class _FakeFetcher:
    vehicles: tuple[VehiclePosition, ...] = FLEET

    async def fetch(self, line: str | None = None) -> tuple[VehiclePosition, ...]:
        return self.vehicles


async def _loaded_session() -> MapSession:
    session = MapSession.create(
        fetcher=_FakeFetcher(), policy=RefreshPolicy(idle_debounce_s=0.01)
    )
    session.scheduler.on_viewport_changed(BOUNDS, 15)
    session.scheduler.request_fetch(forced=True)
    await session.executor.wait_idle()
    return session


def _client() -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.unit
@pytest.mark.anyio
async def test_health() -> None:
    async with _client() as client:
        resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_frame_returns_viewport_vehicles() -> None:
    session = await _loaded_session()

    async def _override() -> MapSession:
        return session

    app.dependency_overrides[get_map_session] = _override
    async with _client() as client:
        resp = await client.get("/session/frame")
    app.dependency_overrides.clear()
    await session.aclose()

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["revision"] == 1
    assert [v["vehicle_id"] for v in payload["vehicles"]] == ["1000", "1001", "1002"]
    assert payload["vehicles"][0]["title"] == "Line: 523 | Vehicle ID: 1000"
    assert payload["advisory"] is None


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_lines_is_naturally_sorted() -> None:
    session = await _loaded_session()

    async def _override() -> MapSession:
        return session

    app.dependency_overrides[get_map_session] = _override
    async with _client() as client:
        resp = await client.get("/session/lines")
    app.dependency_overrides.clear()
    await session.aclose()

    assert resp.status_code == 200
    assert resp.json() == {"lines": ["20", "523", "N61"]}


@pytest.mark.unit
@pytest.mark.anyio
async def test_select_line_recenters_on_line() -> None:
    session = await _loaded_session()

    async def _override() -> MapSession:
        return session

    app.dependency_overrides[get_map_session] = _override
    async with _client() as client:
        resp = await client.post("/session/line", json={"line_id": "523"})
        missing = await client.post("/session/line", json={"line_id": "999"})
    app.dependency_overrides.clear()
    await session.aclose()

    assert resp.status_code == 200
    payload = resp.json()
    assert [v["vehicle_id"] for v in payload["vehicles"]] == ["1000"]
    recenter = payload["recenter"]
    assert recenter["padding_px"] == 100
    assert recenter["bounds"]["southwest"] == {"lat": 52.2297, "lon": 21.0122}
    assert recenter["bounds"]["northeast"] == {"lat": 52.2297, "lon": 21.0122}

    assert missing.status_code == 200
    body = missing.json()
    assert body["vehicles"] == []
    assert body["recenter"] is None
    assert body["advisory"]["kind"] == "no_data_for_line"
    assert body["advisory"]["message"] == "No buses available for line: 999"


@pytest.mark.unit
@pytest.mark.anyio
async def test_viewport_change_is_debounced_into_new_frame() -> None:
    session = await _loaded_session()

    async def _override() -> MapSession:
        return session

    app.dependency_overrides[get_map_session] = _override
    async with _client() as client:
        resp = await client.post(
            "/session/viewport",
            json={
                "bounds": {
                    "southwest": {"lat": 52.2200, "lon": 21.0000},
                    "northeast": {"lat": 52.2300, "lon": 21.0200},
                },
                "zoom": 15,
            },
        )
        await asyncio.sleep(0.05)
        frame = await client.get("/session/frame")
    app.dependency_overrides.clear()
    await session.aclose()

    assert resp.status_code == 200
    assert [v["vehicle_id"] for v in frame.json()["vehicles"]] == ["1000"]


@pytest.mark.unit
@pytest.mark.anyio
async def test_viewport_with_inverted_corners_is_rejected() -> None:
    session = await _loaded_session()

    async def _override() -> MapSession:
        return session

    app.dependency_overrides[get_map_session] = _override
    async with _client() as client:
        resp = await client.post(
            "/session/viewport",
            json={
                "bounds": {
                    "southwest": {"lat": 52.3, "lon": 21.0},
                    "northeast": {"lat": 52.2, "lon": 21.1},
                },
                "zoom": 15,
            },
        )
    app.dependency_overrides.clear()
    await session.aclose()

    assert resp.status_code == 422


@pytest.mark.unit
@pytest.mark.anyio
async def test_marker_tap_marks_selected_vehicle() -> None:
    session = await _loaded_session()

    async def _override() -> MapSession:
        return session

    app.dependency_overrides[get_map_session] = _override
    async with _client() as client:
        await client.post("/session/marker", json={"vehicle_id": "1001"})
        resp = await client.post("/session/line", json={"line_id": None})
    app.dependency_overrides.clear()
    await session.aclose()

    payload = resp.json()
    assert payload["selected_vehicle_id"] == "1001"
    assert payload["recenter"]["zoom"] == 15.0
