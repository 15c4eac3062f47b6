from __future__ import annotations

from fastapi import Request

from busmap.adapters.config import RuntimeConfig
from busmap.adapters.realtime import HttpWarsawVehicleFetcher
from busmap.adapters.session import MapSession


def build_map_session() -> MapSession:
    cfg = RuntimeConfig.from_env()
    return MapSession.create(fetcher=HttpWarsawVehicleFetcher(), policy=cfg.policy)


async def get_map_session(request: Request) -> MapSession:
    # One shared session per process, started lazily on the serving loop.
    session: MapSession | None = getattr(request.app.state, "map_session", None)
    if session is None or session.closed:
        session = build_map_session()
        request.app.state.map_session = session
    if not session.started:
        session.start()
    return session
