from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from busmap.adapters.session.asyncio_fetch_executor import AsyncioFetchExecutor
from busmap.adapters.session.frame_buffer import FrameBuffer
from busmap.app.ports.output import IMapView, IVehicleFetcher
from busmap.app.services.refresh_scheduler import RefreshScheduler
from busmap.domain.models import GeoPoint, RefreshPolicy, ViewportBounds

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MapSession:
    """Host-side timers around a ``RefreshScheduler`` on one asyncio loop.

    - Camera changes restart an idle debounce; ``on_idle`` fires once the
      camera has been still for ``idle_debounce_s``.
    - A cadence loop forces a refresh every 5 s (zoomed in) or 15 s
      (zoomed out), re-reading the interval after each tick.
    - ``aclose()`` cancels both timers; nothing fires after it returns.
    """

    scheduler: RefreshScheduler
    executor: AsyncioFetchExecutor

    _debounce_task: asyncio.Task[None] | None = field(
        default=None, init=False, repr=False
    )
    _cadence_task: asyncio.Task[None] | None = field(
        default=None, init=False, repr=False
    )
    _closed: bool = field(default=False, init=False, repr=False)

    @staticmethod
    def create(
        *,
        fetcher: IVehicleFetcher,
        view: IMapView | None = None,
        policy: RefreshPolicy | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "MapSession":
        executor = AsyncioFetchExecutor(fetcher=fetcher)
        scheduler = RefreshScheduler(
            executor=executor,
            view=view if view is not None else FrameBuffer(),
            policy=policy or RefreshPolicy(),
            clock=clock,
        )
        return MapSession(scheduler=scheduler, executor=executor)

    @property
    def policy(self) -> RefreshPolicy:
        return self.scheduler.policy

    @property
    def started(self) -> bool:
        return self._cadence_task is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def start(
        self,
        *,
        bounds: ViewportBounds | None = None,
        zoom_level: float | None = None,
        center: GeoPoint | None = None,
    ) -> None:
        """Begin the session (map ready); must be called on the event loop.

        ``center`` is the device location when the host knows it; without
        one, "show all lines" falls back to the policy's default center.
        """

        if self._closed:
            raise RuntimeError("Map session is closed")
        if self.started:
            return

        if bounds is not None:
            self.scheduler.on_viewport_changed(
                bounds,
                zoom_level if zoom_level is not None else self.policy.default_zoom,
                center=center,
            )
            self.scheduler.request_fetch(forced=True)
        elif center is not None:
            self.scheduler.map_center = center

        loop = asyncio.get_running_loop()
        self._cadence_task = loop.create_task(self._cadence_loop())
        logger.info("Map session started")

    def viewport_changed(
        self,
        bounds: ViewportBounds,
        zoom_level: float,
        *,
        center: GeoPoint | None = None,
    ) -> None:
        if self._closed:
            return

        self.scheduler.on_viewport_changed(bounds, zoom_level, center=center)

        if self._debounce_task is not None:
            self._debounce_task.cancel()
        loop = asyncio.get_running_loop()
        self._debounce_task = loop.create_task(self._debounced_idle())

    def select_line(self, line_id: str | None) -> None:
        if self._closed:
            return
        self.scheduler.select_line(line_id)

    def marker_tapped(self, vehicle_id: str | None) -> None:
        self.scheduler.on_marker_tapped(vehicle_id)

    def line_menu(self) -> tuple[str, ...]:
        return self.scheduler.line_menu()

    async def _debounced_idle(self) -> None:
        await asyncio.sleep(self.policy.idle_debounce_s)
        if not self._closed:
            self.scheduler.on_idle()

    async def _cadence_loop(self) -> None:
        delay = self.policy.refresh_interval_high_zoom_s
        while not self._closed:
            await asyncio.sleep(delay)
            if self._closed:
                return
            delay = self.scheduler.on_cadence_tick()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True

        for task in (self._debounce_task, self._cadence_task):
            if task is not None and not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task

        await self.executor.aclose()
        logger.info("Map session closed")
