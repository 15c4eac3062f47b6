from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from busmap.app.ports.output import IFetchExecutor, IMapView
from busmap.domain.algorithms import (
    filter_by_line,
    filter_within_bounds,
    sort_lines,
    with_valid_position,
)
from busmap.domain.models import (
    Advisory,
    AdvisoryKind,
    CameraTarget,
    DisplayFrame,
    FailureKind,
    FetchFailure,
    FetchResult,
    FetchSuccess,
    FleetSnapshot,
    GeoPoint,
    RefreshPolicy,
    VehiclePosition,
    ViewportBounds,
)

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1)


@dataclass(slots=True)
class RefreshScheduler:
    """Decides when to hit the vehicle feed and what the map should show.

    - Throttles opportunistic fetches to one per ``min_api_call_interval_s``.
    - Keeps the last good fleet and falls back to it on empty or failed
      fetches, attaching an advisory for the user.
    - Filters the fleet to the viewport, or to a single selected line.

    Not thread-safe: every method, including the fetch completion
    callback, must run on the same control loop.
    """

    executor: IFetchExecutor
    view: IMapView
    policy: RefreshPolicy = field(default_factory=RefreshPolicy)
    clock: Callable[[], datetime] = datetime.now

    last_snapshot: FleetSnapshot | None = field(default=None, init=False)
    last_fetch_at: datetime = field(default=EPOCH, init=False)
    viewport: ViewportBounds | None = field(default=None, init=False)
    zoom_level: float = field(default=0.0, init=False)
    map_center: GeoPoint | None = field(default=None, init=False)
    selected_line_id: str | None = field(default=None, init=False)
    selected_vehicle_id: str | None = field(default=None, init=False)

    _fetch_in_flight: bool = field(default=False, init=False, repr=False)
    _issued_at: datetime | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.zoom_level = self.policy.default_zoom
        # Naive and aware datetimes cannot be subtracted; follow the clock.
        self.last_fetch_at = EPOCH.replace(tzinfo=self.clock().tzinfo)

    @property
    def fetch_in_flight(self) -> bool:
        return self._fetch_in_flight

    def snapshot_age(self) -> timedelta | None:
        if self.last_snapshot is None:
            return None
        return self.clock() - self.last_snapshot.fetched_at

    # ---- host events -------------------------------------------------

    def on_viewport_changed(
        self,
        bounds: ViewportBounds,
        zoom_level: float,
        *,
        center: GeoPoint | None = None,
    ) -> None:
        self.viewport = bounds
        self.zoom_level = float(zoom_level)
        self.map_center = center or bounds.center

    def on_idle(self) -> None:
        if self.selected_line_id is not None:
            return

        if self.zoom_level < self.policy.min_zoom_level:
            logger.debug(
                "Zoom %.1f below %.1f; clearing markers",
                self.zoom_level,
                self.policy.min_zoom_level,
            )
            self.view.render(DisplayFrame())
            return

        if self.last_snapshot is not None:
            self.view.render(self._frame(self._display_vehicles()))

        self.request_fetch(forced=False)

    def on_marker_tapped(self, vehicle_id: str | None) -> None:
        self.selected_vehicle_id = vehicle_id

    def on_cadence_tick(self) -> float:
        """Periodic refresh; returns the delay until the next tick."""

        if self.selected_line_id is None:
            self.request_fetch(forced=True)
        return self.policy.cadence_interval_s(self.zoom_level)

    def select_line(self, line_id: str | None) -> None:
        self.selected_line_id = line_id

        if line_id is None:
            center = self.map_center or self.policy.default_center
            self.view.render(
                self._frame(
                    self._display_vehicles(),
                    recenter=CameraTarget(center=center, zoom=self.policy.default_zoom),
                )
            )
            return

        fleet = self.last_snapshot.vehicles if self.last_snapshot else ()
        matches = filter_by_line(line_id, with_valid_position(fleet))
        if not matches:
            logger.info("No vehicles for line %s", line_id)
            self.view.render(
                DisplayFrame(
                    advisory=Advisory(kind=AdvisoryKind.NO_DATA_FOR_LINE, line_id=line_id)
                )
            )
            return

        bounds = ViewportBounds.enclosing([v.location for v in matches])
        self.view.render(
            self._frame(
                matches,
                recenter=CameraTarget(
                    bounds=bounds, padding_px=self.policy.recenter_padding_px
                ),
            )
        )

    def line_menu(self) -> tuple[str, ...]:
        if self.last_snapshot is None:
            return ()
        return tuple(sort_lines({v.line_id for v in self.last_snapshot.vehicles}))

    # ---- fetch policy ------------------------------------------------

    def request_fetch(self, *, forced: bool) -> bool:
        """Dispatch a fetch if the policy allows it; never blocks.

        Returns True when a fetch was handed to the executor.
        """

        now = self.clock()

        if self._fetch_in_flight:
            logger.debug("Fetch already in flight; dropping request")
            return False

        min_interval = timedelta(seconds=self.policy.min_api_call_interval_s)
        if not forced and now - self.last_fetch_at < min_interval:
            logger.debug("Last fetch at %s is too recent; skipping", self.last_fetch_at)
            return False

        if self.viewport is None:
            logger.debug("No viewport yet; skipping fetch")
            return False

        self._fetch_in_flight = True
        self._issued_at = now
        try:
            self.executor.submit(line=None, on_complete=self.on_fetch_complete)
        except Exception:
            self._fetch_in_flight = False
            self._issued_at = None
            raise
        return True

    def on_fetch_complete(self, result: FetchResult) -> None:
        self._fetch_in_flight = False
        issued_at = self._issued_at or self.clock()
        self._issued_at = None

        if isinstance(result, FetchSuccess):
            self.last_snapshot = FleetSnapshot(
                vehicles=tuple(result.vehicles), fetched_at=self.clock()
            )
            self.last_fetch_at = issued_at
            logger.info("Fleet snapshot replaced with %d vehicles", len(result.vehicles))
            self.view.render(self._frame(self._display_vehicles()))
            return

        snapshot = self.last_snapshot
        if isinstance(result, FetchFailure):
            kind = (
                AdvisoryKind.CONNECTION_ERROR
                if result.kind is FailureKind.TRANSPORT
                else AdvisoryKind.API_ERROR
            )
        elif snapshot is None:
            kind = AdvisoryKind.NO_DATA
        else:
            kind = AdvisoryKind.STALE_DATA

        if snapshot is None:
            self.view.render(DisplayFrame(advisory=Advisory(kind=kind)))
            return

        self.view.render(
            self._frame(
                self._display_vehicles(),
                advisory=Advisory(kind=kind, as_of=snapshot.fetched_at),
            )
        )

    # ---- helpers -----------------------------------------------------

    def _display_vehicles(self) -> tuple[VehiclePosition, ...]:
        snapshot = self.last_snapshot
        if snapshot is None:
            return ()

        fleet = with_valid_position(snapshot.vehicles)
        if self.selected_line_id is not None:
            return filter_by_line(self.selected_line_id, fleet)
        if self.zoom_level < self.policy.min_zoom_level:
            return ()
        return filter_within_bounds(self.viewport, fleet)

    def _frame(
        self,
        vehicles: tuple[VehiclePosition, ...],
        *,
        advisory: Advisory | None = None,
        recenter: CameraTarget | None = None,
    ) -> DisplayFrame:
        selected = self.selected_vehicle_id
        if selected is not None and not any(v.vehicle_id == selected for v in vehicles):
            selected = None
        return DisplayFrame(
            vehicles=vehicles,
            selected_vehicle_id=selected,
            advisory=advisory,
            recenter=recenter,
        )
