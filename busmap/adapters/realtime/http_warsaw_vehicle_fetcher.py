from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import ValidationError

from busmap.adapters.realtime.schemas import VehiclesResponseSchema
from busmap.app.ports.output import IVehicleFetcher
from busmap.domain.exceptions import FetchServerError, FetchTransportError
from busmap.domain.models import VehiclePosition

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.um.warszawa.pl/"
DEFAULT_RESOURCE_ID = "f2e5503e-927d-4ad3-9500-4ab9e55deb59"
ENDPOINT_PATH = "api/action/busestrams_get/"

VEHICLE_TYPE_BUS = 1
VEHICLE_TYPE_TRAM = 2


@dataclass(slots=True)
class HttpWarsawVehicleFetcher(IVehicleFetcher):
    """Fetches live bus/tram positions from the Warsaw open data API.

    Env vars:
      - WARSAW_API_BASE_URL: API root (default https://api.um.warszawa.pl/)
      - WARSAW_API_KEY: api.um.warszawa.pl key
      - WARSAW_RESOURCE_ID: dataset resource id
      - WARSAW_VEHICLE_TYPE: 1 for buses (default), 2 for trams
      - WARSAW_API_TIMEOUT_S: request timeout (default 10)

    Notes:
      - If no API key is configured, returns an empty fleet.
      - One request per call; retry timing belongs to the caller.
    """

    base_url: str | None = None
    api_key: str | None = None
    resource_id: str | None = None
    vehicle_type: int | None = None
    timeout_s: float = 10.0
    transport: httpx.AsyncBaseTransport | None = None

    _warned_unconfigured: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.base_url is None:
            self.base_url = os.getenv("WARSAW_API_BASE_URL", DEFAULT_BASE_URL)
        if self.api_key is None:
            self.api_key = os.getenv("WARSAW_API_KEY")
        if self.resource_id is None:
            self.resource_id = os.getenv("WARSAW_RESOURCE_ID", DEFAULT_RESOURCE_ID)
        if self.vehicle_type is None:
            self.vehicle_type = int(os.getenv("WARSAW_VEHICLE_TYPE", VEHICLE_TYPE_BUS))
        if os.getenv("WARSAW_API_TIMEOUT_S"):
            self.timeout_s = float(os.environ["WARSAW_API_TIMEOUT_S"])

    def _params(self, line: str | None, brigade: str | None) -> dict[str, Any]:
        params: dict[str, Any] = {
            "resource_id": self.resource_id,
            "apikey": self.api_key,
            "type": self.vehicle_type,
        }
        if line:
            params["line"] = line
        if brigade:
            params["brigade"] = brigade
        return params

    async def fetch(
        self, line: str | None = None, *, brigade: str | None = None
    ) -> tuple[VehiclePosition, ...]:
        if not self.api_key:
            if not self._warned_unconfigured:
                logger.warning("WARSAW_API_KEY is not set; vehicle feed disabled")
                self._warned_unconfigured = True
            return ()

        url = (self.base_url or DEFAULT_BASE_URL).rstrip("/") + "/" + ENDPOINT_PATH

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s, transport=self.transport
            ) as client:
                resp = await client.get(url, params=self._params(line, brigade))
        except httpx.TransportError as exc:
            raise FetchTransportError(
                f"{type(exc).__name__} while fetching vehicles: {exc}"
            ) from exc

        if resp.is_error:
            raise FetchServerError(
                f"Vehicle feed answered HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            payload = VehiclesResponseSchema.model_validate_json(resp.content)
        except ValidationError as exc:
            raise FetchServerError(
                f"Malformed vehicle feed body: {exc.error_count()} validation error(s)",
                status_code=resp.status_code,
            ) from exc

        vehicles = []
        for record in payload.result:
            if not record.in_range:
                logger.debug(
                    "Skipping vehicle %s with out-of-range position (%s, %s)",
                    record.vehicle_number,
                    record.lat,
                    record.lon,
                )
                continue
            vehicles.append(record.to_domain())
        return tuple(vehicles)
