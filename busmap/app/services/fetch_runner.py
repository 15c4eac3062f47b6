from __future__ import annotations

import logging

from busmap.app.ports.output import IVehicleFetcher
from busmap.domain.exceptions import FetchServerError, FetchTransportError
from busmap.domain.models import (
    FailureKind,
    FetchEmpty,
    FetchFailure,
    FetchResult,
    FetchSuccess,
)

logger = logging.getLogger(__name__)


async def run_fetch(fetcher: IVehicleFetcher, *, line: str | None = None) -> FetchResult:
    """Call the fetcher and fold every outcome into a ``FetchResult``.

    Never raises for feed problems; those become ``FetchFailure`` values.
    """

    try:
        vehicles = await fetcher.fetch(line)
    except FetchTransportError as exc:
        logger.warning("Vehicle feed unreachable: %s", exc)
        return FetchFailure(kind=FailureKind.TRANSPORT, cause=str(exc))
    except FetchServerError as exc:
        logger.warning(
            "Vehicle feed returned an unusable response (status=%s): %s",
            exc.status_code,
            exc,
        )
        return FetchFailure(kind=FailureKind.SERVER, cause=str(exc))

    if not vehicles:
        return FetchEmpty()
    return FetchSuccess(vehicles=tuple(vehicles))
