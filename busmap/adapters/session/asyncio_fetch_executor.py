from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from typing import Callable

from busmap.app.ports.output import IFetchExecutor, IVehicleFetcher
from busmap.app.services.fetch_runner import run_fetch
from busmap.domain.models import FailureKind, FetchFailure, FetchResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AsyncioFetchExecutor(IFetchExecutor):
    """Runs one fetch task at a time on the current event loop.

    Completions are delivered on that same loop, so the scheduler state
    is only ever touched from one place. Results arriving after
    ``aclose()`` are dropped.
    """

    fetcher: IVehicleFetcher

    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(
        self, *, line: str | None, on_complete: Callable[[FetchResult], None]
    ) -> None:
        if self._closed:
            raise RuntimeError("Fetch executor is closed")
        if self.busy:
            raise RuntimeError("A fetch is already running")

        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(line, on_complete))

    async def _run(
        self, line: str | None, on_complete: Callable[[FetchResult], None]
    ) -> None:
        try:
            result = await run_fetch(self.fetcher, line=line)
        except Exception as exc:
            logger.exception("Unexpected error while fetching vehicles")
            result = FetchFailure(
                kind=FailureKind.SERVER, cause=f"{type(exc).__name__}: {exc}"
            )

        if self._closed:
            return
        on_complete(result)

    async def wait_idle(self) -> None:
        task = self._task
        if task is not None and not task.done():
            await task

    async def aclose(self) -> None:
        self._closed = True
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
