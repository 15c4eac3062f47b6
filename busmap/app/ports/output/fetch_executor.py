from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from busmap.domain.models import FetchResult


class IFetchExecutor(ABC):
    """Runs fetches off the control loop, one at a time.

    ``on_complete`` must be invoked on the same loop/thread that called
    ``submit``.
    """

    @abstractmethod
    def submit(
        self, *, line: str | None, on_complete: Callable[[FetchResult], None]
    ) -> None:
        raise NotImplementedError
