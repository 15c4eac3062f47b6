from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .realtime import VehiclePosition


class FailureKind(str, Enum):
    TRANSPORT = "transport"  # no response: connectivity, timeout
    SERVER = "server"  # non-2xx status or unparseable body


@dataclass(frozen=True, slots=True)
class FetchSuccess:
    vehicles: tuple[VehiclePosition, ...]


@dataclass(frozen=True, slots=True)
class FetchEmpty:
    """Well-formed response carrying zero records; not a failure."""


@dataclass(frozen=True, slots=True)
class FetchFailure:
    kind: FailureKind
    cause: str = ""


FetchResult = Union[FetchSuccess, FetchEmpty, FetchFailure]
