from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol

from ..types import DrawResult, FailureKind, JackpotInfo


class SourceError(Exception):
    """Expected failure of a single upstream source.

    Raised inside one source attempt; the pipeline records it and moves on
    to the next source.
    """

    kind: FailureKind = FailureKind.NETWORK_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SourceTimeout(SourceError):
    kind = FailureKind.TIMEOUT


class SourceNetworkError(SourceError):
    kind = FailureKind.NETWORK_ERROR


class SourceHttpError(SourceError):
    kind = FailureKind.HTTP_ERROR


class SourceParseError(SourceError):
    kind = FailureKind.PARSE_ERROR


class SourceNoData(SourceError):
    kind = FailureKind.NO_DATA


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    text: str
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    async def __call__(
        self,
        url: str,
        params: Mapping[str, str],
        headers: Mapping[str, str],
        timeout_millis: int,
    ) -> HttpResponse:
        ...


@dataclass(frozen=True)
class ExtractedRecord:
    """What one upstream record yielded after validation."""

    jackpot: Optional[JackpotInfo] = None
    latest: Optional[DrawResult] = None

    @property
    def empty(self) -> bool:
        return self.jackpot is None and self.latest is None


Extractor = Callable[[Mapping[str, Any]], ExtractedRecord]
