from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple, Union


class FailureKind(str, Enum):
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network-error"
    HTTP_ERROR = "http-error"
    PARSE_ERROR = "parse-error"
    NO_DATA = "no-data"


@dataclass(frozen=True)
class DrawResult:
    """Winning numbers of one drawing."""

    numbers: Tuple[int, ...]
    special_number: int
    draw_date: dt.date
    multiplier: Optional[int] = None

    def formatted(self) -> str:
        return f"{', '.join(str(n) for n in self.numbers)} | PB: {self.special_number}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "numbers": list(self.numbers),
            "specialNumber": self.special_number,
            "drawDate": self.draw_date.isoformat(),
            "multiplier": self.multiplier,
            "formatted": self.formatted(),
        }


def format_currency(amount: int) -> str:
    return f"${amount:,}"


@dataclass(frozen=True)
class JackpotInfo:
    """Advertised prize for the next drawing.

    ``cash_value`` is derived as 60% of ``amount`` when the source does not
    report one. That ratio is an approximation, not a published figure.
    """

    amount: int
    cash_value: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "cashValue": self.cash_value,
            "formatted": format_currency(self.amount),
            "cashFormatted": format_currency(self.cash_value),
        }


@dataclass(frozen=True)
class SourceAttempt:
    source_name: str
    succeeded: bool
    kind: Optional[FailureKind] = None
    error_message: Optional[str] = None
    status_code: Optional[int] = None

    def describe(self) -> str:
        if self.succeeded:
            return f"{self.source_name}: ok"
        return f"{self.source_name}: {self.error_message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source_name,
            "succeeded": self.succeeded,
            "kind": self.kind.value if self.kind else None,
            "error": self.error_message,
            "statusCode": self.status_code,
        }


@dataclass(frozen=True)
class DrawingSchedule:
    draw_at: dt.datetime
    time_label: str = "11:00 PM ET"

    @property
    def date_label(self) -> str:
        d = self.draw_at
        return f"{d:%A}, {d:%B} {d.day}, {d.year}"

    def describe(self) -> str:
        return f"{self.date_label} @ {self.time_label}"


@dataclass(frozen=True)
class FetchSuccess:
    jackpot: Optional[JackpotInfo]
    latest: Optional[DrawResult]
    source_used: str
    next_drawing: DrawingSchedule
    success: bool = field(default=True, init=False)

    def __post_init__(self) -> None:
        if self.jackpot is None and self.latest is None:
            raise ValueError("FetchSuccess requires a jackpot or a draw result")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "jackpot": self.jackpot.to_dict() if self.jackpot else None,
            "latestNumbers": self.latest.to_dict() if self.latest else None,
            "nextDrawing": self.next_drawing.describe(),
            "source": self.source_used,
        }


@dataclass(frozen=True)
class FetchFailure:
    attempts: Sequence[SourceAttempt]
    retry_after_seconds: int = 300
    success: bool = field(default=False, init=False)

    def error_lines(self) -> list[str]:
        return [attempt.describe() for attempt in self.attempts]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "errors": self.error_lines(),
            "attempts": [attempt.to_dict() for attempt in self.attempts],
            "retryAfter": self.retry_after_seconds,
        }


FetchOutcome = Union[FetchSuccess, FetchFailure]
