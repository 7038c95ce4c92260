from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .datasource.base import Extractor
from .datasource.ny_open_data import MAIN_NUMBER_RANGE, SPECIAL_NUMBER_RANGE
from .types import DrawResult, SourceAttempt

MIN_HISTORY_LIMIT = 25
MAX_HISTORY_LIMIT = 2000
DEFAULT_HISTORY_LIMIT = 500
RECENT_WINDOW_MAX = 50
RECENT_WINDOW_SHARE = 0.3
HOT_COLD_MAIN = 25
HOT_COLD_SPECIAL = 10
LOW_HIGH_SPLIT = 35


def clamp_limit(limit: Optional[int]) -> int:
    if not limit:
        return DEFAULT_HISTORY_LIMIT
    return min(max(limit, MIN_HISTORY_LIMIT), MAX_HISTORY_LIMIT)


def collect_drawings(records: Sequence[Any], extractor: Extractor) -> List[DrawResult]:
    """Run ``extractor`` over every record, keeping only valid draw results."""
    drawings = []
    for record in records:
        if not isinstance(record, Mapping):
            continue
        latest = extractor(record).latest
        if latest is not None:
            drawings.append(latest)
    return drawings


@dataclass
class NumberFrequency:
    total: int = 0
    recent: int = 0
    last_seen: Optional[dt.date] = None

    @property
    def score(self) -> float:
        return self.recent * 3 + self.total * 0.2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "recent": self.recent,
            "lastSeen": self.last_seen.isoformat() if self.last_seen else None,
        }


@dataclass(frozen=True)
class HistoryStatistics:
    number_frequency: Dict[int, NumberFrequency]
    special_frequency: Dict[int, NumberFrequency]
    hot_numbers: List[int]
    cold_numbers: List[int]
    hot_specials: List[int]
    cold_specials: List[int]
    patterns: Dict[str, Any]
    sum_ranges: Optional[Dict[str, Any]]
    total_drawings: int
    recent_drawings: int
    latest_date: Optional[dt.date]
    earliest_date: Optional[dt.date]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "numberFrequency": {str(n): f.to_dict() for n, f in self.number_frequency.items()},
            "specialFrequency": {str(n): f.to_dict() for n, f in self.special_frequency.items()},
            "hotNumbers": self.hot_numbers,
            "coldNumbers": self.cold_numbers,
            "hotSpecials": self.hot_specials,
            "coldSpecials": self.cold_specials,
            "patterns": self.patterns,
            "sumRanges": self.sum_ranges,
            "totalDrawings": self.total_drawings,
            "recentDrawings": self.recent_drawings,
            "dateRange": {
                "latest": self.latest_date.isoformat() if self.latest_date else None,
                "earliest": self.earliest_date.isoformat() if self.earliest_date else None,
            },
        }


def _empty_frequencies(bounds: tuple[int, int]) -> Dict[int, NumberFrequency]:
    low, high = bounds
    return {n: NumberFrequency() for n in range(low, high + 1)}


def _ranked(frequencies: Dict[int, NumberFrequency], count: int, hottest: bool) -> List[int]:
    sign = -1 if hottest else 1
    ordered = sorted(frequencies.items(), key=lambda item: (sign * item[1].score, item[0]))
    return [number for number, _ in ordered[:count]]


def _patterns(drawings: Sequence[DrawResult]) -> Dict[str, Any]:
    slots = len(drawings) * 5
    if not drawings:
        return {
            "consecutiveNumbers": 0.0,
            "evenOddDistribution": {"evenPercentage": 0.0, "oddPercentage": 0.0},
            "lowHighDistribution": {"lowPercentage": 0.0, "highPercentage": 0.0},
        }

    consecutive = 0
    even = 0
    low = 0
    for drawing in drawings:
        numbers = sorted(drawing.numbers)
        if any(b == a + 1 for a, b in zip(numbers, numbers[1:])):
            consecutive += 1
        even += sum(1 for n in numbers if n % 2 == 0)
        low += sum(1 for n in numbers if n <= LOW_HIGH_SPLIT)

    return {
        "consecutiveNumbers": consecutive / len(drawings),
        "evenOddDistribution": {
            "evenPercentage": even / slots * 100,
            "oddPercentage": (slots - even) / slots * 100,
        },
        "lowHighDistribution": {
            "lowPercentage": low / slots * 100,
            "highPercentage": (slots - low) / slots * 100,
        },
    }


def _sum_ranges(drawings: Sequence[DrawResult]) -> Optional[Dict[str, Any]]:
    sums = [sum(drawing.numbers) for drawing in drawings]
    if not sums:
        return None
    ordered = sorted(sums)
    return {
        "min": ordered[0],
        "max": ordered[-1],
        "average": sum(sums) / len(sums),
        "median": ordered[len(ordered) // 2],
        "range": ordered[-1] - ordered[0],
    }


def compute_statistics(drawings: Sequence[DrawResult]) -> HistoryStatistics:
    """Frequency, hot/cold and pattern statistics over newest-first drawings."""
    total = len(drawings)
    recent_count = min(RECENT_WINDOW_MAX, int(total * RECENT_WINDOW_SHARE))

    numbers = _empty_frequencies(MAIN_NUMBER_RANGE)
    specials = _empty_frequencies(SPECIAL_NUMBER_RANGE)
    for index, drawing in enumerate(drawings):
        is_recent = index < recent_count
        for freq in [numbers[n] for n in drawing.numbers] + [specials[drawing.special_number]]:
            freq.total += 1
            if is_recent:
                freq.recent += 1
            if freq.last_seen is None:
                freq.last_seen = drawing.draw_date

    return HistoryStatistics(
        number_frequency=numbers,
        special_frequency=specials,
        hot_numbers=_ranked(numbers, HOT_COLD_MAIN, hottest=True),
        cold_numbers=_ranked(numbers, HOT_COLD_MAIN, hottest=False),
        hot_specials=_ranked(specials, HOT_COLD_SPECIAL, hottest=True),
        cold_specials=_ranked(specials, HOT_COLD_SPECIAL, hottest=False),
        patterns=_patterns(drawings),
        sum_ranges=_sum_ranges(drawings),
        total_drawings=total,
        recent_drawings=recent_count,
        latest_date=drawings[0].draw_date if drawings else None,
        earliest_date=drawings[-1].draw_date if drawings else None,
    )


@dataclass(frozen=True)
class HistorySuccess:
    drawings: Sequence[DrawResult]
    source_used: str
    limit: int
    success: bool = field(default=True, init=False)

    def statistics(self) -> HistoryStatistics:
        return compute_statistics(self.drawings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "drawings": [drawing.to_dict() for drawing in self.drawings],
            "statistics": self.statistics().to_dict(),
            "meta": {
                "totalDrawings": len(self.drawings),
                "limit": self.limit,
                "source": self.source_used,
            },
        }


@dataclass(frozen=True)
class HistoryFailure:
    attempts: Sequence[SourceAttempt]
    retry_after_seconds: int = 300
    success: bool = field(default=False, init=False)

    def error_lines(self) -> list[str]:
        return [attempt.describe() for attempt in self.attempts]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "errors": self.error_lines(),
            "retryAfter": self.retry_after_seconds,
        }


HistoryOutcome = Union[HistorySuccess, HistoryFailure]
