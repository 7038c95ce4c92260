"""Record extractors for the New York State Open Data Powerball sets.

Every helper returns ``None`` for anything it cannot validate; nothing here
raises on malformed upstream fields.
"""

from __future__ import annotations

import datetime as dt
import math
import re
from typing import Any, Dict, Mapping, Optional, Sequence

from ..types import DrawResult, JackpotInfo
from .base import ExtractedRecord, Extractor

MAIN_NUMBER_RANGE = (1, 69)
SPECIAL_NUMBER_RANGE = (1, 26)
MAIN_NUMBER_COUNT = 5
JACKPOT_MIN = 20_000_000
JACKPOT_MAX = 5_000_000_000
CASH_VALUE_RATIO = 0.6

_CURRENCY_CHARS = re.compile(r"[$,]")
_LIST_SEPARATORS = re.compile(r"[,\s]+")


def parse_currency(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        cleaned = _CURRENCY_CHARS.sub("", str(value)).strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def extract_jackpot(record: Mapping[str, Any]) -> Optional[JackpotInfo]:
    amount = parse_currency(record.get("jackpot"))
    if amount is None or not JACKPOT_MIN <= amount <= JACKPOT_MAX:
        return None

    cash = parse_currency(record.get("cash_value"))
    if cash is None or cash < 0:
        cash_value = _round_half_up(amount * CASH_VALUE_RATIO)
    else:
        cash_value = _round_half_up(cash)
    return JackpotInfo(amount=_round_half_up(amount), cash_value=cash_value)


def _parse_int_token(token: Any) -> Optional[int]:
    if isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token
    try:
        return int(str(token).strip())
    except ValueError:
        return None


def parse_draw_numbers(tokens: Sequence[Any]) -> Optional[tuple[tuple[int, ...], int]]:
    """Validate ``[n1..n5, special, ...]`` and return sorted mains plus special."""
    if len(tokens) < MAIN_NUMBER_COUNT + 1:
        return None

    numbers = [_parse_int_token(token) for token in tokens[:MAIN_NUMBER_COUNT]]
    special = _parse_int_token(tokens[MAIN_NUMBER_COUNT])

    low, high = MAIN_NUMBER_RANGE
    if any(n is None or not low <= n <= high for n in numbers):
        return None
    if len(set(numbers)) != MAIN_NUMBER_COUNT:
        return None
    low, high = SPECIAL_NUMBER_RANGE
    if special is None or not low <= special <= high:
        return None
    return tuple(sorted(numbers)), special


def parse_draw_date(value: Any) -> Optional[dt.date]:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return dt.date.fromisoformat(value.strip().split("T")[0])
    except ValueError:
        return None


def parse_multiplier(value: Any) -> Optional[int]:
    if value is None:
        return None
    parsed = _parse_int_token(value)
    if parsed is None or parsed <= 0:
        return None
    return parsed


def _build_draw(tokens: Sequence[Any], raw_date: Any, raw_multiplier: Any) -> Optional[DrawResult]:
    draw_date = parse_draw_date(raw_date)
    if draw_date is None:
        return None
    parsed = parse_draw_numbers(tokens)
    if parsed is None:
        return None
    numbers, special = parsed
    return DrawResult(
        numbers=numbers,
        special_number=special,
        draw_date=draw_date,
        multiplier=parse_multiplier(raw_multiplier),
    )


def extract_winning_numbers_draw(record: Mapping[str, Any]) -> Optional[DrawResult]:
    raw = record.get("winning_numbers")
    if not isinstance(raw, str):
        return None
    return _build_draw(raw.split(), record.get("draw_date"), record.get("multiplier"))


def extract_white_balls_draw(record: Mapping[str, Any]) -> Optional[DrawResult]:
    raw = record.get("white_balls")
    special = record.get("powerball")
    if raw is None or special is None:
        return None
    if isinstance(raw, (list, tuple)):
        whites = list(raw)
    elif isinstance(raw, str):
        whites = [token for token in _LIST_SEPARATORS.split(raw.strip()) if token]
    else:
        return None
    if len(whites) != MAIN_NUMBER_COUNT:
        return None
    return _build_draw(whites + [special], record.get("date"), record.get("multiplier"))


def extract_winning_numbers(record: Mapping[str, Any]) -> ExtractedRecord:
    return ExtractedRecord(
        jackpot=extract_jackpot(record),
        latest=extract_winning_numbers_draw(record),
    )


def extract_white_balls(record: Mapping[str, Any]) -> ExtractedRecord:
    return ExtractedRecord(
        jackpot=extract_jackpot(record),
        latest=extract_white_balls_draw(record),
    )


EXTRACTORS: Dict[str, Extractor] = {
    "winning_numbers": extract_winning_numbers,
    "white_balls": extract_white_balls,
}


def get_extractor(name: str) -> Extractor:
    try:
        return EXTRACTORS[name]
    except KeyError as exc:
        raise ValueError(f"Unknown extractor: {name}") from exc
