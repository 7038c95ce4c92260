from __future__ import annotations

import datetime as dt
import json
import logging
from typing import Any, Callable, List, Mapping, Optional

from .config import FetcherSettings, SourceSettings
from .datasource.base import (
    ExtractedRecord,
    Extractor,
    SourceError,
    SourceHttpError,
    SourceNoData,
    SourceParseError,
    Transport,
)
from .datasource.http_api import HttpTransport
from .datasource.ny_open_data import get_extractor
from .history import (
    MAX_HISTORY_LIMIT,
    HistoryFailure,
    HistoryOutcome,
    HistorySuccess,
    clamp_limit,
    collect_drawings,
)
from .schedule import POWERBALL_SCHEDULE, WeeklySchedule, next_drawing
from .types import FetchFailure, FetchOutcome, FetchSuccess, SourceAttempt

Clock = Callable[[], dt.datetime]


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class MultiSourceFetcher:
    """Query an ordered chain of upstream sources, first valid record wins.

    Expected upstream failures are recorded as ``SourceAttempt`` values and
    never raised. Anything else (a bad extractor name, a failing clock) is a
    defect and propagates, as does task cancellation.
    """

    def __init__(
        self,
        settings: FetcherSettings,
        transport: Optional[Transport] = None,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
        schedule: WeeklySchedule = POWERBALL_SCHEDULE,
    ) -> None:
        self._settings = settings
        self._transport = transport or HttpTransport()
        self._clock = clock or _utc_now
        self._logger = logger or logging.getLogger("lotteryintel.fetcher")
        self._schedule = schedule

    async def fetch_latest_draw(self) -> FetchOutcome:
        attempts: List[SourceAttempt] = []

        for source in self._settings.ordered_sources():
            extractor = get_extractor(source.extractor)
            self._logger.info("Trying %s (priority %s)", source.name, source.priority)
            try:
                records = await self._query(source, source.page_size, source.timeout_millis)
                extracted = self._extract_newest(records, extractor)
            except SourceError as exc:
                attempts.append(self._record_failure(source, exc))
                continue

            self._logger.info(
                "Success with %s (jackpot=%s, numbers=%s)",
                source.name,
                extracted.jackpot is not None,
                extracted.latest is not None,
            )
            return FetchSuccess(
                jackpot=extracted.jackpot,
                latest=extracted.latest,
                source_used=source.name,
                next_drawing=next_drawing(self._clock(), self._schedule),
            )

        self._logger.warning("All %d lottery data sources failed", len(attempts))
        return FetchFailure(
            attempts=tuple(attempts),
            retry_after_seconds=self._settings.retry_after_seconds,
        )

    async def fetch_history(self, limit: Optional[int] = None) -> HistoryOutcome:
        limit = clamp_limit(limit)
        page_size = min(limit * 2, MAX_HISTORY_LIMIT)
        minimum = self._settings.min_history_drawings
        attempts: List[SourceAttempt] = []

        for source in self._settings.ordered_sources():
            extractor = get_extractor(source.extractor)
            self._logger.info("Fetching %s drawings from %s", page_size, source.name)
            try:
                records = await self._query(
                    source, page_size, self._settings.history_timeout_millis
                )
                drawings = collect_drawings(records, extractor)
                if len(drawings) < minimum:
                    raise SourceNoData(
                        f"Insufficient valid data (got {len(drawings)} records, need >= {minimum})"
                    )
            except SourceError as exc:
                attempts.append(self._record_failure(source, exc))
                continue

            self._logger.info("%s returned %d valid drawings", source.name, len(drawings))
            drawings.sort(key=lambda drawing: drawing.draw_date, reverse=True)
            return HistorySuccess(
                drawings=tuple(drawings[:limit]),
                source_used=source.name,
                limit=limit,
            )

        self._logger.warning("No history source produced enough drawings")
        return HistoryFailure(
            attempts=tuple(attempts),
            retry_after_seconds=self._settings.retry_after_seconds,
        )

    async def _query(self, source: SourceSettings, limit: int, timeout_millis: int) -> List[Any]:
        response = await self._transport(
            source.url,
            source.query_params(limit),
            self._settings.request_headers(),
            timeout_millis,
        )
        if not response.ok:
            message = f"HTTP {response.status_code}"
            if response.reason:
                message = f"{message}: {response.reason}"
            raise SourceHttpError(message, status_code=response.status_code)

        try:
            payload = json.loads(response.text)
        except ValueError as exc:
            raise SourceParseError(f"Invalid JSON payload: {exc}") from exc
        if not isinstance(payload, list):
            raise SourceParseError("Expected a JSON array of records")
        return payload

    @staticmethod
    def _extract_newest(records: List[Any], extractor: Extractor) -> ExtractedRecord:
        if not records or not isinstance(records[0], Mapping):
            raise SourceNoData("No valid lottery data found in response")
        extracted = extractor(records[0])
        if extracted.empty:
            raise SourceNoData("No valid lottery data found in response")
        return extracted

    def _record_failure(self, source: SourceSettings, exc: SourceError) -> SourceAttempt:
        self._logger.warning("%s failed (%s): %s", source.name, exc.kind.value, exc)
        return SourceAttempt(
            source_name=source.name,
            succeeded=False,
            kind=exc.kind,
            error_message=str(exc),
            status_code=exc.status_code,
        )
