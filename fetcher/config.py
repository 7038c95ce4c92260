from __future__ import annotations

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import find_dotenv, load_dotenv


def env_int(key: str, default: int) -> int:
    raw = os.getenv(key, "").strip()
    return int(raw) if raw else default


def load_environment(dotenv_path: Optional[str] = None) -> None:
    """Merge a dotenv file into ``os.environ`` without overriding set values.

    Without an explicit path, the nearest ``.env`` above the working
    directory is used, if there is one.
    """
    path = dotenv_path or find_dotenv(usecwd=True)
    if path:
        load_dotenv(path)


@dataclass(frozen=True)
class SourceSettings:
    """One upstream Socrata (SODA) endpoint.

    ``extractor`` names the function in ``fetcher.datasource.EXTRACTORS``
    that understands this source's record layout.
    """

    name: str
    url: str
    order_field: str
    extractor: str
    timeout_millis: int = 15000
    priority: int = 1
    page_size: int = 3

    def query_params(self, limit: Optional[int] = None) -> dict[str, str]:
        return {
            "$order": f"{self.order_field} DESC",
            "$limit": str(limit if limit is not None else self.page_size),
        }


DEFAULT_SOURCES: Tuple[SourceSettings, ...] = (
    SourceSettings(
        name="NY State Open Data API",
        url="https://data.ny.gov/resource/d6yy-54nr.json",
        order_field="draw_date",
        extractor="winning_numbers",
        priority=1,
    ),
    SourceSettings(
        name="NY State Historical API",
        url="https://data.ny.gov/resource/dhwa-m6y4.json",
        order_field="date",
        extractor="white_balls",
        priority=2,
    ),
)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; LotteryAnalyzer/2.0)"


@dataclass(frozen=True)
class FetcherSettings:
    sources: Tuple[SourceSettings, ...] = DEFAULT_SOURCES
    user_agent: str = DEFAULT_USER_AGENT
    retry_after_seconds: int = 300
    history_timeout_millis: int = 30000
    min_history_drawings: int = 10

    def ordered_sources(self) -> Tuple[SourceSettings, ...]:
        # sorted() is stable, so equal priorities keep their configured order.
        return tuple(sorted(self.sources, key=lambda source: source.priority))

    def request_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
            "Accept-Language": "en-US,en;q=0.9",
        }


def load_from_environment() -> FetcherSettings:
    sources = DEFAULT_SOURCES
    if os.getenv("FETCHER__TIMEOUT_MILLIS", "").strip():
        timeout = env_int("FETCHER__TIMEOUT_MILLIS", 0)
        if timeout <= 0:
            raise ValueError("FETCHER__TIMEOUT_MILLIS must be positive")
        sources = tuple(replace(source, timeout_millis=timeout) for source in sources)

    return FetcherSettings(
        sources=sources,
        user_agent=os.getenv("FETCHER__USER_AGENT", DEFAULT_USER_AGENT),
        retry_after_seconds=env_int("FETCHER__RETRY_AFTER_SECONDS", 300),
        history_timeout_millis=env_int("FETCHER__HISTORY_TIMEOUT_MILLIS", 30000),
        min_history_drawings=env_int("FETCHER__MIN_HISTORY_DRAWINGS", 10),
    )


@lru_cache(maxsize=1)
def load_config(dotenv_path: Optional[str] = None) -> FetcherSettings:
    load_environment(dotenv_path)
    return load_from_environment()
