from .config import FetcherSettings, SourceSettings
from .pipeline import MultiSourceFetcher
from .types import (
    DrawResult,
    DrawingSchedule,
    FailureKind,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    JackpotInfo,
    SourceAttempt,
)

__all__ = [
    "DrawResult",
    "DrawingSchedule",
    "FailureKind",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "FetcherSettings",
    "JackpotInfo",
    "MultiSourceFetcher",
    "SourceAttempt",
    "SourceSettings",
]
