from __future__ import annotations

import asyncio
import datetime as dt
import logging
from functools import lru_cache

from flask import Blueprint, current_app, jsonify, request

from fetcher.pipeline import MultiSourceFetcher

from ..config import load_settings

bp = Blueprint("lottery", __name__)


@lru_cache(maxsize=1)
def get_fetcher() -> MultiSourceFetcher:
    settings = load_settings()
    return MultiSourceFetcher(settings.fetcher, logger=logging.getLogger("lotteryintel.fetcher"))


def _timestamp() -> str:
    now = dt.datetime.now(dt.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _unavailable(outcome, message: str, details: str):
    response = jsonify(
        {
            "success": False,
            "error": "Lottery data unavailable",
            "message": message,
            "details": details,
            "errors": outcome.error_lines(),
            "timestamp": _timestamp(),
            "retryAfter": outcome.retry_after_seconds,
        }
    )
    response.status_code = 503
    response.headers["Retry-After"] = str(outcome.retry_after_seconds)
    return response


def _cached(response, max_age: int):
    response.headers["Cache-Control"] = f"s-maxage={max_age}, max-age={max_age}"
    return response


@bp.get("/powerball")
def latest_draw():
    outcome = asyncio.run(get_fetcher().fetch_latest_draw())
    if not outcome.success:
        current_app.logger.warning("All lottery sources failed: %s", outcome.error_lines())
        return _unavailable(
            outcome,
            "Unable to retrieve current lottery data from any official sources. "
            "Please try again later.",
            "All external lottery APIs are currently unavailable or experiencing issues.",
        )

    body = outcome.to_dict()
    body["timestamp"] = _timestamp()
    body["message"] = "Current lottery data retrieved successfully from official sources"
    return _cached(jsonify(body), load_settings().cache_max_age)


@bp.get("/powerball-history")
def draw_history():
    limit = request.args.get("limit", type=int)
    outcome = asyncio.run(get_fetcher().fetch_history(limit))
    if not outcome.success:
        current_app.logger.warning("No history source succeeded: %s", outcome.error_lines())
        return _unavailable(
            outcome,
            "Historical Powerball data is temporarily unavailable.",
            "Unable to retrieve enough valid drawings from any historical source.",
        )

    body = outcome.to_dict()
    body["meta"]["requestedLimit"] = limit
    body["timestamp"] = _timestamp()
    return _cached(jsonify(body), load_settings().history_cache_max_age)
