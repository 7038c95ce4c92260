from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from fetcher.config import FetcherSettings, env_int, load_environment, load_from_environment


@dataclass(frozen=True)
class FlaskSettings:
    secret_key: str = "lotteryintel-dev-secret"
    debug: bool = False


@dataclass(frozen=True)
class LlmSettings:
    api_url: str = "https://api.anthropic.com/v1/messages"
    model: str = "claude-3-sonnet-20240229"
    api_version: str = "2023-06-01"
    max_tokens: int = 2000
    temperature: float = 0.3
    timeout_seconds: int = 60


@dataclass(frozen=True)
class AppSettings:
    flask: FlaskSettings
    fetcher: FetcherSettings
    llm: LlmSettings
    cache_max_age: int = 900
    history_cache_max_age: int = 21600


@lru_cache(maxsize=1)
def load_settings(dotenv_path: Optional[str] = None) -> AppSettings:
    load_environment(dotenv_path)

    flask_settings = FlaskSettings(
        secret_key=os.getenv("FLASK_SECRET_KEY", "lotteryintel-dev-secret"),
        debug=os.getenv("FLASK_DEBUG", "0") == "1",
    )

    defaults = LlmSettings()
    llm_settings = LlmSettings(
        api_url=os.getenv("LLM__API_URL", defaults.api_url),
        model=os.getenv("LLM__MODEL", defaults.model),
        api_version=os.getenv("LLM__API_VERSION", defaults.api_version),
        max_tokens=env_int("LLM__MAX_TOKENS", defaults.max_tokens),
        timeout_seconds=env_int("LLM__TIMEOUT_SECONDS", defaults.timeout_seconds),
    )

    return AppSettings(
        flask=flask_settings,
        fetcher=load_from_environment(),
        llm=llm_settings,
        cache_max_age=env_int("CACHE_MAX_AGE_SECONDS", 900),
        history_cache_max_age=env_int("HISTORY_CACHE_MAX_AGE_SECONDS", 21600),
    )
