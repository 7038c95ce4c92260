from __future__ import annotations

import json
import logging
import random
import re
from typing import Any, List, Mapping, Optional, Sequence

import requests
from pydantic import ValidationError

from ..config import LlmSettings
from ..schemas import MAIN_RANGE, SPECIAL_RANGE, NarrativeResponse, NarrativeSet

logger = logging.getLogger("lotteryintel.narrative")

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
PLACEHOLDER_ANALYSIS = "Locally generated selection; narrative analysis was unavailable."


class LlmApiError(RuntimeError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class NarrativeParseError(ValueError):
    pass


def quick_pick(rng: random.Random) -> tuple[List[int], int]:
    """Uniform random main numbers without repetition plus a special number."""
    low, high = MAIN_RANGE
    numbers = sorted(rng.sample(range(low, high + 1), 5))
    return numbers, rng.randint(*SPECIAL_RANGE)


def _drawings_of(historical_data: Any) -> Sequence[Any]:
    if isinstance(historical_data, Mapping):
        drawings = historical_data.get("drawings")
        return drawings if isinstance(drawings, list) else []
    if isinstance(historical_data, list):
        return historical_data
    return []


class NarrativeClient:
    """Forward a prompt to the LLM messages endpoint and read back number sets."""

    def __init__(self, settings: LlmSettings, rng: Optional[random.Random] = None) -> None:
        self._settings = settings
        self._rng = rng or random.Random()

    def test_connection(self, api_key: str) -> dict[str, Any]:
        data = self._post(api_key, "Hello! Please respond with \"API connection successful\"", 100)
        return {"model": data.get("model"), "usage": data.get("usage")}

    def generate_sets(self, api_key: str, historical_data: Any, requested_sets: int) -> NarrativeResponse:
        prompt = self.build_prompt(historical_data, requested_sets)
        data = self._post(api_key, prompt, self._settings.max_tokens)
        try:
            sets = self.parse_sets(data, requested_sets)
        except NarrativeParseError as exc:
            logger.warning("Falling back to local sets: %s", exc)
            return NarrativeResponse(sets=self.fallback_sets(requested_sets), fallback=True)
        return NarrativeResponse(sets=sets, model=data.get("model"))

    def build_prompt(self, historical_data: Any, requested_sets: int) -> str:
        drawings = _drawings_of(historical_data)
        recent = json.dumps(list(drawings[:10]), default=str)
        return (
            "As a lottery analysis assistant, review this Powerball history and provide "
            f"{requested_sets} number sets.\n\n"
            "Historical Data Summary:\n"
            f"- Total drawings: {len(drawings)}\n"
            f"- Recent draws: {recent}\n\n"
            "Please provide:\n"
            f"1. {requested_sets} number sets (5 numbers 1-69, 1 special number 1-26)\n"
            "2. A strategy name for each set\n"
            "3. A confidence level (60-95)\n"
            "4. A short analysis\n\n"
            "Respond with JSON only, in this structure:\n"
            '{"sets": [{"numbers": [1,2,3,4,5], "specialNumber": 1, '
            '"strategy": "Strategy name", "confidence": 85, "analysis": "Detailed analysis"}]}'
        )

    @staticmethod
    def parse_sets(data: Mapping[str, Any], requested_sets: int) -> List[NarrativeSet]:
        try:
            text = data["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise NarrativeParseError("response has no text content") from exc
        if not isinstance(text, str):
            raise NarrativeParseError("response text is not a string")

        match = _JSON_OBJECT.search(text)
        if match is None:
            raise NarrativeParseError("no JSON object in response text")
        try:
            parsed = json.loads(match.group(0))
        except ValueError as exc:
            raise NarrativeParseError(f"invalid JSON in response text: {exc}") from exc

        raw_sets = parsed.get("sets") if isinstance(parsed, dict) else None
        if not isinstance(raw_sets, list) or not raw_sets:
            raise NarrativeParseError("response JSON has no sets")

        sets = []
        for raw in raw_sets[:requested_sets]:
            if not isinstance(raw, dict):
                raise NarrativeParseError("set entry is not an object")
            if "specialNumber" not in raw and "powerball" in raw:
                raw = {**raw, "specialNumber": raw["powerball"]}
            try:
                sets.append(NarrativeSet(**raw))
            except ValidationError as exc:
                raise NarrativeParseError(f"invalid set: {exc}") from exc
        return sets

    def fallback_sets(self, requested_sets: int) -> List[NarrativeSet]:
        sets = []
        for index in range(requested_sets):
            numbers, special = quick_pick(self._rng)
            sets.append(
                NarrativeSet(
                    numbers=numbers,
                    specialNumber=special,
                    strategy=f"Local Analysis {index + 1}",
                    confidence=75 + self._rng.randint(0, 19),
                    analysis=PLACEHOLDER_ANALYSIS,
                )
            )
        return sets

    def _post(self, api_key: str, prompt: str, max_tokens: int) -> dict[str, Any]:
        settings = self._settings
        try:
            resp = requests.post(
                settings.api_url,
                headers={
                    "Content-Type": "application/json",
                    "x-api-key": api_key,
                    "anthropic-version": settings.api_version,
                },
                json={
                    "model": settings.model,
                    "max_tokens": max_tokens,
                    "temperature": settings.temperature,
                    "messages": [{"role": "user", "content": prompt}],
                },
                timeout=settings.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise LlmApiError(502, f"LLM request failed: {exc}") from exc

        if not resp.ok:
            try:
                message = resp.json().get("error", {}).get("message")
            except (ValueError, AttributeError):
                message = None
            raise LlmApiError(resp.status_code, message or f"LLM API returned {resp.status_code}")

        try:
            data = resp.json()
        except ValueError:
            data = {}
        return data if isinstance(data, dict) else {}
