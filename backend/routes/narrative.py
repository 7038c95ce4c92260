from __future__ import annotations

from functools import lru_cache

from flask import Blueprint, current_app, jsonify, request

from ..config import load_settings
from ..schemas import NarrativeRequest
from ..services.narrative import LlmApiError, NarrativeClient

bp = Blueprint("narrative", __name__)


@lru_cache(maxsize=1)
def get_narrative_client() -> NarrativeClient:
    return NarrativeClient(load_settings().llm)


@bp.post("/claude")
def generate_narrative():
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        payload = {}
    if not payload.get("apiKey"):
        return jsonify(
            {"success": False, "error": "Missing API key", "message": "An LLM API key is required"}
        ), 400
    if payload.get("historicalData") is None:
        return jsonify(
            {
                "success": False,
                "error": "Missing data",
                "message": "Historical lottery data is required for analysis",
            }
        ), 400

    data = NarrativeRequest(**payload)
    client = get_narrative_client()

    try:
        if data.analysis_type == "test":
            info = client.test_connection(data.api_key)
            return jsonify({"success": True, "message": "LLM API connection successful", **info})
        result = client.generate_sets(data.api_key, data.historical_data, data.requested_sets)
    except LlmApiError as exc:
        current_app.logger.warning("LLM request failed (%s): %s", exc.status_code, exc)
        return jsonify(
            {
                "success": False,
                "error": "LLM API error",
                "message": str(exc),
                "status": exc.status_code,
            }
        ), exc.status_code

    return jsonify(result.dict(by_alias=True))
