from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, validator

MAIN_RANGE = (1, 69)
SPECIAL_RANGE = (1, 26)


class NarrativeRequest(BaseModel):
    api_key: str = Field(..., alias="apiKey", description="Caller-supplied LLM API key.")
    analysis_type: Optional[str] = Field(None, alias="analysisType")
    historical_data: Any = Field(..., alias="historicalData")
    requested_sets: int = Field(3, alias="requestedSets", ge=1, le=10)

    @validator("api_key")
    def validate_api_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("API key must be a non-empty string.")
        return value.strip()


class NarrativeSet(BaseModel):
    numbers: List[int]
    special_number: int = Field(..., alias="specialNumber")
    strategy: str
    confidence: int = Field(..., ge=0, le=100)
    analysis: str

    @validator("numbers")
    def validate_numbers(cls, value: List[int]) -> List[int]:
        if len(value) != 5:
            raise ValueError("A set requires exactly 5 numbers.")
        if len(set(value)) != 5:
            raise ValueError("Numbers must be unique.")
        low, high = MAIN_RANGE
        for n in value:
            if not low <= n <= high:
                raise ValueError("Numbers must be between 1 and 69.")
        return sorted(value)

    @validator("special_number")
    def validate_special_number(cls, value: int) -> int:
        low, high = SPECIAL_RANGE
        if not low <= value <= high:
            raise ValueError("Special number must be between 1 and 26.")
        return value


class NarrativeResponse(BaseModel):
    success: bool = True
    sets: List[NarrativeSet]
    fallback: bool = False
    model: Optional[str] = None
