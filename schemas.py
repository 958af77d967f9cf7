from pydantic import BaseModel, ConfigDict, field_validator
from typing import List, Optional, Union

MAX_IMPROVEMENTS = 2
MAX_METRICS = 5

FALLBACK_REASONING = "Could not analyze."


def _as_string_list(value, limit: int) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError("expected a list of strings")
    items = [v if isinstance(v, str) else str(v) for v in value if v is not None]
    return items[:limit]


# Fit evaluation returned by the model for one resume
class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: Union[int, float] = 0
    reasoning: str = ""
    improvements: List[str] = []
    metrics: List[str] = []

    @field_validator("score", mode="before")
    @classmethod
    def _default_score(cls, value):
        return 0 if value is None else value

    @field_validator("reasoning", mode="before")
    @classmethod
    def _default_reasoning(cls, value):
        return "" if value is None else value

    @field_validator("improvements", mode="before")
    @classmethod
    def _limit_improvements(cls, value):
        return _as_string_list(value, MAX_IMPROVEMENTS)

    @field_validator("metrics", mode="before")
    @classmethod
    def _limit_metrics(cls, value):
        return _as_string_list(value, MAX_METRICS)

    @classmethod
    def fallback(cls) -> "AnalysisResult":
        """Result used when the model could not be reached or understood."""
        return cls(score=0, reasoning=FALLBACK_REASONING, improvements=[], metrics=[])


# Ranked entry in the /analyze response
class CandidateRecord(AnalysisResult):
    name: str

    @classmethod
    def from_analysis(cls, name: str, analysis: AnalysisResult) -> "CandidateRecord":
        return cls(name=name, **analysis.model_dump())


# Body of 4xx / 5xx responses
class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    stack: Optional[str] = None
