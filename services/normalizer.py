# services/normalizer.py
"""
Turns raw model output into typed results.

Everything here is a pure function: the same raw text always produces the same
result or the same error.
"""
import json
import re
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from schemas.analysis import AnalysisResult, ReliabilityRating, SuggestedSource
from schemas.quiz import QuizQuestion
from services.errors import InvalidQuizDataError, MalformedPayloadError

MISSING_EXPLANATION = "No explanation was provided."
MAX_SUGGESTED_SOURCES = 2

_FENCE_RE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


class _SourcePayload(BaseModel):
    title: Optional[str] = None
    url: Optional[str] = None


class _AnalysisPayload(BaseModel):
    """Shape we ask the model to answer in. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    reliability: ReliabilityRating = ReliabilityRating.UNKNOWN
    explanation: Optional[str] = None
    keywords_for_fact_check: Optional[List[str]] = None
    suggested_sources: Optional[List[_SourcePayload]] = None

    @field_validator("reliability", mode="before")
    @classmethod
    def unknown_if_unrecognised(cls, v):
        if isinstance(v, str):
            try:
                return ReliabilityRating(v)
            except ValueError:
                pass
        return ReliabilityRating.UNKNOWN


def strip_fence(raw: str) -> str:
    """Return the body of a ```lang ... ``` block, or the trimmed text unchanged."""
    text = raw.strip()
    match = _FENCE_RE.match(text)
    if match and match.group(2):
        return match.group(2).strip()
    return text


def parse_payload(raw: str) -> Any:
    try:
        return json.loads(strip_fence(raw))
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(f"Response is not valid JSON: {e}", raw=raw) from e


def normalize_analysis(raw: str) -> AnalysisResult:
    data = parse_payload(raw)
    if not isinstance(data, dict):
        raise MalformedPayloadError("Expected a JSON object for the analysis", raw=raw)

    try:
        payload = _AnalysisPayload.model_validate(data)
    except ValidationError as e:
        raise MalformedPayloadError(
            f"Analysis does not match the expected schema: {e.error_count()} error(s)",
            raw=raw,
        ) from e

    sources = [
        SuggestedSource(title=s.title or None, url=s.url)
        for s in payload.suggested_sources or []
        if s.url
    ]

    return AnalysisResult(
        rating=payload.reliability,
        explanation=payload.explanation or MISSING_EXPLANATION,
        factCheckKeywords=tuple(payload.keywords_for_fact_check or ()),
        suggestedSources=tuple(sources[:MAX_SUGGESTED_SOURCES]),
        rawResponse=raw,
    )


def normalize_quiz_batch(raw: str) -> List[QuizQuestion]:
    data = parse_payload(raw)
    if not isinstance(data, list) or not data:
        raise InvalidQuizDataError("The quiz data is empty or not in the expected format.")

    questions = []
    for i, item in enumerate(data):
        try:
            questions.append(QuizQuestion.model_validate(item))
        except ValidationError as e:
            raise InvalidQuizDataError(
                f"Quiz question {i + 1} is not in the expected format."
            ) from e
    return questions
