from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Dict, Optional, Tuple


class ReliabilityRating(str, Enum):
    HIGHLY_SUSPICIOUS = "HIGHLY_SUSPICIOUS"
    POTENTIALLY_MISLEADING = "POTENTIALLY_MISLEADING"
    NEEDS_VERIFICATION = "NEEDS_VERIFICATION"
    LIKELY_ACCURATE = "LIKELY_ACCURATE"
    UNKNOWN = "UNKNOWN"


RELIABILITY_LABELS: Dict[ReliabilityRating, str] = {
    ReliabilityRating.HIGHLY_SUSPICIOUS: "Highly suspicious",
    ReliabilityRating.POTENTIALLY_MISLEADING: "Potentially misleading",
    ReliabilityRating.NEEDS_VERIFICATION: "Needs verification",
    ReliabilityRating.LIKELY_ACCURATE: "Likely accurate",
    ReliabilityRating.UNKNOWN: "Cannot determine",
}


class SuggestedSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    url: str


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    rating: ReliabilityRating
    explanation: str
    factCheckKeywords: Tuple[str, ...] = ()
    suggestedSources: Tuple[SuggestedSource, ...] = ()
    rawResponse: Optional[str] = None  # debugging only


class AnalysisStatus(str, Enum):
    IDLE = "IDLE"
    REQUESTING = "REQUESTING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class AnalysisState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: AnalysisStatus = AnalysisStatus.IDLE
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None


class TextAnalysisRequest(BaseModel):
    text: str


class RatingLabel(BaseModel):
    rating: ReliabilityRating
    label: str
