# services/analysis_flow.py
import logging
from typing import Callable, Optional

from fastapi.concurrency import run_in_threadpool

from config import settings
from schemas.analysis import AnalysisResult, AnalysisState, AnalysisStatus, ReliabilityRating
from services.errors import InputValidationError, ServiceUnavailableError
from services.normalizer import normalize_analysis

logger = logging.getLogger(__name__)

EMPTY_TEXT_MESSAGE = "Please enter text to analyze."
SERVICE_UNAVAILABLE_MESSAGE = (
    "The analysis could not be run because the AI client is not initialised. "
    "Please check the API key configuration."
)
RETRY_MESSAGE = "An error occurred during analysis. Please try again later."

AnalysisRequester = Callable[[str], str]


def validate_input(text: str, max_length: Optional[int] = None) -> None:
    if max_length is None:
        max_length = settings.MAX_TEXT_LENGTH
    # Length first: over-long input is a length error even if it is all whitespace
    if len(text) > max_length:
        raise InputValidationError(
            f"Text is too long. The maximum is {max_length} characters."
        )
    if not text.strip():
        raise InputValidationError(EMPTY_TEXT_MESSAGE)


class AnalysisFlow:
    """
    One analysis at a time for one session.

    Each call to analyze() starts a new request generation; a response that
    arrives after a newer request was started is dropped instead of
    overwriting the newer state.
    """

    def __init__(self, requester: AnalysisRequester, max_length: Optional[int] = None):
        self.requester = requester
        self.max_length = max_length
        self._generation = 0
        self._state = AnalysisState()

    @property
    def state(self) -> AnalysisState:
        return self._state

    def reset(self) -> None:
        self._generation += 1
        self._state = AnalysisState()

    async def analyze(self, text: str) -> AnalysisState:
        try:
            validate_input(text, self.max_length)
        except InputValidationError as e:
            self._state = AnalysisState(status=self._state.status, result=self._state.result, error=str(e))
            raise

        self._generation += 1
        generation = self._generation
        self._state = AnalysisState(status=AnalysisStatus.REQUESTING)

        try:
            raw = await run_in_threadpool(self.requester, text)
            result = normalize_analysis(raw)
            state = AnalysisState(status=AnalysisStatus.SUCCEEDED, result=result)
        except ServiceUnavailableError:
            logger.warning("Analysis requested but the AI client is not initialised")
            state = AnalysisState(
                status=AnalysisStatus.FAILED,
                result=AnalysisResult(
                    rating=ReliabilityRating.UNKNOWN,
                    explanation=SERVICE_UNAVAILABLE_MESSAGE,
                ),
                error=SERVICE_UNAVAILABLE_MESSAGE,
            )
        except Exception as e:
            logger.error(f"Text analysis failed: {e}")
            state = AnalysisState(
                status=AnalysisStatus.FAILED,
                result=AnalysisResult(rating=ReliabilityRating.UNKNOWN, explanation=RETRY_MESSAGE),
                error=f"{RETRY_MESSAGE} Details: {e}",
            )

        if generation != self._generation:
            logger.info(f"Discarding stale analysis response (request {generation}, current {self._generation})")
            return self._state

        self._state = state
        return state
