# services/sessions.py
import logging
from collections import OrderedDict
from typing import Callable, Optional, TypeVar

from services.analysis_flow import AnalysisFlow, AnalysisRequester
from services.normalizer import normalize_quiz_batch
from services.quiz_flow import QuizFlow, QuizRequester
from services.score_store import ResilienceScoreStore

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "default"
DEFAULT_MAX_SESSIONS = 1000

Flow = TypeVar("Flow")


class SessionRegistry:
    """
    Private flow state per browser session.

    The score store is the only thing shared between sessions. At most
    max_sessions flows of each kind are kept; the least recently used
    session is evicted first.
    """

    def __init__(
        self,
        score_store: ResilienceScoreStore,
        analysis_requester: AnalysisRequester,
        quiz_requester: QuizRequester,
        max_text_length: Optional[int] = None,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ):
        self.score_store = score_store
        self.analysis_requester = analysis_requester
        self.quiz_requester = quiz_requester
        self.max_text_length = max_text_length
        self.max_sessions = max_sessions
        self._analysis: "OrderedDict[str, AnalysisFlow]" = OrderedDict()
        self._quiz: "OrderedDict[str, QuizFlow]" = OrderedDict()

    def _get_or_create(self, flows: "OrderedDict[str, Flow]", session_id: str, factory: Callable[[], Flow]) -> Flow:
        flow = flows.get(session_id)
        if flow is not None:
            flows.move_to_end(session_id)
            return flow

        flow = factory()
        flows[session_id] = flow
        while len(flows) > self.max_sessions:
            evicted, _ = flows.popitem(last=False)
            logger.debug(f"Evicted flow for session {evicted}")
        return flow

    def analysis_flow(self, session_id: str = DEFAULT_SESSION_ID) -> AnalysisFlow:
        return self._get_or_create(
            self._analysis,
            session_id,
            lambda: AnalysisFlow(self.analysis_requester, max_length=self.max_text_length),
        )

    def quiz_flow(self, session_id: str = DEFAULT_SESSION_ID) -> QuizFlow:
        return self._get_or_create(
            self._quiz,
            session_id,
            lambda: QuizFlow(self.quiz_requester, normalize_quiz_batch, self.score_store),
        )

    @property
    def session_count(self) -> int:
        return len(set(self._analysis) | set(self._quiz))

    def clear(self) -> None:
        self._analysis.clear()
        self._quiz.clear()
