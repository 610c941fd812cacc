# services/quiz_flow.py
import logging
from typing import Callable, List, Optional

from fastapi.concurrency import run_in_threadpool

from schemas.quiz import (
    QuizFeedback,
    QuizQuestion,
    QuizQuestionView,
    QuizStatus,
    QuizView,
)
from services.errors import InvalidQuizDataError, MalformedPayloadError, ServiceUnavailableError
from services.score_store import ResilienceScoreStore

logger = logging.getLogger(__name__)

QUIZ_SERVICE_UNAVAILABLE_MESSAGE = (
    "The quiz could not be generated because the AI client is not initialised. "
    "Please check the API key configuration."
)
QUIZ_LOAD_FAILED_MESSAGE = "Failed to load the quiz."
QUIZ_MALFORMED_MESSAGE = "The received quiz data is not in the correct format."
QUIZ_COMPLETE_NOTICE = "Quiz complete! Well done."

QuizRequester = Callable[[], str]
QuizNormalizer = Callable[[str], List[QuizQuestion]]

_SELECTABLE = (QuizStatus.READY, QuizStatus.ANSWERING)


class QuizFlow:
    """
    Walks one session through a batch of quiz questions.

    Submitting an answer records it on the score store exactly once; finishing
    the batch fetches a new one and starts again from the first question.
    """

    def __init__(
        self,
        requester: QuizRequester,
        normalizer: QuizNormalizer,
        score_store: ResilienceScoreStore,
    ):
        self.requester = requester
        self.normalizer = normalizer
        self.score_store = score_store

        self.status = QuizStatus.IDLE
        self.questions: List[QuizQuestion] = []
        self.index = 0
        self.selected: Optional[str] = None
        self.last_answer_correct: Optional[bool] = None
        self.error: Optional[str] = None
        self.notice: Optional[str] = None
        self._generation = 0

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if not self.questions:
            return None
        return self.questions[self.index]

    async def load(self) -> QuizView:
        self._generation += 1
        generation = self._generation
        self.status = QuizStatus.LOADING
        self.error = None
        self.notice = None

        try:
            raw = await run_in_threadpool(self.requester)
            questions = self.normalizer(raw)
            error = None
        except ServiceUnavailableError:
            logger.warning("Quiz requested but the AI client is not initialised")
            questions, error = [], QUIZ_SERVICE_UNAVAILABLE_MESSAGE
        except MalformedPayloadError as e:
            logger.error(f"Quiz JSON parse error: {e} Raw data: {e.raw}")
            questions, error = [], QUIZ_MALFORMED_MESSAGE
        except InvalidQuizDataError as e:
            logger.error(f"Quiz data rejected: {e}")
            questions, error = [], str(e)
        except Exception as e:
            logger.error(f"Quiz generation failed: {e}")
            questions, error = [], f"{QUIZ_LOAD_FAILED_MESSAGE} Details: {e}"

        if generation != self._generation:
            logger.info(f"Discarding stale quiz batch (request {generation}, current {self._generation})")
            return self.view()

        self.index = 0
        self.selected = None
        self.last_answer_correct = None
        if error is not None:
            self.questions = []
            self.status = QuizStatus.ERROR
            self.error = error
        else:
            self.questions = questions
            self.status = QuizStatus.READY
            logger.info(f"Loaded quiz batch of {len(questions)} questions")
        return self.view()

    def select(self, option_text: str) -> QuizView:
        if self.status in _SELECTABLE:
            self.selected = option_text
            self.status = QuizStatus.ANSWERING
            self.notice = None
        return self.view()

    def submit(self) -> Optional[bool]:
        """Score the selected option. Returns its correctness, or None if nothing was scored."""
        if self.status != QuizStatus.ANSWERING or self.selected is None:
            return None

        chosen = next(
            (opt for opt in self.current_question.options if opt.text == self.selected),
            None,
        )
        self.status = QuizStatus.FEEDBACK
        if chosen is None:
            logger.warning(f"Selected option {self.selected!r} is not among the question's options")
            self.last_answer_correct = None
            return None

        self.last_answer_correct = chosen.isCorrect
        self.score_store.record_quiz_answer(chosen.isCorrect)
        return chosen.isCorrect

    async def next(self) -> QuizView:
        if self.status != QuizStatus.FEEDBACK:
            return self.view()

        self.selected = None
        self.last_answer_correct = None
        if self.index < len(self.questions) - 1:
            self.index += 1
            self.status = QuizStatus.READY
            return self.view()

        self.status = QuizStatus.COMPLETED
        logger.info("Quiz batch completed, fetching a new one")
        view = await self.load()
        if self.status == QuizStatus.READY:
            self.notice = QUIZ_COMPLETE_NOTICE
            view = self.view()
        return view

    def view(self) -> QuizView:
        question = self.current_question
        question_view = None
        feedback = None
        if question is not None and self.status not in (QuizStatus.LOADING, QuizStatus.ERROR):
            question_view = QuizQuestionView(
                id=question.id,
                questionText=question.questionText,
                options=[opt.text for opt in question.options],
            )
            if self.status == QuizStatus.FEEDBACK:
                feedback = QuizFeedback(
                    isCorrect=self.last_answer_correct,
                    correctOptions=[opt.text for opt in question.options if opt.isCorrect],
                    explanation=question.explanation,
                )

        return QuizView(
            status=self.status,
            questionIndex=self.index,
            totalQuestions=len(self.questions),
            question=question_view,
            selectedOption=self.selected,
            feedback=feedback,
            error=self.error,
            notice=self.notice,
        )
