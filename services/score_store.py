# services/score_store.py
"""
Resilience score: a persisted 0-100 gamification metric driven by quiz answers.

The store is created once by the app lifespan and handed to the flows that
need it. Every change is written through to storage straight away, so
teardown only has to drop subscribers.
"""
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

SCORE_STORAGE_KEY = "resilienceScore"
INITIAL_RESILIENCE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100
QUIZ_CORRECT_ANSWER_POINTS = 10
QUIZ_INCORRECT_ANSWER_PENALTY = 5

ScoreListener = Callable[[int], None]


class FileKeyValueStorage:
    """Durable keyed storage: one file per key, holding the plain string value."""

    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> Optional[str]:
        path = self.directory / key
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        # The key file is swapped in whole, never truncated in place
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, self.directory / key)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


def _clamp(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


class ResilienceScoreStore:
    def __init__(self, storage: FileKeyValueStorage, key: str = SCORE_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._score: Optional[int] = None
        self._listeners: List[ScoreListener] = []

    def load(self) -> int:
        """Read the persisted score, falling back to the initial score."""
        saved = self.storage.get(self.key)
        score = INITIAL_RESILIENCE_SCORE
        if saved is not None:
            try:
                score = _clamp(int(saved.strip()))
            except ValueError:
                logger.warning(f"Ignoring unparsable stored score {saved!r}")
        self._score = score
        logger.info(f"Resilience score loaded: {score}")
        return score

    def close(self) -> None:
        self._listeners.clear()

    def get_score(self) -> int:
        if self._score is None:
            return self.load()
        return self._score

    def update_score(self, delta: int) -> int:
        score = _clamp(self.get_score() + delta)
        self._score = score
        self.storage.set(self.key, str(score))
        for listener in list(self._listeners):
            listener(score)
        return score

    def record_quiz_answer(self, is_correct: bool) -> int:
        if is_correct:
            return self.update_score(QUIZ_CORRECT_ANSWER_POINTS)
        return self.update_score(-QUIZ_INCORRECT_ANSWER_PENALTY)

    def subscribe(self, listener: ScoreListener) -> Callable[[], None]:
        """Register a listener called with the new score after every change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def describe_score(score: int) -> str:
    if score >= 85:
        return "Excellent! You are very good at seeing through misleading information."
    if score >= 70:
        return "Going well! Your information literacy is at a high level."
    if score >= 50:
        return "Not bad. Keep learning to sharpen your judgement."
    if score >= 25:
        return "There is still room to improve. Practise with the quiz!"
    return "Take the quiz regularly to build up your information literacy."
