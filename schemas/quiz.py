from enum import Enum
from pydantic import BaseModel, ConfigDict, field_validator
from typing import List, Optional


class QuizOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    isCorrect: bool


class QuizQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    questionText: str
    # Three options with exactly one correct is what we ask for; not checked here
    options: List[QuizOption]
    explanation: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def id_to_str(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class QuizStatus(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    READY = "READY"
    ANSWERING = "ANSWERING"
    FEEDBACK = "FEEDBACK"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


class QuizQuestionView(BaseModel):
    id: str
    questionText: str
    options: List[str]


class QuizFeedback(BaseModel):
    isCorrect: Optional[bool]  # None when the selection matched no option
    correctOptions: List[str]
    explanation: str


class QuizView(BaseModel):
    status: QuizStatus
    questionIndex: int = 0
    totalQuestions: int = 0
    question: Optional[QuizQuestionView] = None
    selectedOption: Optional[str] = None
    feedback: Optional[QuizFeedback] = None
    error: Optional[str] = None
    notice: Optional[str] = None


class OptionSelectRequest(BaseModel):
    option: str


class ScoreResponse(BaseModel):
    score: int
    message: str
