"""
Pytest fixtures. Requesters are faked so no test talks to the AI service, and
the score store writes to a temporary directory.
"""

import json

import pytest

from services.score_store import FileKeyValueStorage, ResilienceScoreStore

QUIZ_BATCH = [
    {
        "id": "q1",
        "questionText": "What should you check first when a post goes viral?",
        "options": [
            {"text": "How many likes it has", "isCorrect": False},
            {"text": "Who originally published it", "isCorrect": True},
            {"text": "Whether the headline is exciting", "isCorrect": False},
        ],
        "explanation": "The original source tells you most about reliability.",
    },
    {
        "id": "q2",
        "questionText": "An old photo is shared as if it were taken today. What is this?",
        "options": [
            {"text": "Misleading context", "isCorrect": True},
            {"text": "Satire", "isCorrect": False},
            {"text": "Accurate reporting", "isCorrect": False},
        ],
        "explanation": "Real content in a false context is a common form of misinformation.",
    },
    {
        "id": "q3",
        "questionText": "Which wording is a warning sign?",
        "options": [
            {"text": "Share before they delete this!", "isCorrect": True},
            {"text": "According to the ministry's report", "isCorrect": False},
            {"text": "Figures as of March", "isCorrect": False},
        ],
        "explanation": "Manufactured urgency is used to stop readers from checking.",
    },
]


class FakeRequester:
    """Returns canned responses in order (repeating the last) and records calls."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        if len(self.responses) > 1:
            response = self.responses.pop(0)
        else:
            response = self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def quiz_json():
    return json.dumps(QUIZ_BATCH)


@pytest.fixture
def fake_requester():
    return FakeRequester


@pytest.fixture
def storage(tmp_path):
    return FileKeyValueStorage(str(tmp_path / "storage"))


@pytest.fixture
def score_store(storage):
    store = ResilienceScoreStore(storage)
    store.load()
    return store
