from config import settings
from services.openai_service import run_text_analysis

QUIZ_QUESTION_COUNT = 3
QUIZ_OPTION_COUNT = 3

QUIZ_SYSTEM_PROMPT_TEMPLATE = """
You write short media-literacy quizzes about disinformation and misinformation.

Generate {question_count} multiple-choice questions with {option_count} options each.
Exactly one option per question is correct. Give every question a short explanation
of the correct answer.

Return ONLY a JSON array, no markdown, with this exact structure:

[
  {{
    "id": "q1",
    "questionText": string,
    "options": [
      {{"text": string, "isCorrect": false}},
      {{"text": string, "isCorrect": true}},
      {{"text": string, "isCorrect": false}}
    ],
    "explanation": string
  }}
]

Example question:
{{
  "id": "q2",
  "questionText": "What matters most when checking whether a story is fake?",
  "options": [
    {{"text": "The headline is emotional", "isCorrect": false}},
    {{"text": "The source is trustworthy", "isCorrect": true}},
    {{"text": "It has been shared many times", "isCorrect": false}}
  ],
  "explanation": "Checking the reliability of the source is the basis of spotting fake news."
}}

Write the questions, options and explanations in {language}.
"""


def request_quiz_batch() -> str:
    """Ask the model for a fresh batch of quiz questions. Returns the raw response content."""
    system_prompt = QUIZ_SYSTEM_PROMPT_TEMPLATE.format(
        question_count=QUIZ_QUESTION_COUNT,
        option_count=QUIZ_OPTION_COUNT,
        language=settings.RESPONSE_LANGUAGE,
    )

    # No json_object mode here: the answer is a top-level array
    return run_text_analysis(
        system_prompt=system_prompt,
        user_payload={"questions": QUIZ_QUESTION_COUNT},
        temperature=settings.QUIZ_TEMPERATURE,
    )
