from datetime import datetime

from config import settings
from services.openai_service import run_text_analysis


def get_current_date_string() -> str:
    """Get the current date formatted for prompt injection."""
    return datetime.now().strftime("%B %d, %Y")


ANALYSIS_SYSTEM_PROMPT_TEMPLATE = """
You are an expert in spotting disinformation and misinformation risk in social media posts.

IMPORTANT: Today's date is {current_date}. Your training data may be outdated.
Do NOT mark a post as suspicious only because it mentions events after your training cutoff.

Analyse the text you receive and return ONLY a single JSON object with this exact structure:

{{
  "reliability": "HIGHLY_SUSPICIOUS" | "POTENTIALLY_MISLEADING" | "NEEDS_VERIFICATION" | "LIKELY_ACCURATE",
  "explanation": string,
  "keywords_for_fact_check": [string, ...],
  "suggested_sources": [{{"title": string, "url": string}}]
}}

Requirements:
- "explanation" describes your findings and the evidence behind the rating.
- "keywords_for_fact_check" lists search keywords a reader can use to verify the claims.
- "suggested_sources" lists at most 2 highly relevant sources; omit it if there are none.

Watch for sensational wording, missing evidence, one-sided claims, manufactured urgency
and unnatural URLs.

Write "explanation" and "keywords_for_fact_check" in {language}.
"""


def request_analysis(text: str) -> str:
    """Ask the model to rate one piece of text. Returns the raw response content."""
    system_prompt = ANALYSIS_SYSTEM_PROMPT_TEMPLATE.format(
        current_date=get_current_date_string(),
        language=settings.RESPONSE_LANGUAGE,
    )

    return run_text_analysis(
        system_prompt=system_prompt,
        user_payload={"text": text},
        temperature=settings.ANALYSIS_TEMPERATURE,
        json_object=True,
    )
