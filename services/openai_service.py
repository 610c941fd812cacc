# services/openai_service.py
import json
import logging
import time
from typing import Any, Dict, List, Optional
from functools import lru_cache
from openai import OpenAI

from config import settings
from services.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "sk-xxxx-your-key-here"


@lru_cache(maxsize=1)
def get_openai_client() -> Optional[OpenAI]:
    """
    Singleton-style OpenAI client so we don't recreate it everywhere.

    Returns None when no usable API key is configured or the client cannot be
    built; callers treat that as "service unavailable".
    """
    if not settings.OPENAI_API_KEY or settings.OPENAI_API_KEY == PLACEHOLDER_API_KEY:
        logger.error("OPENAI_API_KEY is not configured - AI features are disabled")
        return None
    try:
        return OpenAI(api_key=settings.OPENAI_API_KEY)
    except Exception as e:
        logger.error(f"Failed to initialise the OpenAI client: {e}")
        return None


def run_text_analysis(
    *,
    system_prompt: str,
    user_payload: Dict[str, Any],
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    json_object: bool = False,
) -> str:
    """
    Generic helper for calling a chat/completions model and returning raw content string.

    - system_prompt: instructions for the assistant
    - user_payload: arbitrary dict sent as the user message (we JSON-encode it)
    - model: override model if needed; otherwise uses default from settings
    - temperature: override temperature if needed
    - json_object: ask the API to constrain the answer to a single JSON object

    Raises ServiceUnavailableError without touching the network when the client
    was never initialised.
    """
    client = get_openai_client()
    if client is None:
        raise ServiceUnavailableError("The AI client is not initialised")

    m = model or settings.OPENAI_TEXT_MODEL
    t = settings.ANALYSIS_TEMPERATURE if temperature is None else temperature

    messages: List[Dict[str, str]] = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": json.dumps(user_payload, ensure_ascii=False)},
    ]

    kwargs: Dict[str, Any] = {}
    if json_object:
        kwargs["response_format"] = {"type": "json_object"}

    start = time.time()
    completion = client.chat.completions.create(
        model=m,
        messages=messages,
        temperature=t,
        **kwargs,
    )
    content = completion.choices[0].message.content or ""

    latency_ms = (time.time() - start) * 1000
    logger.info(f"LLM call: model={m} temperature={t} latency_ms={latency_ms:.0f} response_length={len(content)}")
    logger.debug(f"Raw LLM response: {content}")

    return content
