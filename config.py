from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    OPENAI_API_KEY: str = "sk-xxxx-your-key-here"
    OPENAI_TEXT_MODEL: str = "gpt-4.1"

    # Analysis wants stable verdicts, the quiz wants variety
    ANALYSIS_TEMPERATURE: float = 0.3
    QUIZ_TEMPERATURE: float = 0.7

    # Language the model writes explanations and quiz questions in
    RESPONSE_LANGUAGE: str = "English"

    MAX_TEXT_LENGTH: int = 5000

    # Flows kept per kind; the least recently used session is dropped first
    MAX_SESSIONS: int = 1000

    # Directory holding the persisted resilience score (one file per key)
    SCORE_STORAGE_DIR: str = ".storage"

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
