from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── AI Providers ──────────────────────────────────────────────────────────
    AI_PROVIDER: str = "ollama"

    @field_validator("AI_PROVIDER")
    @classmethod
    def validate_ai_provider(cls, v: str) -> str:
        allowed = {"ollama", "openai", "groq", "mock"}
        if v.lower() not in allowed:
            raise ValueError(f"AI_PROVIDER must be one of {allowed}, got '{v}'")
        return v.lower()

    # Ollama (local)
    OLLAMA_BASE: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3"

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"

    # Groq (Llama 3 - High Speed)
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.3-70b-versatile"

    # ── Limits ────────────────────────────────────────────────────────────────
    AI_TIMEOUT_SECONDS: int = 60
    DEFAULT_COUNT: int = 5

    # /api/generate-quiz
    QUIZ_MAX_COUNT: int = 20
    QUIZ_SOURCE_CHARS: int = 4000

    # /generate
    GENERATE_MAX_COUNT: int = 50
    GENERATE_SOURCE_CHARS: int = 1200

    # ── Languages ─────────────────────────────────────────────────────────────
    OUTPUT_LANGUAGE: str = "ko"
    DEFAULT_TARGET_LANG: str = "en"

    # ── Core ──────────────────────────────────────────────────────────────────
    PORT: int = 4000
    CORS_ORIGINS: List[str] = ["*"]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
