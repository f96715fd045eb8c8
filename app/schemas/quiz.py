from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Literal, Optional
from enum import Enum


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class QuestionType(str, Enum):
    multiple_choice = "multiple-choice"
    short_answer = "short-answer"
    mixed = "mixed"


def resolve_difficulty(value: Any) -> str:
    """Unknown or missing levels fall back to medium."""
    if isinstance(value, str) and value in {d.value for d in Difficulty}:
        return value
    return Difficulty.medium.value


def resolve_question_type(value: Any) -> str:
    """Unknown or missing types fall back to multiple-choice."""
    if isinstance(value, str) and value in {t.value for t in QuestionType}:
        return value
    return QuestionType.multiple_choice.value


def _as_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


# ── Request ──────────────────────────────────────────────────────────────────

class QuizRequest(BaseModel):
    """Request body for /api/generate-quiz and /generate.

    Bodies are accepted loosely: anything that is not a usable value is
    replaced by its default instead of failing with 422. ``count`` is kept
    raw because its cap depends on the endpoint.
    """
    text: str = Field(default="", description="Study text the questions are built from")
    level: str = Field(default=Difficulty.medium.value, description="easy | medium | hard")
    count: Any = Field(default=None, description="Requested number of questions")
    type: str = Field(default=QuestionType.multiple_choice.value, description="multiple-choice | short-answer | mixed")

    @field_validator("text", mode="before")
    @classmethod
    def clean_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("level", mode="before")
    @classmethod
    def clean_level(cls, v: Any) -> str:
        return resolve_difficulty(v)

    @field_validator("type", mode="before")
    @classmethod
    def clean_type(cls, v: Any) -> str:
        return resolve_question_type(v)


class TranslateRequest(BaseModel):
    """Request body for /translate. ``items`` is checked by the service."""
    model_config = {"populate_by_name": True}

    items: Any = None
    target_lang: Optional[str] = Field(default=None, alias="targetLang")

    @field_validator("target_lang", mode="before")
    @classmethod
    def clean_target_lang(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None


class QuizParams(BaseModel):
    """Validated, clamped generation parameters shared by prompts, providers and mocks."""
    text: str
    difficulty: str = Difficulty.medium.value
    count: int = Field(default=5, ge=1)
    question_type: str = QuestionType.multiple_choice.value
    language: str = "ko"


# ── Response ─────────────────────────────────────────────────────────────────

class Question(BaseModel):
    """A single normalized quiz question."""
    id: int = Field(..., ge=1)
    question: str
    options: Optional[List[str]] = None
    answer: str
    explanation: str
    type: Literal["multiple-choice", "short-answer"]


class QuizMeta(BaseModel):
    source: str
    model: str
    level: str
    count: int
    type: str
    language: str


class GenerateMeta(QuizMeta):
    mode: Literal["llm", "mock"]
    fallback_reason: Optional[str] = None


class TranslateMeta(BaseModel):
    model_config = {"populate_by_name": True}

    mode: Literal["llm", "mock"]
    source: str
    model: str
    target_lang: str = Field(..., alias="targetLang")
    count: int
    fallback_reason: Optional[str] = None


class QuizResponse(BaseModel):
    """Response of the strict /api/generate-quiz endpoint."""
    questions: List[Question]
    meta: QuizMeta


class GenerateResponse(BaseModel):
    """Response of the permissive /generate endpoint."""
    items: List[Question]
    meta: GenerateMeta


class TranslateResponse(BaseModel):
    items: List[Dict[str, Any]]
    meta: TranslateMeta
