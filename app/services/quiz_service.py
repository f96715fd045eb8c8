"""
Stuttee — Quiz Service
=======================
Endpoint policies on top of an LLMProvider:
  • generate_quiz  (strict): provider/extraction errors surface to the caller
  • generate_items (permissive): any failure degrades to mock questions
  • translate      (permissive): any failure degrades to mock translation

Exactly one live provider attempt per request, bounded by AI_TIMEOUT_SECONDS.
"""

import math
import asyncio
import logging
from typing import Any, Awaitable, Optional, TypeVar

from app.core.config import settings
from app.core.errors import ProviderError, QuizError, ValidationError
from app.schemas.quiz import (
    GenerateMeta,
    GenerateResponse,
    QuizMeta,
    QuizParams,
    QuizRequest,
    QuizResponse,
    TranslateMeta,
    TranslateResponse,
)
from app.services.mock_service import mock_questions, mock_translate
from app.services.providers import LLMProvider
from app.services.translation import validate_items

logger = logging.getLogger(__name__)

T = TypeVar("T")


def clamp_count(value: Any, maximum: int, default: Optional[int] = None) -> int:
    """
    Coerce a client-supplied count into [1, maximum].
    Non-numeric values (and booleans) become ``default``; fractions are floored.
    """
    default = settings.DEFAULT_COUNT if default is None else default
    try:
        if isinstance(value, bool):
            raise TypeError
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        number = default

    if not math.isfinite(number):
        number = default

    return min(max(int(math.floor(number)), 1), maximum)


def build_params(request: QuizRequest, max_count: int, source_chars: int) -> QuizParams:
    return QuizParams(
        text=request.text[:source_chars],
        difficulty=request.level,
        count=clamp_count(request.count, max_count),
        question_type=request.type,
        language=settings.OUTPUT_LANGUAGE,
    )


async def _bounded(call: Awaitable[T], provider: LLMProvider) -> T:
    """Await one provider call; expiry is reported as a ProviderError."""
    try:
        return await asyncio.wait_for(call, timeout=settings.AI_TIMEOUT_SECONDS)
    except asyncio.TimeoutError as e:
        raise ProviderError(
            f"{provider.name} call timed out after {settings.AI_TIMEOUT_SECONDS}s."
        ) from e


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# STRICT: /api/generate-quiz
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

async def generate_quiz(request: QuizRequest, provider: LLMProvider) -> QuizResponse:
    """Generate questions or raise. Empty text is a ValidationError."""
    if not request.text:
        raise ValidationError("text 필드는 필수입니다.")

    params = build_params(request, settings.QUIZ_MAX_COUNT, settings.QUIZ_SOURCE_CHARS)
    logger.info(
        f"[QUIZ] Starting: {params.count} {params.question_type} questions, "
        f"difficulty={params.difficulty}, provider={provider.name}"
    )

    questions = await _bounded(provider.generate(params), provider)

    logger.info(f"[QUIZ] ✓ Generated {len(questions)} questions")
    return QuizResponse(
        questions=questions,
        meta=QuizMeta(
            source=provider.name,
            model=provider.model,
            level=params.difficulty,
            count=params.count,
            type=params.question_type,
            language=params.language,
        ),
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PERMISSIVE: /generate
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

async def generate_items(request: QuizRequest, provider: LLMProvider) -> GenerateResponse:
    """Generate questions, degrading to mock output on any provider-side failure."""
    params = build_params(request, settings.GENERATE_MAX_COUNT, settings.GENERATE_SOURCE_CHARS)
    logger.info(f"[GENERATE] Starting: {params.count} {params.question_type}, provider={provider.name}")

    fallback_reason = None
    if provider.is_mock:
        items = mock_questions(params)
    else:
        try:
            items = await _bounded(provider.generate(params), provider)
        except Exception as e:
            fallback_reason = str(e) or type(e).__name__
            logger.warning(
                f"[GENERATE] {provider.name} failed, serving mock questions: {fallback_reason[:200]}",
                exc_info=not isinstance(e, QuizError),
            )
            items = mock_questions(params)

    mock_mode = provider.is_mock or fallback_reason is not None
    return GenerateResponse(
        items=items,
        meta=GenerateMeta(
            mode="mock" if mock_mode else "llm",
            source="mock" if mock_mode else provider.name,
            model="mock" if mock_mode else provider.model,
            level=params.difficulty,
            count=params.count,
            type=params.question_type,
            language=params.language,
            fallback_reason=fallback_reason,
        ),
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PERMISSIVE: /translate
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

async def translate(items: Any, target_lang: Optional[str], provider: LLMProvider) -> TranslateResponse:
    """Translate ``items``. Only malformed client input can fail this call."""
    items = validate_items(items)
    lang = (target_lang or "").strip() or settings.DEFAULT_TARGET_LANG
    logger.info(f"[TRANSLATE] {len(items)} items → {lang}, provider={provider.name}")

    fallback_reason = None
    if provider.is_mock:
        translated = mock_translate(items, lang)
    else:
        try:
            translated = await _bounded(provider.translate(items, lang), provider)
        except Exception as e:
            fallback_reason = str(e) or type(e).__name__
            logger.warning(
                f"[TRANSLATE] {provider.name} failed, serving mock translation: {fallback_reason[:200]}",
                exc_info=not isinstance(e, QuizError),
            )
            translated = mock_translate(items, lang)

    mock_mode = provider.is_mock or fallback_reason is not None
    return TranslateResponse(
        items=translated,
        meta=TranslateMeta(
            mode="mock" if mock_mode else "llm",
            source="mock" if mock_mode else provider.name,
            model="mock" if mock_mode else provider.model,
            target_lang=lang,
            count=len(translated),
            fallback_reason=fallback_reason,
        ),
    )
