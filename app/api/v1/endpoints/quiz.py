from typing import Optional

from fastapi import APIRouter, Depends

from app.schemas.common import ErrorResponse
from app.schemas.quiz import (
    GenerateResponse,
    QuizRequest,
    QuizResponse,
    TranslateRequest,
    TranslateResponse,
)
from app.services import quiz_service
from app.services.providers import LLMProvider, get_provider

router = APIRouter()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 1. QUIZ (strict)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post(
    "/api/generate-quiz",
    response_model=QuizResponse,
    tags=["Quiz"],
    summary="Generate quiz questions from study text",
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def create_quiz(request: QuizRequest, provider: LLMProvider = Depends(get_provider)):
    """
    Strict generation: an unreachable provider or unparseable model output
    is reported as 502 instead of being papered over with mock questions.
    """
    return await quiz_service.generate_quiz(request, provider)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 2. GENERATE (permissive)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post("/generate", response_model=GenerateResponse, tags=["Quiz"])
async def create_items(
    request: Optional[QuizRequest] = None,
    provider: LLMProvider = Depends(get_provider),
):
    """Generate questions; degrades to mock output, reported in meta.mode."""
    return await quiz_service.generate_items(request or QuizRequest(), provider)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 3. TRANSLATE (permissive)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post(
    "/translate",
    response_model=TranslateResponse,
    tags=["Quiz"],
    responses={400: {"model": ErrorResponse}},
)
async def translate_items(request: TranslateRequest, provider: LLMProvider = Depends(get_provider)):
    """Translate an existing question list; falls back to tagged mock text."""
    return await quiz_service.translate(request.items, request.target_lang, provider)
