"""
Stuttee — Quiz Generation Backend
==================================
FastAPI entry point.
  • Global exception handler — never crashes, always returns JSON
  • /api/generate-quiz — strict generation, errors surface as 4xx/5xx
  • /generate, /translate — permissive, degrade to mock output
  • Provider (Ollama / OpenAI / Groq / mock) selected once from settings
"""

import logging

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import QuizError
from app.schemas.common import ErrorResponse, HealthResponse
from app.api.v1.endpoints.quiz import router as quiz_router
from app.services.providers import LLMProvider, get_provider

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
)
logger = logging.getLogger(__name__)

# ── App ──────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="Stuttee — Quiz Generation Backend",
    description=(
        "Paste study notes → receive multiple-choice / short-answer questions.\n"
        "Backed by Ollama, OpenAI or Groq, with a mock fallback."
    ),
    version="1.0.0",
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


# ── Exception Handlers ──────────────────────────────────────────────────────
@app.exception_handler(QuizError)
async def quiz_error_handler(request: Request, exc: QuizError):
    """Known failures: status comes from the error class."""
    logger.warning(f"[{request.url.path}] {type(exc).__name__}: {exc.message}")
    body = ErrorResponse(status="error", message=exc.message, detail=exc.detail)
    return JSONResponse(status_code=exc.http_status, content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies (not JSON, not an object) are client errors, not 422s."""
    body = ErrorResponse(
        status="error",
        message="Invalid request body.",
        detail=str(exc.errors()),
    )
    return JSONResponse(status_code=400, content=body.model_dump())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all: every unhandled exception returns a clean JSON envelope."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    body = ErrorResponse(
        status="error",
        message="An internal server error occurred.",
        detail=str(exc),
    )
    return JSONResponse(status_code=500, content=body.model_dump())


# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Health Check ─────────────────────────────────────────────────────────────
@app.get("/", response_model=HealthResponse, tags=["System"])
async def health_check(provider: LLMProvider = Depends(get_provider)):
    return HealthResponse(
        status="ok",
        service="Stuttee backend",
        provider=provider.name,
        model=provider.model,
    )


app.include_router(quiz_router)


if __name__ == "__main__":
    logger.info(f"Stuttee backend running on http://localhost:{settings.PORT}")
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
