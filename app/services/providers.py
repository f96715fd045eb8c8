"""
Stuttee — LLM Providers
========================
One capability interface, four implementations:
  • OllamaProvider: local Ollama /api/chat
  • OpenAIProvider: OpenAI chat completions
  • GroqProvider  : Groq chat completions (OpenAI-compatible)
  • MockProvider  : deterministic placeholders, no network

Every live provider makes exactly one request per call. SDK-level retries
are disabled; fallback policy belongs to quiz_service.
"""

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Dict, List

import httpx
import openai
import groq
from ollama import AsyncClient as OllamaClient, ResponseError as OllamaResponseError

from app.core.config import Settings, settings
from app.core.errors import EmptyResponseError, ExtractionError, ProviderError
from app.schemas.quiz import QuizParams
from app.services.extractor import extract_questions
from app.services.mock_service import mock_questions, mock_translate
from app.services.normalizer import normalize_questions
from app.services.prompts import build_quiz_messages, build_translate_messages
from app.services.translation import check_translated, merge_translation

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """Generate and translate quiz questions through a chat-completion backend."""

    name: str = "llm"
    is_mock: bool = False

    def __init__(self, model: str):
        self.model = model

    @abstractmethod
    async def complete(self, messages: List[Dict[str, str]]) -> str:
        """Send one chat request and return the assistant text."""

    async def generate(self, params: QuizParams) -> List[Dict[str, Any]]:
        """Prompt → model → extract → normalize. Raises ExtractionError on empty recovery."""
        raw = await self.complete(build_quiz_messages(params))
        parsed = extract_questions(raw, params.count)
        if not parsed:
            raise ExtractionError(
                "LLM 결과에서 문제를 추출하지 못했습니다.",
                detail=f"No 'questions' array in {self.name} output.",
            )

        logger.info(f"[{self.name.upper()}] ✓ Recovered {len(parsed)}/{params.count} questions")
        return normalize_questions(
            raw_questions=parsed,
            desired_count=params.count,
            text=params.text,
            difficulty=params.difficulty,
            question_type=params.question_type,
        )

    async def translate(self, items: List[Dict[str, Any]], target_lang: str) -> List[Dict[str, Any]]:
        """Field-preserving translation of ``items``; same length and order."""
        raw = await self.complete(build_translate_messages(items, target_lang))
        translated = check_translated(extract_questions(raw, len(items), field="items"), len(items))
        return [merge_translation(orig, new) for orig, new in zip(items, translated)]


# ── Ollama ───────────────────────────────────────────────────────────────────

class OllamaProvider(LLMProvider):
    name = "ollama"

    def __init__(self, host: str, model: str, timeout: float):
        super().__init__(model)
        self.host = host
        self.client = OllamaClient(host=host, timeout=timeout)

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        logger.info(f"[OLLAMA] Calling {self.model} at {self.host}...")
        try:
            response = await self.client.chat(model=self.model, messages=messages, stream=False)
        except OllamaResponseError as e:
            raise ProviderError(
                f"Ollama 응답 오류: {e.status_code}",
                status_code=e.status_code,
                body=e.error,
            ) from e
        except (httpx.HTTPError, ConnectionError) as e:
            raise ProviderError(f"Ollama unreachable at {self.host}: {e}") from e

        message = response["message"]
        content = (message["content"] if message else None) or ""
        if not content.strip():
            raise EmptyResponseError("Ollama 응답에 content가 없습니다.")

        logger.info("[OLLAMA] ✓ Call succeeded")
        return content


# ── OpenAI / Groq ────────────────────────────────────────────────────────────

class OpenAIProvider(LLMProvider):
    name = "openai"
    label = "OpenAI"
    status_error: type = openai.APIStatusError
    connection_error: type = openai.APIConnectionError

    def __init__(self, api_key: str, model: str, timeout: float):
        super().__init__(model)
        self.client = self._make_client(api_key, timeout)

    def _make_client(self, api_key: str, timeout: float):
        return openai.AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        logger.info(f"[{self.name.upper()}] Calling {self.label} ({self.model})...")
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={"type": "json_object"},
                temperature=0.3,
            )
        except self.status_error as e:
            raise ProviderError(
                f"{self.label} 응답 오류: {e.status_code}",
                status_code=e.status_code,
                body=e.response.text,
            ) from e
        except self.connection_error as e:
            raise ProviderError(f"{self.label} unreachable: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            raise EmptyResponseError(f"{self.label} 응답에 content가 없습니다.")

        logger.info(f"[{self.name.upper()}] ✓ Call succeeded")
        return content


class GroqProvider(OpenAIProvider):
    name = "groq"
    label = "Groq"
    status_error = groq.APIStatusError
    connection_error = groq.APIConnectionError

    def _make_client(self, api_key: str, timeout: float):
        return groq.AsyncGroq(api_key=api_key, timeout=timeout, max_retries=0)


# ── Mock ─────────────────────────────────────────────────────────────────────

class MockProvider(LLMProvider):
    """Used when no credential is configured. Never touches the network."""

    name = "mock"
    is_mock = True

    def __init__(self):
        super().__init__("mock")

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        raise ProviderError("Mock provider has no model to call.")

    async def generate(self, params: QuizParams) -> List[Dict[str, Any]]:
        return mock_questions(params)

    async def translate(self, items: List[Dict[str, Any]], target_lang: str) -> List[Dict[str, Any]]:
        return mock_translate(items, target_lang)


# ── Selection ────────────────────────────────────────────────────────────────

def build_provider(config: Settings) -> LLMProvider:
    """Pick the provider named by AI_PROVIDER; missing API keys degrade to mock."""
    timeout = float(config.AI_TIMEOUT_SECONDS)

    if config.AI_PROVIDER == "ollama":
        logger.info(f"[INIT] ✓ Ollama at {config.OLLAMA_BASE} with model {config.OLLAMA_MODEL}")
        return OllamaProvider(config.OLLAMA_BASE, config.OLLAMA_MODEL, timeout)

    if config.AI_PROVIDER == "openai":
        if config.OPENAI_API_KEY:
            logger.info(f"[INIT] ✓ OpenAI client initialized ({config.OPENAI_MODEL})")
            return OpenAIProvider(config.OPENAI_API_KEY, config.OPENAI_MODEL, timeout)
        logger.warning("[INIT] ✗ OpenAI API key missing, serving mock questions")

    if config.AI_PROVIDER == "groq":
        if config.GROQ_API_KEY:
            logger.info(f"[INIT] ✓ Groq client initialized ({config.GROQ_MODEL})")
            return GroqProvider(config.GROQ_API_KEY, config.GROQ_MODEL, timeout)
        logger.warning("[INIT] ✗ Groq API key missing, serving mock questions")

    return MockProvider()


@lru_cache
def get_provider() -> LLMProvider:
    """FastAPI dependency: the provider selected at startup."""
    return build_provider(settings)
