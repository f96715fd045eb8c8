import asyncio

import pytest

from app.core.config import settings
from app.core.errors import ExtractionError, ProviderError, ValidationError
from app.schemas.quiz import QuizRequest
from app.services import quiz_service
from app.services.providers import MockProvider
from tests.helpers import PHOTOSYNTHESIS, FakeProvider, assert_well_formed, questions_json


@pytest.mark.parametrize("value, maximum, expected", [
    (0, 20, 1),
    (-5, 20, 1),
    (1000, 20, 20),
    (1000, 50, 50),
    (7, 20, 7),
    ("7", 20, 7),
    (2.9, 20, 2),
    ("abc", 20, 5),
    (None, 20, 5),
    (True, 20, 5),
    (float("nan"), 20, 5),
    (10 ** 400, 20, 5),
])
def test_clamp_count(value, maximum, expected):
    assert quiz_service.clamp_count(value, maximum) == expected


def test_request_coerces_unknown_level_and_type():
    request = QuizRequest(text="  notes  ", level="impossible", type="essay")
    assert request.text == "notes"
    assert request.level == "medium"
    assert request.type == "multiple-choice"

    assert QuizRequest(text=123).text == ""


# ── strict ───────────────────────────────────────────────────────────────────

def test_generate_quiz_requires_text():
    with pytest.raises(ValidationError):
        asyncio.run(quiz_service.generate_quiz(QuizRequest(text="   "), FakeProvider()))


def test_generate_quiz_meta_and_truncation():
    provider = FakeProvider(responses=[questions_json(2)])
    request = QuizRequest(text="x" * 5000, level="hard", count=2, type="multiple-choice")

    response = asyncio.run(quiz_service.generate_quiz(request, provider))

    assert response.meta.model_dump() == {
        "source": "fake",
        "model": "fake-model",
        "level": "hard",
        "count": 2,
        "type": "multiple-choice",
        "language": "ko",
    }
    user_prompt = provider.calls[0][1]["content"]
    assert "x" * settings.QUIZ_SOURCE_CHARS in user_prompt
    assert "x" * (settings.QUIZ_SOURCE_CHARS + 1) not in user_prompt


def test_generate_quiz_surfaces_errors():
    with pytest.raises(ExtractionError):
        asyncio.run(quiz_service.generate_quiz(
            QuizRequest(text=PHOTOSYNTHESIS), FakeProvider(responses=["no json here"])
        ))
    with pytest.raises(ProviderError):
        asyncio.run(quiz_service.generate_quiz(
            QuizRequest(text=PHOTOSYNTHESIS), FakeProvider(error=ProviderError("down", status_code=503))
        ))


def test_generate_quiz_timeout_is_a_provider_error(monkeypatch):
    monkeypatch.setattr(settings, "AI_TIMEOUT_SECONDS", 0.01)
    provider = FakeProvider(responses=[questions_json(1)], delay=1.0)

    with pytest.raises(ProviderError) as exc_info:
        asyncio.run(quiz_service.generate_quiz(QuizRequest(text=PHOTOSYNTHESIS), provider))
    assert "timed out" in exc_info.value.message


# ── permissive ───────────────────────────────────────────────────────────────

def test_generate_items_live_mode():
    provider = FakeProvider(responses=[questions_json(3)])
    response = asyncio.run(quiz_service.generate_items(QuizRequest(text=PHOTOSYNTHESIS, count=3), provider))

    assert response.meta.mode == "llm"
    assert response.meta.source == "fake"
    assert response.meta.fallback_reason is None
    assert len(response.items) == 3


@pytest.mark.parametrize("provider", [
    FakeProvider(error=ProviderError("down", status_code=500)),
    FakeProvider(responses=["Sorry, I cannot help."]),
    FakeProvider(error=RuntimeError("boom")),
])
def test_generate_items_falls_back_to_mock(provider):
    request = QuizRequest(text=PHOTOSYNTHESIS, count=4, type="mixed")
    response = asyncio.run(quiz_service.generate_items(request, provider))

    assert response.meta.mode == "mock"
    assert response.meta.source == "mock"
    assert response.meta.fallback_reason
    assert len(response.items) == 4
    assert_well_formed([q.model_dump() for q in response.items])


def test_generate_items_with_mock_provider_skips_model():
    response = asyncio.run(quiz_service.generate_items(QuizRequest(count=1000), MockProvider()))
    assert response.meta.mode == "mock"
    assert response.meta.fallback_reason is None
    assert response.meta.count == settings.GENERATE_MAX_COUNT
    assert len(response.items) == settings.GENERATE_MAX_COUNT


def test_generate_items_truncates_source_text():
    provider = FakeProvider(responses=[questions_json(1)])
    asyncio.run(quiz_service.generate_items(QuizRequest(text="y" * 3000, count=1), provider))

    user_prompt = provider.calls[0][1]["content"]
    assert "y" * settings.GENERATE_SOURCE_CHARS in user_prompt
    assert "y" * (settings.GENERATE_SOURCE_CHARS + 1) not in user_prompt


ITEMS = [
    {"id": 1, "question": "Q", "options": ["a", "b", "c", "d"], "answer": "a", "explanation": "E",
     "type": "multiple-choice"},
]


def test_translate_rejects_bad_items():
    with pytest.raises(ValidationError):
        asyncio.run(quiz_service.translate("nope", "en", MockProvider()))


def test_translate_defaults_language_and_falls_back():
    provider = FakeProvider(error=ProviderError("down"))
    response = asyncio.run(quiz_service.translate(ITEMS, None, provider))

    assert response.meta.mode == "mock"
    assert response.meta.target_lang == settings.DEFAULT_TARGET_LANG
    assert response.items[0]["question"] == f"[{settings.DEFAULT_TARGET_LANG}] Q"
    assert response.meta.count == 1


def test_generate_items_timeout_falls_back_to_mock(monkeypatch):
    monkeypatch.setattr(settings, "AI_TIMEOUT_SECONDS", 0.01)
    provider = FakeProvider(responses=[questions_json(2)], delay=1.0)

    response = asyncio.run(quiz_service.generate_items(QuizRequest(text=PHOTOSYNTHESIS, count=2), provider))

    assert response.meta.mode == "mock"
    assert "timed out" in response.meta.fallback_reason
    assert len(response.items) == 2


def test_translate_timeout_falls_back_to_mock(monkeypatch):
    monkeypatch.setattr(settings, "AI_TIMEOUT_SECONDS", 0.01)
    provider = FakeProvider(responses=['{"items": []}'], delay=1.0)

    response = asyncio.run(quiz_service.translate(ITEMS, "en", provider))

    assert response.meta.mode == "mock"
    assert "timed out" in response.meta.fallback_reason
    assert response.items[0]["question"] == "[en] Q"


def test_fallback_logs_traceback_only_for_unexpected_errors(caplog):
    request = QuizRequest(text=PHOTOSYNTHESIS, count=1)

    with caplog.at_level("WARNING", logger=quiz_service.logger.name):
        asyncio.run(quiz_service.generate_items(request, FakeProvider(error=RuntimeError("boom"))))
    warning = [r for r in caplog.records if r.levelname == "WARNING"][-1]
    assert warning.exc_info is not None

    caplog.clear()
    with caplog.at_level("WARNING", logger=quiz_service.logger.name):
        asyncio.run(quiz_service.translate(ITEMS, "en", FakeProvider(error=ProviderError("down"))))
    warning = [r for r in caplog.records if r.levelname == "WARNING"][-1]
    assert warning.exc_info is None
