"""
Stuttee — Mock Generator
=========================
Deterministic placeholder content used when no provider credential is
configured or the live provider call fails. Output has the same shape as
normalized model output, so callers cannot tell the two apart structurally.
"""

from typing import Any, Dict, List

from app.schemas.quiz import QuizParams
from app.services.normalizer import MC, resolve_item_type, source_base

MOCK_EXCERPT_CHARS = 40
TRANSLATABLE_FIELDS = ("question", "answer", "explanation")


def mock_questions(params: QuizParams) -> List[Dict[str, Any]]:
    """Synthesize ``params.count`` questions from the request parameters alone."""
    excerpt = source_base(params.text, MOCK_EXCERPT_CHARS)
    questions = []

    for index in range(params.count):
        n = index + 1
        item_type = resolve_item_type(params.question_type, index)

        if item_type == MC:
            options = [f"[Mock] {n}번 문제 보기 {letter}" for letter in "ABCD"]
            answer = options[0]
            question = f"[Mock] Q{n}. '{excerpt}'에서 옳은 설명을 고르세요. ({params.difficulty})"
        else:
            options = None
            answer = f"[Mock] '{excerpt}'의 핵심 내용을 한 문장으로 정리합니다."
            question = f"[Mock] Q{n}. '{excerpt}'의 핵심 개념을 서술하세요. ({params.difficulty})"

        questions.append({
            "id": n,
            "question": question,
            "options": options,
            "answer": answer,
            "explanation": f"[Mock] {n}번 문제는 '{excerpt}' 내용을 바탕으로 만든 예시 해설입니다.",
            "type": item_type,
        })

    return questions


def _tag(value: Any, tag: str) -> Any:
    return f"{tag} {value}" if isinstance(value, str) else value


def mock_translate(items: List[Dict[str, Any]], target_lang: str) -> List[Dict[str, Any]]:
    """Prefix every text field with ``[lang]``; one output per input item."""
    tag = f"[{target_lang}]"
    translated = []

    for item in items:
        out = dict(item)
        for field in TRANSLATABLE_FIELDS:
            if field in item:
                out[field] = _tag(item[field], tag)
        if isinstance(item.get("options"), list):
            out["options"] = [_tag(opt, tag) for opt in item["options"]]
        translated.append(out)

    return translated
