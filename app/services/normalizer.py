from typing import Any, Dict, List, Optional

from app.schemas.quiz import QuestionType

MC = QuestionType.multiple_choice.value
SA = QuestionType.short_answer.value

OPTION_COUNT = 4
BASE_EXCERPT_CHARS = 60
GENERIC_SOURCE = "제공된 학습 내용"


def source_base(text: str, limit: int = BASE_EXCERPT_CHARS) -> str:
    """Excerpt used in synthesized fields."""
    return (text or "")[:limit] or GENERIC_SOURCE


def resolve_item_type(question_type: str, index: int) -> str:
    """Sub-type of the item at ``index`` (0-based). Mixed alternates, starting with MC."""
    if question_type == QuestionType.mixed.value:
        return MC if index % 2 == 0 else SA
    if question_type == SA:
        return SA
    return MC


def _clean_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _fallback_option(position: int) -> str:
    return f"선택지 {position + 1}"


def normalize_options(raw_options: Any) -> List[str]:
    """Drop falsy entries, pad to 4 with placeholders, trim, keep the first 4."""
    options = [opt for opt in raw_options if opt] if isinstance(raw_options, list) else []
    while len(options) < OPTION_COUNT:
        options.append(_fallback_option(len(options)))
    return [str(opt).strip() for opt in options[:OPTION_COUNT]]


def normalize_question(
    raw: Any,
    index: int,
    text: str,
    difficulty: str,
    question_type: str,
) -> Dict[str, Any]:
    """Map one raw model object onto a complete Question dict."""
    q = raw if isinstance(raw, dict) else {}
    base = source_base(text)
    item_type = resolve_item_type(question_type, index)

    question = _clean_str(q.get("question")) or f"Q{index + 1}. {base} 기반 문제"

    raw_answer = _clean_str(q.get("answer"))
    if item_type == MC:
        options = normalize_options(q.get("options"))
        answer = raw_answer if raw_answer in options else options[0]
    else:
        options = None
        answer = raw_answer or f"{base}에 대한 핵심 개념을 요약해 보세요."

    explanation = (
        _clean_str(q.get("explanation"))
        or f"{difficulty} 난이도로 {base}을(를) 바탕으로 한 정답입니다."
    )

    return {
        "id": index + 1,
        "question": question,
        "options": options,
        "answer": answer,
        "explanation": explanation,
        "type": item_type,
    }


def normalize_questions(
    raw_questions: List[Any],
    desired_count: int,
    text: str,
    difficulty: str,
    question_type: str,
) -> List[Dict[str, Any]]:
    """
    Turn whatever the model produced into well-formed questions.

    One output per raw object, capped at ``desired_count``. Missing or
    malformed fields are synthesized deterministically, so this never fails.
    """
    return [
        normalize_question(raw, index, text, difficulty, question_type)
        for index, raw in enumerate(raw_questions[:max(desired_count, 0)])
    ]
