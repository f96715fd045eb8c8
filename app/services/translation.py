from typing import Any, Dict, List

from app.core.errors import ExtractionError, ValidationError

TEXT_FIELDS = ("question", "answer", "explanation")


def validate_items(items: Any) -> List[Dict[str, Any]]:
    """Client input for /translate must be a non-empty array of objects."""
    if not isinstance(items, list) or not items:
        raise ValidationError("items 배열이 필요합니다.", detail="'items' must be a non-empty array.")
    if not all(isinstance(item, dict) for item in items):
        raise ValidationError("items 배열이 필요합니다.", detail="Every entry in 'items' must be an object.")
    return items


def check_translated(translated: List[Any], expected: int) -> List[Dict[str, Any]]:
    """The model must hand back one object per input item."""
    if len(translated) != expected:
        raise ExtractionError(
            "Translation returned a different number of items.",
            detail=f"expected {expected}, got {len(translated)}",
        )
    if not all(isinstance(item, dict) for item in translated):
        raise ExtractionError("Translation returned non-object items.")
    return translated


def _answer_index(item: Dict[str, Any]) -> int:
    options = item.get("options")
    answer = item.get("answer")
    if not isinstance(options, list) or not isinstance(answer, str):
        return -1
    for idx, opt in enumerate(options):
        if isinstance(opt, str) and opt.strip() == answer.strip():
            return idx
    return -1


def merge_translation(original: Dict[str, Any], translated: Dict[str, Any]) -> Dict[str, Any]:
    """
    Lay translated text over the original item.

    ``id`` and ``type`` always come from the original. Options are only taken
    when the translation kept their count; a multiple-choice answer that no
    longer matches a translated option is re-pointed at the option in the
    original answer's position.
    """
    merged = dict(original)

    for field in TEXT_FIELDS:
        value = translated.get(field)
        if isinstance(value, str) and value.strip():
            merged[field] = value.strip()

    original_options = original.get("options")
    new_options = translated.get("options")
    if (
        isinstance(original_options, list)
        and original_options
        and isinstance(new_options, list)
        and len(new_options) == len(original_options)
        and all(isinstance(opt, str) for opt in new_options)
    ):
        merged["options"] = [opt.strip() for opt in new_options]

        if _answer_index(merged) == -1:
            idx = _answer_index(original)
            merged["answer"] = merged["options"][idx if idx >= 0 else 0]
    elif isinstance(original_options, list):
        # options untouched, so the answer has to stay aligned with them
        merged["answer"] = original.get("answer")

    return merged
