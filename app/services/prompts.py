import json
from typing import Any, Dict, List

from app.schemas.quiz import QuizParams


# ── System Prompts ────────────────────────────────────────────────────────────

QUIZ_SYSTEM_PROMPT = " ".join([
    "You are a teacher who writes concise quiz questions (multiple-choice or short-answer).",
    "Return ONLY valid JSON with this shape:",
    '{ "questions": [ { "question": string, "options": [string,string,string,string] | null, '
    '"answer": string, "explanation": string } ] }',
    "Rules:",
    '- If question_type is "multiple-choice": include exactly 4 options and answer must match one of them.',
    '- If question_type is "short-answer": set options to null and answer should be a short phrase or sentence.',
    '- If question_type is "mixed": alternate multiple-choice and short-answer, starting with multiple-choice.',
    "- Keep explanations short (1-2 sentences).",
    "- Output must be in {language}, regardless of source language.",
    "- Do not include markdown fences or extra text.",
])

TRANSLATE_SYSTEM_PROMPT = " ".join([
    "You are a professional translator for study material.",
    "Translate the quiz items you are given into {language}.",
    "Return ONLY valid JSON with this shape:",
    '{ "items": [ { "id": number, "question": string, "options": [string,...] | null, '
    '"answer": string, "explanation": string, "type": string } ] }',
    "Rules:",
    "- Keep the same number of items in the same order.",
    "- Translate only question, options, answer and explanation. Copy id and type unchanged.",
    "- Keep options null when they are null and keep the option order.",
    "- For multiple-choice items the translated answer must be exactly one of the translated options.",
    "- Do not include markdown fences or extra text.",
])

LANGUAGE_NAMES = {
    "ko": "Korean",
    "en": "English",
    "ja": "Japanese",
    "zh": "Chinese",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
}


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code.lower(), code)


# ── Builders ──────────────────────────────────────────────────────────────────

def build_quiz_messages(params: QuizParams) -> List[Dict[str, str]]:
    """
    Build the system + user message pair for quiz generation.
    ``params.text`` is expected to be trimmed and truncated already.
    """
    system_prompt = QUIZ_SYSTEM_PROMPT.replace("{language}", language_name(params.language))

    user_prompt = "\n".join([
        f"Source text (trimmed): {params.text or '(no source text provided)'}",
        f"Difficulty: {params.difficulty}",
        f"Number of questions: {params.count}",
        f"Question type: {params.question_type}",
        f"Target output language: {params.language}",
        "Generate the quiz now. Respond with JSON only.",
    ])

    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


def build_translate_messages(items: List[Dict[str, Any]], target_lang: str) -> List[Dict[str, str]]:
    """Build the message pair asking for a field-preserving translation."""
    system_prompt = TRANSLATE_SYSTEM_PROMPT.replace("{language}", language_name(target_lang))
    payload = json.dumps({"items": items}, ensure_ascii=False)

    user_prompt = "\n".join([
        f"Target language: {target_lang}",
        f"Items: {payload}",
        "Translate now. Respond with JSON only.",
    ])

    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
