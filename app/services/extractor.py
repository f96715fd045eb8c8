"""
Stuttee — Response Extractor
=============================
Recovers the question array from raw model text.

Models ignore "JSON only" often enough that the text may arrive wrapped in
markdown fences or surrounded by prose. Each strategy below is a pure
``text -> Optional[list]`` function; the first one that yields a list wins.
"""

import json
import re
import logging
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)```", re.IGNORECASE | re.DOTALL)


def safe_json_parse(text: str) -> Any:
    """json.loads that returns None instead of raising."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None


def _array_field(parsed: Any, field: str) -> Optional[list]:
    if isinstance(parsed, dict) and isinstance(parsed.get(field), list):
        return parsed[field]
    return None


# ── Strategies ────────────────────────────────────────────────────────────────

def parse_whole(content: str, field: str = "questions") -> Optional[list]:
    """Strategy 1: the entire text is JSON."""
    return _array_field(safe_json_parse(content), field)


def parse_fenced(content: str, field: str = "questions") -> Optional[list]:
    """Strategy 2: JSON inside a ``` or ```json fenced block."""
    match = FENCE_PATTERN.search(content)
    if not match:
        return None
    return _array_field(safe_json_parse(match.group(1)), field)


def parse_braced(content: str, field: str = "questions") -> Optional[list]:
    """Strategy 3: everything from the first '{' to the last '}'."""
    first = content.find("{")
    last = content.rfind("}")
    if first == -1 or last <= first:
        return None
    return _array_field(safe_json_parse(content[first:last + 1]), field)


STRATEGIES: tuple[Callable[[str, str], Optional[list]], ...] = (
    parse_whole,
    parse_fenced,
    parse_braced,
)


def extract_questions(content: str, limit: int, field: str = "questions") -> List[Any]:
    """
    Run the strategy chain over ``content`` and return the first recovered
    array, truncated to ``limit``. Returns [] when nothing is recoverable.
    """
    if not isinstance(content, str) or not content.strip():
        return []

    for strategy in STRATEGIES:
        found = strategy(content, field)
        if found is not None:
            logger.debug(f"[EXTRACT] {strategy.__name__} recovered {len(found)} '{field}'")
            return found[:max(limit, 0)]

    logger.warning(f"[EXTRACT] No '{field}' array found. Raw (first 500 chars): {content[:500]}")
    return []
