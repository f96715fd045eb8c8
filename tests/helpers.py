"""Test doubles and payload builders shared across test modules."""

import asyncio
import json

from app.services.providers import LLMProvider

PHOTOSYNTHESIS = "Photosynthesis converts light into chemical energy."


class FakeProvider(LLMProvider):
    """Returns scripted model text (or raises) instead of calling a backend."""

    name = "fake"

    def __init__(self, responses=None, error=None, delay=0.0):
        super().__init__("fake-model")
        self.responses = list(responses or [])
        self.error = error
        self.delay = delay
        self.calls = []

    async def complete(self, messages):
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


def mc_question(n):
    return {
        "question": f"Question {n}?",
        "options": [f"Option {n}-A", f"Option {n}-B", f"Option {n}-C", f"Option {n}-D"],
        "answer": f"Option {n}-B",
        "explanation": f"Because of {n}.",
    }


def questions_json(count, wrap=None):
    body = json.dumps({"questions": [mc_question(n) for n in range(1, count + 1)]})
    return wrap.replace("{}", body) if wrap else body


def assert_well_formed(questions):
    """Every question satisfies the multiple-choice / short-answer invariant."""
    for idx, q in enumerate(questions):
        assert q["id"] == idx + 1
        assert q["question"].strip()
        if q["type"] == "multiple-choice":
            assert len(q["options"]) == 4
            assert q["answer"].strip() in [opt.strip() for opt in q["options"]]
        else:
            assert q["type"] == "short-answer"
            assert q["options"] is None
