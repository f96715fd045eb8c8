"""
Stuttee — Error Taxonomy
=========================
Every failure the API reports on purpose is a QuizError subclass.
The HTTP status lives on the class; main.py renders them as ErrorResponse.
"""

from typing import Optional


class QuizError(Exception):
    """Base class for errors that map onto a JSON error envelope."""

    http_status = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(QuizError):
    """Missing or malformed client input."""

    http_status = 400


class ProviderError(QuizError):
    """Non-2xx status, transport failure or timeout from the LLM provider."""

    http_status = 502

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message, detail=body)
        self.status_code = status_code
        self.body = body


class EmptyResponseError(ProviderError):
    """The provider answered but the assistant message had no text."""


class ExtractionError(QuizError):
    """No usable question array could be recovered from the model output."""

    http_status = 502
