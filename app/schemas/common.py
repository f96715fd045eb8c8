"""
Stuttee — Shared Envelopes
===========================
Every error from this API is wrapped in ErrorResponse.
"""

from typing import Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error envelope."""
    status: str = "error"
    message: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    provider: str
    model: Optional[str] = None
