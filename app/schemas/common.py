"""
StudyMapper — Shared Envelopes
===============================
Every failed request is answered with ErrorResponse.
"""

from typing import Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """
    Standard error envelope.
    `detail` is only populated outside production.
    """
    status: str = "error"
    message: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    version: str
