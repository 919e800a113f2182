"""
StudyMapper — Error Taxonomy
=============================
Typed failures raised by the outline builder and the extraction service,
plus the helper every endpoint uses to render them as a JSON envelope.

All errors subclass ValueError so callers may still catch them broadly.
"""

import traceback
from typing import Optional

from fastapi.responses import JSONResponse

from app.core.config import settings
from app.schemas.common import ErrorResponse


class EmptyInputError(ValueError):
    """No usable text after trimming."""


class UnsupportedFormatError(ValueError):
    """File extension is not one of the accepted document formats."""


class FileTooLargeError(ValueError):
    """Uploaded payload exceeds MAX_FILE_SIZE_MB."""


class ExtractionError(ValueError):
    """A document library failed, or the document holds no text."""


def error_detail(exc: Optional[BaseException]) -> Optional[str]:
    """Exception repr + traceback, hidden in production."""
    if exc is None or settings.is_production:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_response(
    status_code: int,
    message: str,
    exc: Optional[BaseException] = None,
) -> JSONResponse:
    body = ErrorResponse(status="error", message=message, detail=error_detail(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())
