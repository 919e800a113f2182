import logging
import time
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile

from app.core.config import settings
from app.core.errors import (
    EmptyInputError,
    ExtractionError,
    FileTooLargeError,
    UnsupportedFormatError,
    error_response,
)
from app.outline_engine import build_mind_map
from app.schemas.common import ErrorResponse
from app.schemas.mindmap import AnalyzeRequest, MindMapResponse
from app.services.file_service import detect_extension, extract_text_from_file

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Mind Map"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 1. FILE UPLOAD → MIND MAP
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post(
    "/upload",
    response_model=MindMapResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
    summary="Upload a document and receive its mind map",
)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    context_type: str = Form("personal", alias="contextType"),
):
    """
    1. Validates the upload (present, allowed extension, size)
    2. Extracts text with the matching document library
    3. Builds the mind map for the requested context type
    """
    start = time.perf_counter()

    if file is None or not file.filename:
        return error_response(400, "No file uploaded")

    try:
        detect_extension(file.filename)
    except UnsupportedFormatError as e:
        return error_response(400, str(e), e)

    content = await file.read()
    if len(content) == 0:
        return error_response(400, "Uploaded file is empty.")

    logger.info(f"[UPLOAD] Processing file: {file.filename} ({len(content)} bytes)")

    try:
        result = await extract_text_from_file(content, file.filename)
    except FileTooLargeError as e:
        return error_response(
            413, f"File too large. Maximum size is {settings.MAX_FILE_SIZE_MB}MB.", e
        )
    except ExtractionError as e:
        return error_response(422, str(e), e)

    extracted_text = result["text"]
    try:
        mind_map = build_mind_map(extracted_text, context_type)
    except EmptyInputError as e:
        return error_response(422, "No text could be extracted from the file", e)

    elapsed = time.perf_counter() - start
    logger.info(
        f"[UPLOAD] ✓ {file.filename} — {len(extracted_text)} chars — "
        f"{len(mind_map.branches)} branches — {elapsed:.2f}s"
    )

    return MindMapResponse(
        central_idea=mind_map.central_idea,
        branches=mind_map.branches,
        filename=file.filename,
        text_length=len(extracted_text),
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 2. RAW TEXT → MIND MAP
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post(
    "/analyze",
    response_model=MindMapResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
    summary="Turn pasted notes into a mind map",
)
async def analyze_text(request: AnalyzeRequest):
    """Build a mind map from raw text."""
    try:
        mind_map = build_mind_map(request.text, request.context_type)
    except EmptyInputError as e:
        return error_response(400, str(e), e)

    logger.info(f"[ANALYZE] ✓ {len(request.text)} chars → {len(mind_map.branches)} branches")
    return MindMapResponse(central_idea=mind_map.central_idea, branches=mind_map.branches)
