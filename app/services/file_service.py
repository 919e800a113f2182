import io
import os
import logging
import asyncio

import docx
import fitz  # PyMuPDF
from pptx import Presentation

from app.core.config import settings
from app.core.errors import ExtractionError, FileTooLargeError, UnsupportedFormatError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".pdf", ".doc", ".docx", ".ppt", ".pptx", ".txt")


def detect_extension(filename: str) -> str:
    """Lower-cased extension of `filename`, validated against ALLOWED_EXTENSIONS."""
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise UnsupportedFormatError(
            "Invalid file type. Only PDF, DOC, DOCX, PPT, PPTX, and TXT are allowed."
        )
    return ext


async def extract_text_from_file(file_content: bytes, filename: str) -> dict:
    """
    Dispatch on extension: PyMuPDF (PDF), python-docx (DOC/DOCX),
    python-pptx (PPT/PPTX) or plain UTF-8 decoding (TXT).
    Returns: {"text": str, "extension": str, "success": bool}
    """
    ext = detect_extension(filename)

    # ── Validate file size ────────────────────────────
    if len(file_content) > settings.max_file_size_bytes:
        raise FileTooLargeError(f"File exceeds {settings.MAX_FILE_SIZE_MB}MB limit.")

    if len(file_content) == 0:
        raise ExtractionError("File is empty.")

    extractor = _EXTRACTORS[ext]
    try:
        text = await asyncio.to_thread(extractor, file_content)
    except ExtractionError:
        raise
    except Exception as e:
        fmt = ext.lstrip(".").upper()
        logger.error(f"[FILE] {fmt} extraction failed for {filename}: {str(e)}")
        raise ExtractionError(f"Failed to extract text from {fmt}") from e

    if not text or not text.strip():
        raise ExtractionError("No text found in file.")

    logger.info(f"[FILE] ✓ {filename} — extracted {len(text)} characters")
    return {"text": text.strip(), "extension": ext, "success": True}


def _extract_from_pdf(data: bytes) -> str:
    with fitz.open(stream=data, filetype="pdf") as doc:
        if doc.page_count == 0:
            raise ExtractionError("PDF has no pages.")

        if doc.page_count > settings.MAX_PDF_PAGES:
            raise ExtractionError(f"PDF too large (>{settings.MAX_PDF_PAGES} pages).")

        text_blocks = []
        for page in doc:
            page_text = page.get_text("text")
            if page_text.strip():
                text_blocks.append(page_text)

        return "\n\n".join(text_blocks)


def _extract_from_docx(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    lines = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            for cell in row.cells:
                if cell.text.strip():
                    lines.append(cell.text)
    return "\n".join(lines)


def _extract_from_pptx(data: bytes) -> str:
    presentation = Presentation(io.BytesIO(data))
    lines = []
    for slide in presentation.slides:
        for shape in slide.shapes:
            if shape.has_text_frame and shape.text_frame.text.strip():
                lines.append(shape.text_frame.text)
    return "\n".join(lines)


def _extract_from_txt(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ExtractionError("Failed to read text file (not valid UTF-8).") from e


_EXTRACTORS = {
    ".pdf": _extract_from_pdf,
    ".doc": _extract_from_docx,
    ".docx": _extract_from_docx,
    ".ppt": _extract_from_pptx,
    ".pptx": _extract_from_pptx,
    ".txt": _extract_from_txt,
}
