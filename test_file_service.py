"""
StudyMapper - File Service Tests
================================

Extraction dispatch per extension. Fixture documents are generated in
memory with the same libraries the service reads them with.
"""

import asyncio
import io

import docx
import fitz  # PyMuPDF
import pytest
from pptx import Presentation

from app.core.config import settings
from app.core.errors import ExtractionError, FileTooLargeError, UnsupportedFormatError
from app.services.file_service import detect_extension, extract_text_from_file


def make_pdf(text: str) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def make_docx() -> bytes:
    document = docx.Document()
    document.add_paragraph("CELL BIOLOGY")
    document.add_paragraph("Cells are the basic unit of life.")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Nucleus"
    table.cell(0, 1).text = "Ribosome"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def make_pptx() -> bytes:
    presentation = Presentation()
    slide = presentation.slides.add_slide(presentation.slide_layouts[1])
    slide.shapes.title.text = "CELL BIOLOGY"
    slide.placeholders[1].text = "Mitochondria produce energy"
    buffer = io.BytesIO()
    presentation.save(buffer)
    return buffer.getvalue()


def extract(content: bytes, filename: str) -> dict:
    return asyncio.run(extract_text_from_file(content, filename))


# =============================================================================
# Extension Detection
# =============================================================================

class TestDetectExtension:

    @pytest.mark.parametrize("filename, ext", [
        ("notes.pdf", ".pdf"),
        ("Notes.DOCX", ".docx"),
        ("lecture.final.pptx", ".pptx"),
        ("legacy.doc", ".doc"),
        ("legacy.ppt", ".ppt"),
        ("plain.txt", ".txt"),
    ])
    def test_allowed(self, filename, ext):
        assert detect_extension(filename) == ext

    @pytest.mark.parametrize("filename", ["photo.png", "archive.zip", "README", ""])
    def test_rejected(self, filename):
        with pytest.raises(UnsupportedFormatError):
            detect_extension(filename)


# =============================================================================
# Extraction
# =============================================================================

class TestExtractText:

    def test_txt(self):
        result = extract("INTRO\nPlants make sugar.\n".encode("utf-8"), "notes.txt")

        assert result == {"text": "INTRO\nPlants make sugar.", "extension": ".txt", "success": True}

    def test_txt_with_bom(self):
        result = extract("\ufeffHello world".encode("utf-8"), "notes.txt")
        assert result["text"] == "Hello world"

    def test_txt_invalid_utf8(self):
        with pytest.raises(ExtractionError):
            extract(b"\xff\xfe\xfa\x00", "notes.txt")

    def test_pdf(self):
        result = extract(make_pdf("PHOTOSYNTHESIS\nPlants turn light into energy."), "bio.pdf")

        assert "PHOTOSYNTHESIS" in result["text"]
        assert "Plants turn light into energy." in result["text"]
        assert result["extension"] == ".pdf"

    def test_docx_paragraphs_and_tables(self):
        text = extract(make_docx(), "bio.docx")["text"]

        assert text.splitlines()[:2] == ["CELL BIOLOGY", "Cells are the basic unit of life."]
        assert "Nucleus" in text
        assert "Ribosome" in text

    def test_pptx(self):
        text = extract(make_pptx(), "bio.pptx")["text"]
        assert text.splitlines() == ["CELL BIOLOGY", "Mitochondria produce energy"]

    @pytest.mark.parametrize("filename, fmt", [
        ("broken.docx", "DOCX"),
        ("legacy.doc", "DOC"),
        ("broken.pptx", "PPTX"),
        ("legacy.ppt", "PPT"),
    ])
    def test_corrupt_office_files(self, filename, fmt):
        with pytest.raises(ExtractionError, match=f"Failed to extract text from {fmt}"):
            extract(b"definitely not a zip archive", filename)

    def test_corrupt_pdf(self):
        with pytest.raises(ExtractionError):
            extract(b"%PDF-1.4 garbage", "broken.pdf")

    def test_unsupported_extension(self):
        with pytest.raises(UnsupportedFormatError):
            extract(b"\x89PNG", "photo.png")

    def test_empty_file(self):
        with pytest.raises(ExtractionError, match="empty"):
            extract(b"", "notes.txt")

    def test_whitespace_only_file(self):
        with pytest.raises(ExtractionError, match="No text found"):
            extract(b"  \n\t  ", "notes.txt")

    def test_size_limit(self, monkeypatch):
        monkeypatch.setattr(settings, "MAX_FILE_SIZE_MB", 0)
        with pytest.raises(FileTooLargeError):
            extract(b"some text", "notes.txt")
