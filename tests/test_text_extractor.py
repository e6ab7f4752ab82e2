"""
Tests for Word/PDF text extraction.
"""

import io
from unittest.mock import MagicMock, patch

import pytest
from docx import Document

from meeting_tracker.core.exceptions import BadRequestError, UnsupportedFileFormatError
from meeting_tracker.services.text_extractor import (
    DOCX_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    detect_format,
    extract_text,
)


def make_docx(*paragraphs: str) -> bytes:
    doc = Document()
    for paragraph in paragraphs:
        doc.add_paragraph(paragraph)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


class TestDetectFormat:
    """Tests for format dispatch."""

    def test_by_extension(self):
        assert detect_format("minutes.DOCX") == "docx"
        assert detect_format("minutes.pdf") == "pdf"

    def test_by_media_type(self):
        assert detect_format("upload", DOCX_MEDIA_TYPE) == "docx"
        assert detect_format("upload", PDF_MEDIA_TYPE) == "pdf"

    def test_unsupported(self):
        """Plain text and legacy .doc files are rejected."""
        with pytest.raises(UnsupportedFileFormatError) as exc_info:
            detect_format("notes.txt", "text/plain")
        assert exc_info.value.status_code == 415

        with pytest.raises(UnsupportedFileFormatError):
            detect_format("notes.doc")


class TestExtractText:
    """Tests for text extraction."""

    def test_docx_paragraphs(self):
        content = make_docx("Alice will send the agenda.", "", "Bob reviews the budget.")
        text = extract_text(content, "meeting.docx")
        assert text == "Alice will send the agenda.\nBob reviews the budget."

    def test_corrupt_docx(self):
        with pytest.raises(BadRequestError) as exc_info:
            extract_text(b"PK\x03\x04 not really a zip", "broken.docx")
        assert "Word document" in exc_info.value.message

    def test_corrupt_pdf(self):
        with pytest.raises(BadRequestError) as exc_info:
            extract_text(b"%PDF-1.4 garbage", "broken.pdf")
        assert "PDF" in exc_info.value.message


def fake_page(text):
    page = MagicMock()
    page.extract_text.return_value = text
    return page


class TestPdfPages:
    """Page-by-page PDF reading with the reader patched out."""

    def test_pages_joined_with_single_space(self):
        with patch("meeting_tracker.services.text_extractor.pdf.pdfplumber.open") as mock_open:
            mock_open.return_value.__enter__.return_value.pages = [
                fake_page("Alice owns the budget."),
                fake_page(None),
                fake_page("   "),
                fake_page("Bob books the venue."),
            ]
            text = extract_text(b"%PDF-1.4", "minutes.pdf")

        assert text == "Alice owns the budget. Bob books the venue."

    def test_pdf_without_text(self):
        with patch("meeting_tracker.services.text_extractor.pdf.pdfplumber.open") as mock_open:
            mock_open.return_value.__enter__.return_value.pages = [fake_page(None)]
            assert extract_text(b"%PDF-1.4", "scan.pdf", PDF_MEDIA_TYPE) == ""
