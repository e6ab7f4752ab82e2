"""
Text extraction for uploaded meeting transcripts.

Dispatches on filename extension or declared media type to the Word or PDF
reader and returns a single flat string.
"""
import logging
from typing import Optional

from meeting_tracker.core.exceptions import BadRequestError, UnsupportedFileFormatError

from .pdf import extract_text_from_pdf_bytes
from .docx import extract_text_from_docx_bytes

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MEDIA_TYPE = "application/pdf"


def detect_format(filename: str, media_type: Optional[str] = None) -> str:
    """Return "docx" or "pdf" for a supported upload.

    Raises:
        UnsupportedFileFormatError: for any other file
    """
    name = (filename or "").lower()
    media_type = (media_type or "").lower()

    if name.endswith(".docx") or "wordprocessingml" in media_type:
        return "docx"
    if name.endswith(".pdf") or media_type == PDF_MEDIA_TYPE:
        return "pdf"
    raise UnsupportedFileFormatError()


def extract_text(content: bytes, filename: str, media_type: Optional[str] = None) -> str:
    """
    Extract the plain text of a Word or PDF file.

    Args:
        content: Raw file bytes
        filename: Original filename (used for extension dispatch)
        media_type: Declared MIME type, if any

    Returns:
        The extracted text with no structural metadata

    Raises:
        UnsupportedFileFormatError: If the file is neither .docx nor .pdf
        BadRequestError: If the reader cannot parse the file
    """
    file_format = detect_format(filename, media_type)

    try:
        if file_format == "docx":
            return extract_text_from_docx_bytes(content)
        return extract_text_from_pdf_bytes(content)
    except Exception as e:
        logger.error(f"Error extracting text from {filename}: {e}")
        label = "Word document" if file_format == "docx" else "PDF"
        raise BadRequestError(f"Failed to extract text from {label}")


__all__ = [
    "DOCX_MEDIA_TYPE",
    "PDF_MEDIA_TYPE",
    "detect_format",
    "extract_text",
    "extract_text_from_pdf_bytes",
    "extract_text_from_docx_bytes",
]
