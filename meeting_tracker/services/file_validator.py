"""
Upload checks for meeting transcripts.

Only Word (.docx) and PDF files are accepted. A file must be non-empty,
under the configured size limit, and start with a signature matching its
extension so a renamed file is caught before extraction.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"pdf", "docx"}
UNSUPPORTED_MESSAGE = "Unsupported file type. Please upload Word (.docx) or PDF files."

# Leading bytes per extension; .docx is a ZIP container
FILE_SIGNATURES: dict[str, tuple[bytes, ...]] = {
    "pdf": (b"%PDF",),
    "docx": (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08"),
}


class FileValidationError(Exception):
    def __init__(self, message: str, error_code: str = "VALIDATION_ERROR"):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


def validate_file_extension(filename: str, allowed_extensions: set[str]) -> str:
    """Return the lowercase extension (without the dot) of an accepted file."""
    if not filename:
        raise FileValidationError("Filename is empty", error_code="EMPTY_FILENAME")

    extension = Path(filename).suffix.lower().lstrip(".")
    if extension not in allowed_extensions:
        raise FileValidationError(UNSUPPORTED_MESSAGE, error_code="UNSUPPORTED_TYPE")
    return extension


def validate_magic_bytes(content: bytes, file_type: str) -> bool:
    signatures = FILE_SIGNATURES.get(file_type)
    if not signatures:
        return True
    return content.startswith(signatures)


def validate_file_size(content: bytes, max_size_mb: int) -> bool:
    if not content:
        raise FileValidationError("The file is empty", error_code="EMPTY_FILE")
    if len(content) > max_size_mb * 1024 * 1024:
        raise FileValidationError(
            f"File is too large (maximum {max_size_mb}MB)",
            error_code="FILE_TOO_LARGE",
        )
    return True


def validate_uploaded_file(
    filename: str,
    content: bytes,
    max_size_mb: int,
    allowed_extensions: set[str] = ALLOWED_EXTENSIONS,
) -> str:
    """
    Run every upload check and return the file's extension.

    Raises:
        FileValidationError: With error_code EMPTY_FILENAME, UNSUPPORTED_TYPE,
            EMPTY_FILE, FILE_TOO_LARGE or INVALID_CONTENT
    """
    file_type = validate_file_extension(filename, allowed_extensions)
    validate_file_size(content, max_size_mb)

    if not validate_magic_bytes(content, file_type):
        logger.warning(f"Rejected {filename}: content does not look like {file_type}")
        raise FileValidationError(
            f"File content does not match its extension ({file_type})",
            error_code="INVALID_CONTENT",
        )

    logger.debug(f"Accepted upload {filename} ({len(content)} bytes)")
    return file_type
