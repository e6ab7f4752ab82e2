import io
from typing import List

import pdfplumber


def extract_text_from_pdf_bytes(content: bytes) -> str:
    """Read a PDF page by page and join the page texts with a space."""
    pages: List[str] = []
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        for page in pdf.pages:
            text = page.extract_text() or ""
            if text.strip():
                pages.append(text)
    return " ".join(pages).strip()
