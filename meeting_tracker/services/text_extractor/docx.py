import io

from docx import Document


def extract_text_from_docx_bytes(content: bytes) -> str:
    """Return the raw paragraph text of a Word (.docx) document."""
    doc = Document(io.BytesIO(content))
    texts = [para.text for para in doc.paragraphs if para.text.strip()]
    return "\n".join(texts)
