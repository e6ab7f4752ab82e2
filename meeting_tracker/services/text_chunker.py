"""
Text Chunker Service - sentence-preserving greedy packing.

This module splits extracted transcript text into chunks that:
- Never cut a sentence in half
- Stay within a character budget unless a single sentence is longer
- Do not overlap, so chunks joined with single spaces give back the text
"""
import re
from dataclasses import dataclass
from typing import List

DEFAULT_CHUNK_SIZE = 1000

_WHITESPACE_RE = re.compile(r"\s+")
# After normalization sentences are separated by exactly one space
_SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?。！？]) ")


@dataclass
class ChunkResult:
    """One chunk of a source document."""
    text: str
    source_document: str
    chunk_index: int


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to one space and trim the ends."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def split_sentences(text: str) -> List[str]:
    """
    Split normalized text into sentences.

    A boundary is a space that follows sentence-ending punctuation. Text with
    no such punctuation is returned as a single sentence.
    """
    if not text:
        return []
    return [s for s in _SENTENCE_BOUNDARY_RE.split(text) if s]


def pack_sentences(sentences: List[str], chunk_size: int) -> List[str]:
    """
    Greedily pack sentences into chunks of at most ``chunk_size`` characters.

    A chunk is closed as soon as the next sentence (plus its joining space)
    would overflow it. A sentence longer than the budget gets a chunk of its
    own, so the budget is a soft limit.
    """
    chunks: List[str] = []
    current = ""

    for sentence in sentences:
        if not current:
            current = sentence
        elif len(current) + 1 + len(sentence) <= chunk_size:
            current = f"{current} {sentence}"
        else:
            chunks.append(current)
            current = sentence

    if current:
        chunks.append(current)

    return chunks


def create_text_chunks(
    text: str,
    source_document: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> List[ChunkResult]:
    """
    Split document text into ordered, sentence-aligned chunks.

    Args:
        text: Flat text extracted from a document
        source_document: Name of the document the text came from
        chunk_size: Character budget per chunk (default: 1000)

    Returns:
        List of ChunkResult with chunk_index increasing from 0

    Example:
        >>> chunks = create_text_chunks("One. Two. Three.", "notes.pdf", chunk_size=9)
        >>> [c.text for c in chunks]
        ['One. Two.', 'Three.']
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be a positive number of characters")

    normalized = normalize_whitespace(text)
    if not normalized:
        return []

    packed = pack_sentences(split_sentences(normalized), chunk_size)

    return [
        ChunkResult(text=chunk, source_document=source_document, chunk_index=index)
        for index, chunk in enumerate(packed)
    ]
