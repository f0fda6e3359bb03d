"""Document chunking service."""

import re
from typing import List, Optional

from askdocs.core.config import settings
from askdocs.models.document import Chunk, ChunkOptions, ChunkStats

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")


def _split_sentences(text: str) -> List[str]:
    """Split text after '.', '!' or '?' followed by whitespace."""
    return [s for s in SENTENCE_BREAK.split(text) if s.strip()]


def _split_paragraph(paragraph: str, max_size: int) -> List[str]:
    """
    Split a paragraph that exceeds max_size into sentence-packed pieces.

    A single sentence longer than max_size is sliced at fixed width.
    """
    if len(paragraph) <= max_size:
        return [paragraph]

    pieces: List[str] = []
    current = ""

    for sentence in _split_sentences(paragraph):
        if len(sentence) > max_size:
            if current:
                pieces.append(current.strip())
                current = ""
            for start in range(0, len(sentence), max_size):
                piece = sentence[start:start + max_size].strip()
                if piece:
                    pieces.append(piece)
            continue

        if len(current) + len(sentence) + 1 > max_size:
            if current:
                pieces.append(current.strip())
            current = sentence
        else:
            current = f"{current} {sentence}" if current else sentence

    if current:
        pieces.append(current.strip())

    return pieces


def _merge_small(pieces: List[str], min_size: int, max_size: int) -> List[str]:
    """Join undersized pieces onto their neighbours while within max_size."""
    if len(pieces) <= 1:
        return pieces

    merged: List[str] = []
    current = ""

    for piece in pieces:
        if not current:
            current = piece
            continue

        if len(current) < min_size:
            combined = f"{current} {piece}"
            if len(combined) <= max_size:
                current = combined
            else:
                merged.append(current)
                current = piece
        else:
            merged.append(current)
            current = piece

    if current:
        if len(current) < min_size and merged:
            combined = f"{merged[-1]} {current}"
            if len(combined) <= max_size:
                merged[-1] = combined
            else:
                merged.append(current)
        else:
            merged.append(current)

    return merged


def chunk_document(
    doc_id: str, title: str, content: str, options: Optional[ChunkOptions] = None
) -> List[Chunk]:
    """
    Chunk a document into bounded-size pieces for embedding.

    Paragraphs are split on blank lines, oversized paragraphs are split on
    sentence boundaries, and undersized pieces are merged with a neighbour.

    Args:
        doc_id: ID of the source document.
        title: Document title, copied onto every chunk.
        content: Document content to chunk.
        options: Size limits; defaults to 500/100 characters.

    Returns:
        Chunks in document order with ids "{doc_id}#chunk-{index}".
    """
    options = options or ChunkOptions()

    trimmed = content.strip()
    if not trimmed:
        return []

    paragraphs = [p.strip() for p in PARAGRAPH_BREAK.split(trimmed)]

    raw: List[str] = []
    for paragraph in paragraphs:
        if paragraph:
            raw.extend(_split_paragraph(paragraph, options.max_chunk_size))

    merged = _merge_small(raw, options.min_chunk_size, options.max_chunk_size)

    return [
        Chunk(chunk_id=f"{doc_id}#chunk-{idx}", doc_id=doc_id, title=title, text=text)
        for idx, text in enumerate(merged)
    ]


def get_chunk_stats(chunks: List[Chunk]) -> ChunkStats:
    """
    Compute length statistics for a list of chunks.

    Args:
        chunks: Chunks to measure.

    Returns:
        Count with average, minimum and maximum text length.
    """
    if not chunks:
        return ChunkStats()

    lengths = [len(chunk.text) for chunk in chunks]
    return ChunkStats(
        count=len(lengths),
        avg_length=int(sum(lengths) / len(lengths) + 0.5),
        min_length=min(lengths),
        max_length=max(lengths),
    )


class ChunkingService:
    """Service for chunking documents into smaller pieces."""

    def __init__(self, options: Optional[ChunkOptions] = None) -> None:
        """
        Initialize the chunking service.

        Args:
            options: Size limits; defaults to the configured chunk sizes.
        """
        self.options = options or ChunkOptions(
            max_chunk_size=settings.max_chunk_size,
            min_chunk_size=settings.min_chunk_size,
        )

    def chunk_document(self, doc_id: str, title: str, content: str) -> List[Chunk]:
        """Chunk a document using the service's size limits."""
        return chunk_document(doc_id, title, content, self.options)
