"""Document models for the RAG system."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Document(CamelModel):
    """Document model representing a source document."""

    id: str
    title: str
    content: str


class Chunk(CamelModel):
    """Chunk model representing a document fragment."""

    chunk_id: str
    doc_id: str
    title: str
    text: str


class ChunkOptions(CamelModel):
    """Size limits applied when chunking a document."""

    max_chunk_size: int = Field(default=500, ge=1)
    min_chunk_size: int = Field(default=100, ge=0)


class ChunkStats(CamelModel):
    """Length statistics over a list of chunks."""

    count: int = 0
    avg_length: int = 0
    min_length: int = 0
    max_length: int = 0


class ChunkMetadata(CamelModel):
    """Denormalized chunk payload stored next to each vector."""

    doc_id: str
    title: str
    chunk_text: str


class IndexedRecord(CamelModel):
    """A chunk paired with its embedding, ready for upsert."""

    id: str
    vector: List[float]
    metadata: ChunkMetadata


class Match(CamelModel):
    """A similarity search hit."""

    id: str
    score: float
    metadata: ChunkMetadata


class Source(CamelModel):
    """Document cited by an answer."""

    doc_id: str
    title: str


class IngestResult(CamelModel):
    """Aggregate counts for one ingest request."""

    ingested_documents: int = 0
    ingested_chunks: int = 0


class AskResult(CamelModel):
    """Generated answer with the documents it was grounded on."""

    answer: str
    sources: List[Source] = Field(default_factory=list)
