"""
Shared test fixtures for the askdocs test suite.

Provides: match factory, OpenAI client mocks, an in-memory vector index
"""

from types import SimpleNamespace
from typing import Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from askdocs.models.document import ChunkMetadata, IndexedRecord, Match


def fake_vector(text: str) -> List[float]:
    """Deterministic stand-in embedding derived from the text."""
    return [float(len(text)), float(sum(map(ord, text)) % 997)]


class InMemoryVectorDB:
    """Vector index double that keeps records in a dict keyed by chunk id."""

    def __init__(self) -> None:
        self.records: Dict[str, IndexedRecord] = {}
        self.deleted_doc_ids: List[str] = []

    async def delete_document_chunks(self, doc_id: str) -> bool:
        self.deleted_doc_ids.append(doc_id)
        self.records = {
            key: record
            for key, record in self.records.items()
            if record.metadata.doc_id != doc_id
        }
        return True

    async def upsert_records(self, records: List[IndexedRecord]) -> None:
        for record in records:
            self.records[record.id] = record

    async def search(self, query_embedding: List[float], top_k: int = 3) -> List[Match]:
        return [
            Match(id=record.id, score=1.0, metadata=record.metadata)
            for record in list(self.records.values())[:top_k]
        ]

    def ids_for(self, doc_id: str) -> List[str]:
        return sorted(
            key for key, record in self.records.items() if record.metadata.doc_id == doc_id
        )


@pytest.fixture
def make_match():
    """Provide a factory for Match objects."""

    def _make(match_id: str, score: float, doc_id: str, title: str, chunk_text: str) -> Match:
        return Match(
            id=match_id,
            score=score,
            metadata=ChunkMetadata(doc_id=doc_id, title=title, chunk_text=chunk_text),
        )

    return _make


@pytest.fixture
def mock_openai_client() -> MagicMock:
    """
    Provide a mocked AsyncOpenAI client.

    embeddings.create answers every input with fake_vector; chat completions
    answer "Generated answer." unless reconfigured.
    """

    async def create_embeddings(model, input, dimensions):
        return SimpleNamespace(
            data=[
                SimpleNamespace(index=idx, embedding=fake_vector(text))
                for idx, text in enumerate(input)
            ]
        )

    client = MagicMock()
    client.embeddings.create = AsyncMock(side_effect=create_embeddings)
    client.chat.completions.create = AsyncMock(
        return_value=SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="Generated answer."))]
        )
    )
    client.models.list = AsyncMock(return_value=[])
    client.close = AsyncMock()
    return client


@pytest.fixture
def embed_text():
    """Provide the embedding function used by mock_openai_client."""
    return fake_vector


@pytest.fixture
def in_memory_vector_db() -> InMemoryVectorDB:
    """Provide an empty in-memory vector index."""
    return InMemoryVectorDB()
