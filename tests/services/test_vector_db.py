"""
Test suite for VectorDBService against a mocked Qdrant client.
"""

import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from qdrant_client.models import FilterSelector, PointIdsList

from askdocs.core.exceptions import ErrorKind, RAGError
from askdocs.models.document import ChunkMetadata, IndexedRecord
from askdocs.services.vector_db import VectorDBService, point_id


def make_record(doc_id: str, idx: int) -> IndexedRecord:
    return IndexedRecord(
        id=f"{doc_id}#chunk-{idx}",
        vector=[0.1, 0.2, 0.3],
        metadata=ChunkMetadata(doc_id=doc_id, title="Title", chunk_text=f"text {idx}"),
    )


@pytest.fixture
def mock_qdrant_client() -> MagicMock:
    """Provide a mocked AsyncQdrantClient."""
    client = MagicMock()
    client.get_collections = AsyncMock(
        return_value=SimpleNamespace(collections=[SimpleNamespace(name="askdocs")]))
    client.get_collection = AsyncMock()
    client.create_collection = AsyncMock()
    client.upsert = AsyncMock()
    client.delete = AsyncMock()
    client.query_points = AsyncMock(return_value=SimpleNamespace(points=[]))
    client.close = AsyncMock()
    return client


@pytest.fixture
def vector_db(mock_qdrant_client) -> VectorDBService:
    """Provide a VectorDBService bound to the mocked client."""
    return VectorDBService(
        client=mock_qdrant_client, collection_name="askdocs", dimensions=3, batch_size=100)


class TestPointId:
    """point_id."""

    def test_should_be_deterministic_uuid(self) -> None:
        first = point_id("doc-1#chunk-0")

        assert first == point_id("doc-1#chunk-0")
        assert first != point_id("doc-1#chunk-1")
        assert uuid.UUID(first).version == 5


class TestConnect:
    """Connection and collection setup."""

    @pytest.mark.asyncio
    async def test_should_create_missing_collection(self, mock_qdrant_client) -> None:
        service = VectorDBService(client=mock_qdrant_client, collection_name="other", dimensions=3)

        await service.connect()

        mock_qdrant_client.create_collection.assert_awaited_once()
        assert mock_qdrant_client.create_collection.await_args.kwargs["collection_name"] == "other"

    @pytest.mark.asyncio
    async def test_should_reuse_existing_collection(self, vector_db, mock_qdrant_client) -> None:
        await vector_db.connect()

        mock_qdrant_client.create_collection.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_should_wrap_connection_errors(self, vector_db, mock_qdrant_client) -> None:
        mock_qdrant_client.get_collections.side_effect = ConnectionError("refused")

        with pytest.raises(RAGError) as exc_info:
            await vector_db.connect()

        assert exc_info.value.provider == "Qdrant"


class TestUpsertRecords:
    """VectorDBService.upsert_records."""

    @pytest.mark.asyncio
    async def test_should_store_chunk_payload(self, vector_db, mock_qdrant_client) -> None:
        await vector_db.upsert_records([make_record("doc-1", 0)])

        points = mock_qdrant_client.upsert.await_args.kwargs["points"]
        assert len(points) == 1
        assert points[0].id == point_id("doc-1#chunk-0")
        assert points[0].payload == {
            "chunkId": "doc-1#chunk-0",
            "docId": "doc-1",
            "title": "Title",
            "chunkText": "text 0",
        }

    @pytest.mark.asyncio
    async def test_should_upsert_in_batches_of_100(self, vector_db, mock_qdrant_client) -> None:
        records = [make_record("doc-1", idx) for idx in range(250)]

        await vector_db.upsert_records(records)

        sizes = [len(c.kwargs["points"]) for c in mock_qdrant_client.upsert.await_args_list]
        assert sizes == [100, 100, 50]

    @pytest.mark.asyncio
    async def test_should_skip_empty_input(self, vector_db, mock_qdrant_client) -> None:
        await vector_db.upsert_records([])

        mock_qdrant_client.upsert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_should_wrap_upsert_errors(self, vector_db, mock_qdrant_client) -> None:
        mock_qdrant_client.upsert.side_effect = RuntimeError("payload too large")

        with pytest.raises(RAGError) as exc_info:
            await vector_db.upsert_records([make_record("doc-1", 0)])

        assert exc_info.value.kind == ErrorKind.EXTERNAL_SERVICE
        assert str(exc_info.value) == "Qdrant error: Failed to upsert vectors: payload too large"

    @pytest.mark.asyncio
    async def test_should_fail_when_not_connected(self) -> None:
        service = VectorDBService(client=None)

        with pytest.raises(RAGError):
            await service.upsert_records([make_record("doc-1", 0)])


class TestSearch:
    """VectorDBService.search."""

    @pytest.mark.asyncio
    async def test_should_normalize_points_into_matches(self, vector_db, mock_qdrant_client) -> None:
        mock_qdrant_client.query_points.return_value = SimpleNamespace(
            points=[
                SimpleNamespace(
                    id=point_id("doc-1#chunk-0"),
                    score=0.91,
                    payload={
                        "chunkId": "doc-1#chunk-0",
                        "docId": "doc-1",
                        "title": "Refunds",
                        "chunkText": "Refunds take 5 days.",
                    },
                ),
                SimpleNamespace(id="no-payload", score=0.5, payload=None),
                SimpleNamespace(id="no-score", score=None, payload={"docId": "x"}),
            ]
        )

        matches = await vector_db.search([0.1, 0.2, 0.3], top_k=3)

        assert len(matches) == 1
        assert matches[0].id == "doc-1#chunk-0"
        assert matches[0].score == 0.91
        assert matches[0].metadata.doc_id == "doc-1"
        assert matches[0].metadata.title == "Refunds"
        assert matches[0].metadata.chunk_text == "Refunds take 5 days."
        assert mock_qdrant_client.query_points.await_args.kwargs["limit"] == 3

    @pytest.mark.asyncio
    async def test_should_keep_index_order(self, vector_db, mock_qdrant_client) -> None:
        mock_qdrant_client.query_points.return_value = SimpleNamespace(
            points=[
                SimpleNamespace(id="a", score=0.2, payload={"chunkId": "a", "docId": "d1"}),
                SimpleNamespace(id="b", score=0.9, payload={"chunkId": "b", "docId": "d2"}),
            ]
        )

        matches = await vector_db.search([0.1], top_k=2)

        assert [match.id for match in matches] == ["a", "b"]
        assert matches[0].metadata.title == ""

    @pytest.mark.asyncio
    async def test_should_wrap_query_errors(self, vector_db, mock_qdrant_client) -> None:
        mock_qdrant_client.query_points.side_effect = TimeoutError("timed out")

        with pytest.raises(RAGError) as exc_info:
            await vector_db.search([0.1], top_k=3)

        assert exc_info.value.provider == "Qdrant"


class TestDeletes:
    """Deletion by document id and by chunk id."""

    @pytest.mark.asyncio
    async def test_should_delete_by_doc_id_filter(self, vector_db, mock_qdrant_client) -> None:
        assert await vector_db.delete_document_chunks("doc-1") is True

        selector = mock_qdrant_client.delete.await_args.kwargs["points_selector"]
        assert isinstance(selector, FilterSelector)
        condition = selector.filter.must[0]
        assert condition.key == "docId"
        assert condition.match.value == "doc-1"

    @pytest.mark.asyncio
    async def test_should_swallow_delete_errors(self, vector_db, mock_qdrant_client) -> None:
        mock_qdrant_client.delete.side_effect = RuntimeError("index unavailable")

        assert await vector_db.delete_document_chunks("doc-1") is False

    @pytest.mark.asyncio
    async def test_should_swallow_missing_client(self) -> None:
        assert await VectorDBService(client=None).delete_document_chunks("doc-1") is False

    @pytest.mark.asyncio
    async def test_should_delete_by_chunk_ids(self, vector_db, mock_qdrant_client) -> None:
        await vector_db.delete_by_ids(["doc-1#chunk-0", "doc-1#chunk-1"])

        selector = mock_qdrant_client.delete.await_args.kwargs["points_selector"]
        assert isinstance(selector, PointIdsList)
        assert selector.points == [point_id("doc-1#chunk-0"), point_id("doc-1#chunk-1")]

    @pytest.mark.asyncio
    async def test_should_propagate_delete_by_ids_errors(self, vector_db, mock_qdrant_client) -> None:
        mock_qdrant_client.delete.side_effect = RuntimeError("boom")

        with pytest.raises(RAGError):
            await vector_db.delete_by_ids(["doc-1#chunk-0"])


class TestHealthCheck:
    """VectorDBService.health_check."""

    @pytest.mark.asyncio
    async def test_should_report_reachable_collection(self, vector_db) -> None:
        assert await vector_db.health_check() is True

    @pytest.mark.asyncio
    async def test_should_report_failure(self, vector_db, mock_qdrant_client) -> None:
        mock_qdrant_client.get_collection.side_effect = RuntimeError("down")

        assert await vector_db.health_check() is False
