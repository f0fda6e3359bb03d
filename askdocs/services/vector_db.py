"""Qdrant vector database service."""

import logging
import uuid
from typing import List, Optional

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import (
    Distance,
    FieldCondition,
    Filter,
    FilterSelector,
    MatchValue,
    NearestQuery,
    PointIdsList,
    PointStruct,
    VectorParams,
)

from askdocs.core.config import settings
from askdocs.core.exceptions import external_service_error
from askdocs.models.document import ChunkMetadata, IndexedRecord, Match

logger = logging.getLogger(__name__)

PROVIDER = "Qdrant"
POINT_NAMESPACE = uuid.UUID("00000000-0000-0000-0000-000000000000")


def point_id(record_id: str) -> str:
    """
    Map a chunk id onto a deterministic Qdrant point UUID.

    Args:
        record_id: Chunk id such as "doc-1#chunk-0".

    Returns:
        UUID string for the point.
    """
    return str(uuid.uuid5(POINT_NAMESPACE, record_id))


class VectorDBService:
    """Service for interacting with Qdrant vector database."""

    def __init__(
        self,
        client: Optional[AsyncQdrantClient] = None,
        collection_name: Optional[str] = None,
        dimensions: Optional[int] = None,
        batch_size: Optional[int] = None,
    ) -> None:
        """Initialize the vector database service."""
        self.client = client
        self.collection_name = collection_name or settings.qdrant_collection_name
        self.dimensions = dimensions or settings.embedding_dimensions
        self.batch_size = batch_size or settings.upsert_batch_size

    async def connect(self) -> None:
        """Connect to Qdrant."""
        try:
            if self.client is None:
                self.client = AsyncQdrantClient(
                    url=settings.qdrant_url,
                    api_key=settings.qdrant_api_key,
                    timeout=settings.qdrant_timeout,
                )
            await self._ensure_collection()
        except Exception as e:
            raise external_service_error(
                PROVIDER, f"Failed to connect to Qdrant: {str(e)}", cause=e) from e

    async def disconnect(self) -> None:
        """Disconnect from Qdrant."""
        if self.client:
            await self.client.close()

    def _require_client(self) -> AsyncQdrantClient:
        if not self.client:
            raise external_service_error(PROVIDER, "Client not connected")
        return self.client

    async def _ensure_collection(self) -> None:
        """Ensure the collection exists."""
        client = self._require_client()

        collections = await client.get_collections()
        collection_names = [col.name for col in collections.collections]

        if self.collection_name not in collection_names:
            logger.info(f"Creating collection {self.collection_name}")
            await client.create_collection(
                collection_name=self.collection_name,
                vectors_config=VectorParams(
                    size=self.dimensions,
                    distance=Distance.COSINE,
                ),
            )

    async def upsert_records(self, records: List[IndexedRecord]) -> None:
        """
        Upsert indexed records in fixed-size batches.

        Args:
            records: Records to store; the chunk id is kept in the payload.

        Raises:
            RAGError: If any batch fails. Earlier batches stay written.
        """
        if not records:
            return

        client = self._require_client()

        try:
            for start in range(0, len(records), self.batch_size):
                batch = records[start:start + self.batch_size]
                points = [
                    PointStruct(
                        id=point_id(record.id),
                        vector=record.vector,
                        payload={
                            "chunkId": record.id,
                            "docId": record.metadata.doc_id,
                            "title": record.metadata.title,
                            "chunkText": record.metadata.chunk_text,
                        },
                    )
                    for record in batch
                ]
                await client.upsert(collection_name=self.collection_name, points=points)
        except Exception as e:
            raise external_service_error(
                PROVIDER, f"Failed to upsert vectors: {str(e)}", cause=e) from e

    async def search(self, query_embedding: List[float], top_k: int = 3) -> List[Match]:
        """
        Search for similar chunks.

        Args:
            query_embedding: Query embedding vector.
            top_k: Number of results to return.

        Returns:
            Matches in the order returned by Qdrant. Points without a
            payload or score are skipped.
        """
        client = self._require_client()

        try:
            results = await client.query_points(
                collection_name=self.collection_name,
                query=NearestQuery(nearest=query_embedding),
                limit=top_k,
                with_payload=True,
            )
        except Exception as e:
            raise external_service_error(
                PROVIDER, f"Failed to query vectors: {str(e)}", cause=e) from e

        matches = []
        for point in results.points:
            if not point.payload or not isinstance(point.score, (int, float)):
                continue
            payload = point.payload
            matches.append(
                Match(
                    id=str(payload.get("chunkId") or point.id),
                    score=float(point.score),
                    metadata=ChunkMetadata(
                        doc_id=str(payload.get("docId") or ""),
                        title=str(payload.get("title") or ""),
                        chunk_text=str(payload.get("chunkText") or ""),
                    ),
                )
            )

        return matches

    async def delete_document_chunks(self, doc_id: str) -> bool:
        """
        Delete all chunks for a document, best effort.

        Failures are logged and swallowed so a stale-cleanup error never
        blocks re-ingestion.

        Args:
            doc_id: ID of the document to delete.

        Returns:
            True if the delete request succeeded.
        """
        try:
            client = self._require_client()
            await client.delete(
                collection_name=self.collection_name,
                points_selector=FilterSelector(
                    filter=Filter(
                        must=[FieldCondition(key="docId", match=MatchValue(value=doc_id))]
                    )
                ),
            )
            return True
        except Exception as e:
            logger.warning(f"Could not delete existing vectors for docId {doc_id}: {str(e)}")
            return False

    async def delete_by_ids(self, ids: List[str]) -> None:
        """
        Delete records by chunk id.

        Args:
            ids: Chunk ids to delete.
        """
        if not ids:
            return

        client = self._require_client()

        try:
            await client.delete(
                collection_name=self.collection_name,
                points_selector=PointIdsList(points=[point_id(i) for i in ids]),
            )
        except Exception as e:
            raise external_service_error(
                PROVIDER, f"Failed to delete vectors: {str(e)}", cause=e) from e

    async def health_check(self) -> bool:
        """Check if the collection is reachable."""
        try:
            client = self._require_client()
            await client.get_collection(self.collection_name)
            return True
        except Exception:
            return False
