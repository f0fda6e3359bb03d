"""Ingest pipeline: chunk, embed and index documents."""

import logging
import time
from typing import List

from askdocs.models.document import ChunkMetadata, Document, IndexedRecord, IngestResult
from askdocs.monitoring.metrics import (
    ingest_duration_seconds,
    ingest_errors_total,
    ingested_chunks_total,
    ingested_documents_total,
    stale_delete_failures_total,
)
from askdocs.services.chunking import ChunkingService, get_chunk_stats
from askdocs.services.embedding import EmbeddingService
from askdocs.services.vector_db import VectorDBService

logger = logging.getLogger(__name__)


class IngestPipeline:
    """Replaces the indexed chunks of each document in a batch."""

    def __init__(
        self,
        vector_db: VectorDBService,
        embedding_service: EmbeddingService,
        chunking_service: ChunkingService,
    ) -> None:
        """
        Initialize the ingest pipeline.

        Args:
            vector_db: Vector database service.
            embedding_service: Embedding generation service.
            chunking_service: Document chunking service.
        """
        self.vector_db = vector_db
        self.embedding_service = embedding_service
        self.chunking_service = chunking_service

    async def ingest(self, documents: List[Document]) -> IngestResult:
        """
        Ingest documents one after another.

        Each document's previous chunks are deleted first, so re-ingesting
        the same id replaces rather than duplicates. A failure aborts the
        request; documents already written stay written.

        Args:
            documents: Documents to ingest.

        Returns:
            Number of documents processed and chunks upserted.

        Raises:
            RAGError: If embedding or upsert fails.
        """
        logger.info(f"Processing {len(documents)} document(s)")
        start_time = time.time()
        total_chunks = 0

        try:
            for document in documents:
                total_chunks += await self._ingest_document(document)
        except Exception:
            ingest_errors_total.inc()
            raise

        ingest_duration_seconds.observe(time.time() - start_time)
        ingested_documents_total.inc(len(documents))

        result = IngestResult(
            ingested_documents=len(documents),
            ingested_chunks=total_chunks,
        )
        logger.info(
            f"Ingest complete: {result.ingested_documents} docs, "
            f"{result.ingested_chunks} chunks"
        )
        return result

    async def _ingest_document(self, document: Document) -> int:
        """
        Replace the indexed chunks of one document.

        Args:
            document: Document to ingest.

        Returns:
            Number of chunks upserted.
        """
        logger.info(f"Processing document: {document.id} ({document.title})")

        if not await self.vector_db.delete_document_chunks(document.id):
            stale_delete_failures_total.inc()

        chunks = self.chunking_service.chunk_document(
            document.id, document.title, document.content)
        if not chunks:
            logger.info(f"Document {document.id} produced no chunks (empty content)")
            return 0

        stats = get_chunk_stats(chunks)
        logger.info(
            f"Document {document.id}: {stats.count} chunks, avg {stats.avg_length} chars")

        embeddings = await self.embedding_service.generate_embeddings(
            [chunk.text for chunk in chunks])

        records = [
            IndexedRecord(
                id=chunk.chunk_id,
                vector=embedding,
                metadata=ChunkMetadata(
                    doc_id=chunk.doc_id,
                    title=chunk.title,
                    chunk_text=chunk.text,
                ),
            )
            for chunk, embedding in zip(chunks, embeddings)
        ]

        await self.vector_db.upsert_records(records)
        ingested_chunks_total.inc(len(records))

        logger.info(f"Document {document.id} ingested: {len(records)} chunks")
        return len(records)
