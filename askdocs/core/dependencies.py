"""Dependency injection for services."""

from typing import Optional

from openai import AsyncOpenAI
from qdrant_client import AsyncQdrantClient

from askdocs.core.config import Settings, settings
from askdocs.core.exceptions import external_service_error
from askdocs.services.answer_composer import AnswerComposer
from askdocs.services.chunking import ChunkingService
from askdocs.services.embedding import EmbeddingService
from askdocs.services.ingest_pipeline import IngestPipeline
from askdocs.services.llm import LLMService
from askdocs.services.query_processor import QueryProcessor
from askdocs.services.retriever import Retriever
from askdocs.services.vector_db import VectorDBService


class ServiceContainer:
    """Container for service instances and the client handles they share."""

    def __init__(
        self,
        openai_client: AsyncOpenAI,
        qdrant_client: Optional[AsyncQdrantClient] = None,
    ) -> None:
        """
        Initialize service container.

        Args:
            openai_client: Client used for embeddings and generation.
            qdrant_client: Vector index client; created on connect when omitted.
        """
        self.openai_client = openai_client
        self.vector_db = VectorDBService(client=qdrant_client)
        self.embedding_service = EmbeddingService(openai_client)
        self.llm_service = LLMService(openai_client)
        self.chunking_service = ChunkingService()

        self.ingest_pipeline = IngestPipeline(
            vector_db=self.vector_db,
            embedding_service=self.embedding_service,
            chunking_service=self.chunking_service,
        )
        self.query_processor = QueryProcessor(
            embedding_service=self.embedding_service,
            retriever=Retriever(self.vector_db),
            answer_composer=AnswerComposer(self.llm_service),
        )

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "ServiceContainer":
        """
        Build a container with clients configured from settings.

        Raises:
            RAGError: If the OpenAI API key is not configured.
        """
        if not config.openai_api_key:
            raise external_service_error(
                "OpenAI", "OPENAI_API_KEY environment variable is not set")

        return cls(
            openai_client=AsyncOpenAI(api_key=config.openai_api_key),
            qdrant_client=AsyncQdrantClient(
                url=config.qdrant_url,
                api_key=config.qdrant_api_key,
                timeout=config.qdrant_timeout,
            ),
        )

    async def initialize(self) -> None:
        """Initialize all services."""
        await self.vector_db.connect()

    async def shutdown(self) -> None:
        """Shutdown all services."""
        await self.vector_db.disconnect()
        await self.openai_client.close()
