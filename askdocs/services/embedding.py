"""OpenAI embedding generation service."""

import logging
from typing import List, Optional

from openai import AsyncOpenAI

from askdocs.core.config import settings
from askdocs.core.exceptions import external_service_error

logger = logging.getLogger(__name__)

PROVIDER = "OpenAI"


class EmbeddingService:
    """Service for generating embeddings using OpenAI."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: Optional[str] = None,
        dimensions: Optional[int] = None,
        batch_requests: Optional[bool] = None,
    ) -> None:
        """
        Initialize the embedding service.

        Args:
            client: OpenAI client handle owned by the service container.
            model: Embedding model name.
            dimensions: Vector dimension requested from the model.
            batch_requests: Send all texts in one request instead of one per text.
        """
        self.client = client
        self.model = model or settings.embedding_model
        self.dimensions = dimensions or settings.embedding_dimensions
        self.batch_requests = (
            settings.embedding_batch_requests if batch_requests is None else batch_requests
        )

    async def _create(self, inputs: List[str]) -> List[List[float]]:
        response = await self.client.embeddings.create(
            model=self.model,
            input=inputs,
            dimensions=self.dimensions,
        )
        if len(response.data) != len(inputs):
            raise ValueError(
                f"Expected {len(inputs)} embeddings, received {len(response.data)}")
        data = sorted(response.data, key=lambda item: item.index)
        return [item.embedding for item in data]

    async def generate_embeddings(self, texts: List[str]) -> List[List[float]]:
        """
        Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed.

        Returns:
            List of embedding vectors, in the same order as texts.

        Raises:
            RAGError: If embedding generation fails.
        """
        if not texts:
            return []

        logger.debug(
            f"Embedding {len(texts)} texts "
            f"({'batched' if self.batch_requests else 'one request per text'})"
        )
        try:
            if self.batch_requests:
                return await self._create(texts)

            embeddings = []
            for text in texts:
                vectors = await self._create([text])
                embeddings.append(vectors[0])
            return embeddings
        except Exception as e:
            raise external_service_error(
                PROVIDER, f"Failed to generate embeddings: {str(e)}", cause=e) from e

    async def generate_embedding(self, text: str) -> List[float]:
        """
        Generate embedding for a single text.

        Args:
            text: Text string to embed.

        Returns:
            Embedding vector.
        """
        try:
            vectors = await self._create([text])
            return vectors[0]
        except Exception as e:
            raise external_service_error(
                PROVIDER, f"Failed to generate embedding: {str(e)}", cause=e) from e
