"""Similarity retrieval over the vector index."""

import logging
from typing import List

from askdocs.models.document import Match
from askdocs.services.vector_db import VectorDBService

logger = logging.getLogger(__name__)


class Retriever:
    """Fetches the nearest chunks for a query vector."""

    def __init__(self, vector_db: VectorDBService) -> None:
        self.vector_db = vector_db

    async def retrieve(self, query_embedding: List[float], top_k: int) -> List[Match]:
        """
        Query the index for the top_k nearest chunks.

        Matches keep the index order (descending similarity) and are not
        re-sorted.

        Args:
            query_embedding: Query embedding vector.
            top_k: Number of matches requested.

        Returns:
            Normalized matches, possibly fewer than top_k.
        """
        logger.info(f"Querying index for top {top_k} matches")
        matches = await self.vector_db.search(query_embedding, top_k=top_k)
        logger.info(f"Found {len(matches)} matches")

        for idx, match in enumerate(matches, start=1):
            logger.info(f"Match {idx}: {match.metadata.doc_id} (score: {match.score:.4f})")

        return matches
