"""Query processing service for RAG questions."""

import logging
import time

from askdocs.models.document import AskResult
from askdocs.monitoring.metrics import (
    ask_counter,
    ask_errors_total,
    ask_latency_seconds,
    ask_no_match_total,
)
from askdocs.services.answer_composer import (
    NO_DOCUMENTS_ANSWER,
    AnswerComposer,
    extract_sources,
)
from askdocs.services.embedding import EmbeddingService
from askdocs.services.retriever import Retriever

logger = logging.getLogger(__name__)


class QueryProcessor:
    """Answers questions from the indexed documents."""

    def __init__(
        self,
        embedding_service: EmbeddingService,
        retriever: Retriever,
        answer_composer: AnswerComposer,
    ) -> None:
        """
        Initialize query processor.

        Args:
            embedding_service: Embedding generation service.
            retriever: Similarity retriever over the vector index.
            answer_composer: Prompt builder and answer generator.
        """
        self.embedding_service = embedding_service
        self.retriever = retriever
        self.answer_composer = answer_composer

    async def ask(self, question: str, top_k: int = 3) -> AskResult:
        """
        Answer a question from the top_k most similar chunks.

        Args:
            question: User question.
            top_k: Number of chunks to retrieve.

        Returns:
            Answer text and the deduplicated source documents.

        Raises:
            RAGError: If embedding, retrieval or generation fails.
        """
        start_time = time.time()
        ask_counter.inc()
        logger.info(f'Question: "{question[:100]}" (topK: {top_k})')

        try:
            query_embedding = await self.embedding_service.generate_embedding(question)
            matches = await self.retriever.retrieve(query_embedding, top_k)

            if not matches:
                logger.info("No matches found, returning no documents message")
                ask_no_match_total.inc()
                return AskResult(answer=NO_DOCUMENTS_ANSWER, sources=[])

            answer = await self.answer_composer.generate_answer(question, matches)
            sources = extract_sources(matches)
        except Exception:
            ask_errors_total.inc()
            raise
        finally:
            ask_latency_seconds.observe(time.time() - start_time)

        logger.info(f"Answer generated, {len(sources)} source(s) cited")
        return AskResult(answer=answer, sources=sources)
