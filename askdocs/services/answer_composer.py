"""Grounding prompt assembly and answer generation."""

import logging
from typing import List

from askdocs.models.document import Match, Source
from askdocs.services.llm import LLMService

logger = logging.getLogger(__name__)

NO_DOCUMENTS_ANSWER = (
    "I don't have any documents to answer this question. "
    "Please ingest some documents first."
)
NO_ANSWER_FALLBACK = "Unable to generate an answer. Please try again."
INSUFFICIENT_INFO_ANSWER = "I don't have enough information to answer this question."

SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions based only on the provided context. \n"
    "Be concise and accurate. If the answer cannot be found in the context, clearly state "
    "that you don't have enough information to answer the question.\n"
    "Do not make up information or use knowledge outside of the provided context."
)


def build_prompt(question: str, matches: List[Match]) -> str:
    """
    Build the user prompt from the question and retrieved chunks.

    Args:
        question: User question.
        matches: Retrieved chunks in index order.

    Returns:
        Prompt listing each chunk with its title and relevance, then the question.
    """
    if not matches:
        return (
            f"Question: {question}\n\n"
            "No context documents were found. "
            "Please indicate that you cannot answer without relevant documents."
        )

    context = "\n\n".join(
        f'[{idx}] "{match.metadata.title}" (relevance: {match.score * 100:.1f}%):\n'
        f"{match.metadata.chunk_text}"
        for idx, match in enumerate(matches, start=1)
    )

    return (
        "Based on the following context documents, answer the question. "
        f'If the answer cannot be found in the context, say "{INSUFFICIENT_INFO_ANSWER}"\n\n'
        f"Context:\n{context}\n\n"
        f"Question: {question}"
    )


def extract_sources(matches: List[Match]) -> List[Source]:
    """
    Deduplicate matches by document id, keeping first-seen order.

    The first match for a document decides its title.
    """
    sources = {}
    for match in matches:
        doc_id = match.metadata.doc_id
        if doc_id not in sources:
            sources[doc_id] = Source(doc_id=doc_id, title=match.metadata.title)
    return list(sources.values())


class AnswerComposer:
    """Generates an answer grounded in retrieved chunks."""

    def __init__(self, llm_service: LLMService) -> None:
        self.llm_service = llm_service

    async def generate_answer(self, question: str, matches: List[Match]) -> str:
        """
        Generate an answer to the question from the matched chunks.

        Args:
            question: User question.
            matches: Retrieved chunks.

        Returns:
            Stripped answer text, or a fixed fallback string.
        """
        if not matches:
            return NO_DOCUMENTS_ANSWER

        user_prompt = build_prompt(question, matches)
        text = await self.llm_service.complete(SYSTEM_PROMPT, user_prompt)

        if not isinstance(text, str) or not text.strip():
            logger.warning("Generation returned no text, using fallback answer")
            return NO_ANSWER_FALLBACK

        return text.strip()
