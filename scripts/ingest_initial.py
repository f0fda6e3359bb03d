"""Script to ingest sample documents through the ingest endpoint."""

import asyncio
import os

import httpx

BASE_URL = os.environ.get("ASKDOCS_URL", "http://localhost:8000")

SAMPLE_DOCUMENTS = [
    {
        "id": "intro-to-rag",
        "title": "Introduction to RAG Systems",
        "content": "Retrieval-Augmented Generation (RAG) combines information retrieval with language models. "
        "It lets a system answer from an external knowledge base instead of model memory alone.\n\n"
        "A RAG system has a retriever that finds relevant chunks and a generator that writes the answer "
        "from those chunks only.",
    },
    {
        "id": "chunking-basics",
        "title": "Chunking Documents",
        "content": "Documents are split on blank lines into paragraphs. Long paragraphs are split on sentence "
        "boundaries so every chunk stays under the size limit.\n\n"
        "Short pieces are merged with their neighbours so tiny fragments do not pollute the index.",
    },
    {
        "id": "vector-databases",
        "title": "Vector Databases for Semantic Search",
        "content": "Vector databases store high-dimensional vectors and enable fast similarity search. "
        "Popular vector databases include Qdrant, Pinecone, and Weaviate. They use algorithms like HNSW "
        "for fast approximate nearest neighbor search.",
    },
]


async def ingest_sample_documents() -> None:
    """Ingest sample documents and ask one question about them."""
    async with httpx.AsyncClient(timeout=120.0) as client:
        response = await client.post(
            f"{BASE_URL}/ingest", json={"documents": SAMPLE_DOCUMENTS})
        response.raise_for_status()
        result = response.json()
        print(
            f"Ingested {result['ingestedDocuments']} documents "
            f"({result['ingestedChunks']} chunks)"
        )

        response = await client.post(
            f"{BASE_URL}/ask", json={"question": "What is a RAG system?", "topK": 3})
        response.raise_for_status()
        answer = response.json()
        print(f"\nAnswer: {answer['answer']}")
        for source in answer["sources"]:
            print(f"  - {source['title']} ({source['docId']})")


if __name__ == "__main__":
    asyncio.run(ingest_sample_documents())
