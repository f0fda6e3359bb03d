"""Latency benchmark for the ask endpoint."""

import asyncio
import time
from typing import Dict, List

import httpx


async def benchmark_ask(
    base_url: str = "http://localhost:8000",
    num_questions: int = 50,
    concurrent: int = 5,
    top_k: int = 3,
) -> Dict:
    """
    Benchmark the ask endpoint.

    Args:
        base_url: Base URL of the service.
        num_questions: Total number of questions to send.
        concurrent: Number of concurrent requests.
        top_k: Chunks retrieved per question.

    Returns:
        Benchmark results.
    """
    questions = [
        "What is RAG?",
        "How are documents split into chunks?",
        "What does a vector database store?",
        "Which embedding dimension is used?",
        "How is an answer grounded?",
    ] * (num_questions // 5 + 1)
    questions = questions[:num_questions]

    latencies: List[float] = []
    errors = 0

    async def run_question(client: httpx.AsyncClient, question: str) -> None:
        nonlocal errors
        try:
            start = time.time()
            response = await client.post(
                f"{base_url}/ask",
                json={"question": question, "topK": top_k},
            )
            latency = time.time() - start

            if response.status_code == 200:
                latencies.append(latency)
            else:
                errors += 1
        except httpx.HTTPError as e:
            print(f"Error: {e}")
            errors += 1

    start_time = time.time()

    async with httpx.AsyncClient(timeout=60.0) as client:
        for i in range(0, len(questions), concurrent):
            batch = questions[i:i + concurrent]
            await asyncio.gather(*[run_question(client, q) for q in batch])

    total_time = time.time() - start_time

    if latencies:
        ordered = sorted(latencies)
        avg_latency = sum(ordered) / len(ordered)
        p50 = ordered[len(ordered) // 2]
        p95 = ordered[int(len(ordered) * 0.95)]
        p99 = ordered[int(len(ordered) * 0.99)]
    else:
        avg_latency = p50 = p95 = p99 = 0

    return {
        "total_questions": num_questions,
        "successful": len(latencies),
        "errors": errors,
        "total_time_seconds": total_time,
        "questions_per_second": num_questions / total_time if total_time > 0 else 0,
        "avg_latency_seconds": avg_latency,
        "p50_latency_seconds": p50,
        "p95_latency_seconds": p95,
        "p99_latency_seconds": p99,
    }


if __name__ == "__main__":
    import json

    print("Running ask benchmark...")

    results = asyncio.run(benchmark_ask())
    print("\nAsk Results:")
    print(json.dumps(results, indent=2))
