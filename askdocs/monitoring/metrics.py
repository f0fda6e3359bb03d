"""Prometheus metrics for monitoring."""

from prometheus_client import Counter, Histogram

ask_counter = Counter("rag_asks_total",
                      "Total number of questions answered")
ask_errors_total = Counter(
    "rag_ask_errors_total", "Total number of ask errors")
ask_no_match_total = Counter(
    "rag_ask_no_match_total", "Questions answered without any index match")
ask_latency_seconds = Histogram(
    "rag_ask_latency_seconds", "Ask latency in seconds", buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0])

ingested_documents_total = Counter(
    "rag_ingested_documents_total", "Total number of documents ingested")
ingested_chunks_total = Counter(
    "rag_ingested_chunks_total", "Total number of chunks upserted")
ingest_errors_total = Counter(
    "rag_ingest_errors_total", "Total number of ingest errors")
ingest_duration_seconds = Histogram(
    "rag_ingest_duration_seconds", "Ingest request duration", buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0])
stale_delete_failures_total = Counter(
    "rag_stale_delete_failures_total", "Stale chunk deletions that failed and were skipped")
