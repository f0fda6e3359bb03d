"""Pydantic models for the ingest and ask API."""

from typing import List, Optional

from pydantic import Field

from askdocs.models.document import CamelModel, Document


class DocumentCreate(Document):
    """Model for a document submitted for ingestion."""

    id: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-zA-Z0-9_-]+$")
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=50000)


class IngestRequest(CamelModel):
    """Model for an ingest request."""

    documents: List[DocumentCreate] = Field(..., min_length=1, max_length=10)


class AskRequest(CamelModel):
    """Model for an ask request."""

    question: str = Field(..., min_length=1, max_length=1000)
    top_k: int = Field(default=3, ge=1, le=10, strict=True)


class ErrorResponse(CamelModel):
    """Model for an error response."""

    error: str
    details: Optional[str] = None
