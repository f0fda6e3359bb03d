"""Error kinds raised by the ingest and ask pipelines."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories, each mapped to an HTTP status code."""

    VALIDATION = "validation"
    EXTERNAL_SERVICE = "external_service"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.EXTERNAL_SERVICE: 502,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class RAGError(Exception):
    """
    Raised by any askdocs operation that fails.

    Callers dispatch on ``kind`` rather than on the exception type.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        provider: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        if provider:
            message = f"{provider} error: {message}"
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.provider = provider
        self.cause = cause

    @property
    def status_code(self) -> int:
        return self.kind.status_code


def external_service_error(
    provider: str, message: str, cause: Optional[BaseException] = None
) -> RAGError:
    """Build an error for an embedding, index or generation provider failure."""
    return RAGError(ErrorKind.EXTERNAL_SERVICE, message, provider=provider, cause=cause)


def validation_error(message: str) -> RAGError:
    """Build an error for malformed caller input."""
    return RAGError(ErrorKind.VALIDATION, message)


def not_found_error(message: str = "Resource not found") -> RAGError:
    """Build an error for a missing resource."""
    return RAGError(ErrorKind.NOT_FOUND, message)
