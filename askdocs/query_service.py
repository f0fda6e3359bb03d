"""Query Service: ingest and ask endpoints for the RAG system."""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from askdocs.api.health import check_all_dependencies, check_readiness
from askdocs.core.config import settings
from askdocs.core.dependencies import ServiceContainer
from askdocs.core.exceptions import ErrorKind, RAGError
from askdocs.models.document import AskResult, IngestResult
from askdocs.models.document_api import AskRequest, ErrorResponse, IngestRequest

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


def error_response(
    message: str, status_code: int, details: Optional[str] = None
) -> JSONResponse:
    """Build a JSON error body of the form {"error", "details"?}."""
    body = ErrorResponse(error=message, details=details)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True))


async def handle_rag_error(request: Request, exc: RAGError) -> JSONResponse:
    """Map a RAGError onto a response by its kind."""
    if exc.kind == ErrorKind.INTERNAL:
        logger.error(f"Unexpected error: {exc.message}")
        return error_response("Internal server error", exc.status_code)

    logger.error(f"Operational error ({exc.kind.value}): {exc.message}")
    return error_response(exc.message, exc.status_code)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report the first validation problem as a 400."""
    errors = exc.errors()
    first = errors[0] if errors else {"loc": (), "msg": "Invalid request"}

    if first.get("type") == "json_invalid":
        return error_response("Invalid JSON in request body", 400)

    path = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{path}: {first['msg']}" if path else first["msg"]
    logger.warning(f"Validation error: {message}")
    return error_response(f"Validation error: {message}", 400)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Hide unexpected failures behind a generic 500."""
    logger.exception(f"Unexpected error during {request.url.path}: {str(exc)}")
    return error_response("Internal server error", 500)


def get_services(request: Request) -> ServiceContainer:
    """Return the container built at startup."""
    return request.app.state.services


def create_app(
    container_factory: Callable[[], ServiceContainer] = ServiceContainer.from_settings,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        container_factory: Builds the service container when the app starts.

    Returns:
        Configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        services = container_factory()
        await services.initialize()
        app.state.services = services
        logger.info("Query Service started")
        yield
        await services.shutdown()
        logger.info("Query Service stopped")

    app = FastAPI(title="Query Service", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RAGError, handle_rag_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    @app.post("/ingest", response_model=IngestResult)
    async def ingest(
        request: IngestRequest, services: ServiceContainer = Depends(get_services)
    ) -> IngestResult:
        """
        Ingest documents, replacing any earlier version of each.

        Args:
            request: Documents to ingest.

        Returns:
            Counts of ingested documents and chunks.
        """
        logger.info("Ingest request received")
        return await services.ingest_pipeline.ingest(request.documents)

    @app.post("/ask", response_model=AskResult)
    async def ask(
        request: AskRequest, services: ServiceContainer = Depends(get_services)
    ) -> AskResult:
        """
        Answer a question from the ingested documents.

        Args:
            request: Question and number of chunks to retrieve.

        Returns:
            Answer with its sources.
        """
        logger.info("Ask request received")
        return await services.query_processor.ask(request.question, top_k=request.top_k)

    @app.get("/health")
    async def health(services: ServiceContainer = Depends(get_services)) -> dict:
        """
        Health check endpoint with dependency verification.

        Returns:
            Health status with service dependencies.
        """
        result = await check_all_dependencies(services)
        return {"service": settings.service_name, **result}

    @app.get("/ready")
    async def readiness(services: ServiceContainer = Depends(get_services)) -> dict:
        """
        Readiness check endpoint.

        Returns:
            Readiness status.
        """
        result = await check_readiness(services)
        return {"service": settings.service_name, **result}

    @app.get("/metrics")
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.service_port)


if __name__ == "__main__":
    run()
