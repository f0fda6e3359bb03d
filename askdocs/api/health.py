"""Health check utilities."""

from typing import Dict

from askdocs.core.dependencies import ServiceContainer
from askdocs.services.health import check_openai, check_qdrant


async def check_all_dependencies(services: ServiceContainer) -> Dict:
    """
    Check all service dependencies.

    Args:
        services: Service container holding the client handles.

    Returns:
        Dictionary with overall status and individual service statuses.
    """
    statuses = {
        "qdrant": await check_qdrant(services.vector_db),
        "openai": await check_openai(services.openai_client),
    }
    overall_status = "healthy"
    if any(status.get("status") != "healthy" for status in statuses.values()):
        overall_status = "unhealthy"

    return {"status": overall_status, "services": statuses}


async def check_readiness(services: ServiceContainer) -> Dict:
    """
    Check service readiness.

    Only the vector index gates readiness; generation failures surface per
    request.

    Args:
        services: Service container holding the client handles.

    Returns:
        Readiness status dictionary.
    """
    qdrant_status = await check_qdrant(services.vector_db)
    ready = qdrant_status.get("status") == "healthy"

    return {"ready": ready, "qdrant": ready}
