"""FastAPI application entry point.

Configures the application with logging, metrics, exception handling,
health checks, and the search and preference routes.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from src import __version__
from src.api.deps import AppSettings, VectorStoreDep, close_services
from src.api.page import router as page_router
from src.api.routes import preferences_router, router
from src.config import get_settings
from src.exceptions import ErrorCode, ReviewSearchError
from src.logging_config import get_logger, setup_logging
from src.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)

STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.PREFERENCES_NOT_FOUND: 404,
    ErrorCode.COLLECTION_EXISTS: 409,
}


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level)
    logger.info(
        "Starting review search",
        extra={
            "version": __version__,
            "environment": settings.environment.value,
        },
    )

    yield

    await close_services()
    logger.info("Shutting down review search")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Music Review Search",
        description="Semantic search over music reviews and preference capture",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(MetricsMiddleware)
    app.add_exception_handler(ReviewSearchError, review_search_exception_handler)

    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/ready", readiness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/live", liveness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], tags=["Metrics"])

    app.include_router(router)
    app.include_router(preferences_router)
    app.include_router(page_router)

    return app


async def review_search_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert ReviewSearchError into a JSON error response.

    Details are logged but never sent to the client.
    """
    if not isinstance(exc, ReviewSearchError):
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "code": ErrorCode.INTERNAL_ERROR.value},
        )

    status_code = get_status_code(exc.code)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        f"Request failed: {exc.message}",
        extra={
            "error_code": exc.code.value,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    return JSONResponse(
        status_code=status_code,
        content=exc.to_dict(),
    )


def get_status_code(code: ErrorCode) -> int:
    """Map an error code to an HTTP status code, defaulting to 500."""
    return STATUS_CODES.get(code, 500)


async def health_check() -> dict[str, Any]:
    """Basic health check endpoint.

    Returns:
        Health status with version and timestamp.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def readiness_check(store: VectorStoreDep, settings: AppSettings) -> dict[str, Any]:
    """Kubernetes readiness probe.

    Ready when the reviews collection is reachable in the vector store.

    Returns:
        Readiness status with component checks.
    """
    checks: dict[str, str] = {"config": "ok"}

    collection = settings.qdrant.collection_name
    try:
        exists = await store.collection_exists(collection)
        checks["vector_store"] = "ok" if exists else "missing_collection"
    except ReviewSearchError as e:
        logger.warning(
            f"Vector store not ready: {e.message}",
            extra={"collection": collection},
        )
        checks["vector_store"] = "error"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def liveness_check() -> dict[str, str]:
    """Kubernetes liveness probe.

    Returns:
        Liveness status.
    """
    return {"status": "alive"}


async def metrics_endpoint() -> Response:
    """Prometheus scrape endpoint."""
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


# Create the application instance
app = create_app()
