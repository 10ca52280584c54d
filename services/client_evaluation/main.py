"""
Client Evaluation Service - Main Application
============================================

FastAPI application for client registration and evaluation scoring.

Version: 0.1.0
"""

import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from services.client_evaluation.exceptions import ServiceError
from services.client_evaluation.routes import auth, clients, evaluations
from services.client_evaluation.storage import CLIENTS, EVALUATIONS, USERS, get_store
from shared.config import StorageBackend, settings
from shared.database.mongodb import MongoDBClient
from shared.logging import bind_context, clear_context, get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse

# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="client-evaluation",
    environment=settings.environment.value,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager."""
    logger.info(
        "client_evaluation_starting",
        environment=settings.environment.value,
        port=settings.ports.client_evaluation,
        storage=settings.storage.backend.value,
    )

    if settings.storage.backend == StorageBackend.MONGODB:
        try:
            MongoDBClient.get_client()
            await MongoDBClient.create_indexes()
            logger.info("mongodb_connected")
        except Exception as e:
            logger.error("startup_failed", error=str(e))
            raise

    yield

    logger.info("client_evaluation_shutting_down")
    if settings.storage.backend == StorageBackend.MONGODB:
        await MongoDBClient.close()


# Create FastAPI application
app = FastAPI(
    title="Tierwise Client Evaluation Service",
    description="Client registration, evaluation scoring, tiering and follow-up priority",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next: Any) -> Any:
    """Bind a request id to every log line emitted while serving a request."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    bind_context(request_id=request_id, path=request.url.path)
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-ID"] = request_id
    return response


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """
    Service health check.

    Returns health status of the service and its stores.
    """
    components: dict[str, dict[str, Any]] = {}

    for collection in (CLIENTS, EVALUATIONS, USERS):
        components[collection] = await get_store(collection).health_check()

    health = HealthResponse(
        service="client-evaluation",
        version="0.1.0",
        components=components,
    )
    if not health.is_healthy:
        health.status = "degraded"

    return health


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "Tierwise Client Evaluation Service",
        "version": "0.1.0",
        "docs": "/docs",
    }


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(
    clients.router,
    prefix="/api/v1/clients",
    tags=["Clients"],
)

app.include_router(
    evaluations.router,
    prefix="/api/v1/evaluations",
    tags=["Evaluations"],
)

app.include_router(
    auth.router,
    prefix="/api/v1/auth",
    tags=["Auth"],
)


# ============================================================================
# Error Handlers
# ============================================================================


def _error_response(status_code: int, msg: str) -> JSONResponse:
    body = ErrorResponse(msg=msg, status_code=status_code)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render domain errors with their status code."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "service_error",
        status_code=exc.status_code,
        error=exc.message,
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed or incomplete request bodies as 400."""
    fields = sorted(
        {
            ".".join(str(part) for part in error["loc"] if part != "body")
            for error in exc.errors()
        }
    )
    logger.warning(
        "request_validation_failed",
        fields=fields,
        path=request.url.path,
    )
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        f"Missing or invalid fields: {', '.join(fields)}",
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    response = _error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.client_evaluation.main:app",
        host="0.0.0.0",
        port=settings.ports.client_evaluation,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
