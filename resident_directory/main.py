# resident_directory/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from resident_directory.api.middleware import CorrelationIdMiddleware, RequestAuditMiddleware
from resident_directory.api.routers import health, residents
from resident_directory.application.exceptions import ApplicationError, StorageUnavailableError
from resident_directory.config.logging import configure_logging
from resident_directory.config.settings import get_settings
from resident_directory.domain.exceptions import (
    DomainError,
    DomainValidationError,
    DuplicateResidentError,
    MalformedPayloadError,
    ResidentNotFoundError,
)
from resident_directory.infrastructure.database.session import create_schema, get_engine

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    use_database = settings.store_backend == "database"
    if use_database and settings.create_schema_on_startup:
        await create_schema(get_engine())
        logger.info("schema_ready")
    yield
    if use_database:
        await get_engine().dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CORS -> CorrelationId -> RequestAudit.
app.add_middleware(RequestAuditMiddleware)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainValidationError)
async def domain_validation_error_handler(request, exc: DomainValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message, "fields": list(exc.fields)})


@app.exception_handler(DuplicateResidentError)
async def duplicate_resident_error_handler(request, exc: DuplicateResidentError):
    return JSONResponse(status_code=409, content={"detail": exc.message, "field": exc.field})


@app.exception_handler(ResidentNotFoundError)
async def resident_not_found_error_handler(request, exc: ResidentNotFoundError):
    return JSONResponse(status_code=404, content={"detail": "Resident not found"})


@app.exception_handler(MalformedPayloadError)
async def malformed_payload_error_handler(request, exc: MalformedPayloadError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(StorageUnavailableError)
async def storage_unavailable_error_handler(request, exc: StorageUnavailableError):
    logger.error("storage_unavailable", extra={"error": exc.message})
    return JSONResponse(status_code=503, content={"detail": "Resident store unavailable"})


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    logger.exception("unexpected_error")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /api/residents/health, /api/residents
app.include_router(health.router)
app.include_router(health.router, prefix="/api/residents")
app.include_router(residents.router, prefix="/api/residents")
