"""FastAPI application for the MasterClass Certificates API."""

from contextlib import asynccontextmanager

import fastapi
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.logger import configure_logging, get_logger
from core.middleware import SecurityHeadersMiddleware
from core.telemetry import SERVICE_VERSION, RequestLoggingMiddleware
from routes import certificates_router, health_router

configure_logging()
logger = get_logger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for unhandled exceptions."""
    logger.exception(
        "unhandled.exception",
        exc_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(
        status_code=500,
        content={"message": "Ocurrió un error inesperado. Intente nuevamente."},
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handler for request validation errors."""
    if not isinstance(exc, RequestValidationError):
        return JSONResponse(status_code=500, content={"message": "Unexpected error"})

    logger.warning(
        "request.validation_error",
        path=request.url.path,
        method=request.method,
        error_count=len(exc.errors()),
    )
    return JSONResponse(
        status_code=422,
        content={
            "message": "Solicitud inválida.",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Log the roster location at startup; the roster itself is read per request."""
    settings = get_settings()
    roster_file = settings.roster_file
    if not roster_file.is_file():
        logger.warning("roster.missing_at_startup", path=str(roster_file))
    logger.info(
        "init.complete",
        roster_path=str(roster_file),
        certificate_filename=settings.certificate_filename,
    )
    yield


_settings = get_settings()

app = fastapi.FastAPI(
    title="MasterClass Certificates API",
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if _settings.enable_docs or _settings.debug else None,
    redoc_url="/redoc" if _settings.enable_docs or _settings.debug else None,
    openapi_url=("/openapi.json" if _settings.enable_docs or _settings.debug else None),
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(SecurityHeadersMiddleware)

if _settings.allowed_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["Content-Disposition", "X-Request-Id"],
        max_age=600,
    )

# Outermost, so the request line also covers CORS preflights and rejections.
app.add_middleware(RequestLoggingMiddleware)

app.include_router(health_router)
app.include_router(certificates_router)
