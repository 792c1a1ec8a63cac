"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.middleware.base import BaseHTTPMiddleware

from health_registry import __version__
from health_registry.config import settings
from health_registry.database import async_session_maker, engine, init_models
from health_registry.errors import RegistryError, ValidationError
from health_registry.repositories import RecordStore
from health_registry.routes import benefits, consultations, directory, medical_images, registration
from health_registry.services.hospital_seed import seed_hospitals

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events for startup/shutdown."""
    # Startup: create tables, then seed the hospital directory on first run
    await init_models(engine)
    store = RecordStore(async_session_maker)
    if settings.seed_hospitals_on_startup:
        await seed_hospitals(store)
    app.state.record_store = store

    yield  # Application runs here

    await engine.dispose()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        return response


def error_body(exc: RegistryError) -> dict:
    body = {"success": False, "message": exc.message}
    if isinstance(exc, ValidationError) and exc.missing_fields:
        body["missingFields"] = [to_camel(field) for field in exc.missing_fields]
    return body


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies (wrong types, bad JSON) are reported like missing fields."""
    fields = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"success": False, "message": "Malformed JSON body."},
            )
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if location:
            fields.append(".".join(location))
    message = f"Invalid values for: {', '.join(fields)}." if fields else "Invalid request body."
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": message},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s failed unexpectedly", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Internal server error."},
    )


app = FastAPI(
    title="Health Registry",
    description="Digital health identity registration, benefits and teleconsultation",
    version=__version__,
    lifespan=lifespan,
)

app.add_exception_handler(RegistryError, registry_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

# Security headers middleware (applied to all responses)
app.add_middleware(SecurityHeadersMiddleware)

# CORS middleware for frontend
# Parse comma-separated origins from config
_cors_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type"],
)

# Include API routers
app.include_router(registration.router, prefix="/api")
app.include_router(benefits.router, prefix="/api")
app.include_router(directory.router, prefix="/api")
app.include_router(medical_images.router, prefix="/api")
app.include_router(consultations.router, prefix="/api")


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": "Health Registry API",
        "version": __version__,
        "docs": "/docs",
    }
