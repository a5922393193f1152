"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from strix.api import auth, licitations
from strix.config import get_settings
from strix.migrations import run_migrations
from strix.services.exceptions import StrixError, UnauthenticatedError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    # Startup: bring the schema up to date before serving requests
    if settings.run_migrations:
        run_migrations(settings.database_url)
    logger.info(f"Server running at http://{settings.host}:{settings.port}")
    yield


app = FastAPI(
    title="Strix API",
    description="Strix Backend API: users and licitations",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api-docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str, error: str | None = None, headers=None):
    """Build the error envelope."""
    content = {"status": "error", "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _internal_error(exc: Exception) -> JSONResponse:
    # Echo the underlying message only outside production
    detail = None if settings.is_production else str(exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", detail)


@app.exception_handler(StrixError)
async def strix_error_handler(request: Request, exc: StrixError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _internal_error(exc)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return error_response(exc.status_code, exc.message, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation error", errors)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _internal_error(exc)


# Register routers
app.include_router(auth.router)
app.include_router(licitations.router)


@app.get("/hello")
async def hello():
    """Hello world endpoint."""
    return {"message": "Hello World!"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
