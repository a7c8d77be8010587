"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from src.api import auth, posts, support, themes
from src.config import get_settings
from src.database import init_db
from src.exceptions import AppError, InternalError, UnauthenticatedError
from src.services.blob_storage import UPLOADS_URL_PREFIX, get_blob_storage

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# The static mount below needs the directory to exist
get_blob_storage().ensure_dir()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    logger.info(f"Blog CMS API started ({settings.environment})")
    yield


app = FastAPI(
    title="Blog CMS API",
    description="Content management backend: accounts, posts, theme images and support tickets",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render application errors as ``{"detail": message}``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


@app.exception_handler(SQLAlchemyError)
@app.exception_handler(OSError)
async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render database and storage failures as a JSON 500."""
    logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    return JSONResponse(
        status_code=InternalError.status_code,
        content={"detail": InternalError.default_message},
    )


# Register routers
app.include_router(auth.router)
app.include_router(posts.router)
app.include_router(themes.router)
app.include_router(support.router)

app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.upload_dir), name="uploads")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
