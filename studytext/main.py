"""FastAPI application entry point for the studytext API."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studytext.config import configure_logging, get_settings
from studytext.database import create_tables, dispose_engine, initialize_database
from studytext.exceptions import StudyTextError
from studytext.infrastructure.reading.routers import annotations, study_documents

settings = get_settings()

configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    initialize_database(settings)
    create_tables()

    yield

    logger.info("Shutting down, disposing database engine")
    dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StudyTextError)
async def studytext_error_handler(request: Request, exc: StudyTextError) -> JSONResponse:
    """Translate application errors into JSON responses with their status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(annotations.router, prefix=settings.API_V1_PREFIX)
app.include_router(study_documents.router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get(settings.API_V1_PREFIX + "/")
async def api_root() -> dict[str, str]:
    """API v1 root, listing the resource groups."""
    return {
        "version": settings.VERSION,
        "annotations": f"{settings.API_V1_PREFIX}/summaries/{{summary_id}}/annotations",
        "study_documents": (
            f"{settings.API_V1_PREFIX}/students/{{student_id}}/summaries/{{summary_id}}"
            "/study-document"
        ),
    }
