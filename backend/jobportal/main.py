from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobportal.core.config import settings
from jobportal.core.logging import get_logger, setup_logging
from jobportal.db.base import Base
from jobportal.db.session import engine

# Import all models so SQLAlchemy can discover them for table creation
from jobportal.models import User, Candidate, Recruiter, Job, JobApplication  # noqa: F401

from jobportal.api.api import api_router
from jobportal.api.errors import register_exception_handlers

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create database tables on startup."""
    setup_logging()
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.APP_NAME} started")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Job portal: candidates, recruiters, job postings and applications",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
)

# CORS Middleware - allowlist from env (comma-separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.BACKEND_CORS_ORIGINS.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials="*" not in ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {"message": f"Welcome to {settings.APP_NAME} API"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include API router with /api/v1 prefix
app.include_router(api_router, prefix="/api/v1")
