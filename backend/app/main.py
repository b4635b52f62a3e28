"""
Skill Gap API - Main Application Entry Point

This module initializes the FastAPI application with:
- Logging configuration
- Database connection and schema initialization
- CORS middleware for frontend communication
- Prometheus metrics
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (startup)
    ├── CORS Middleware
    ├── Prometheus Middleware (+ /metrics)
    └── API Router
        ├── /auth - Session cookie login/logout
        └── /skill-gap - Skill gap analysis, summary and roadmaps
"""

from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import get_settings
from app.database import init_db
from app.api import api_router
from app.middleware import setup_metrics

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Initialize database tables

    Yields:
        Control to the application during its runtime
    """
    await init_db()
    logger.info("Skill gap API started")
    yield
    logger.info("Skill gap API stopped")


app = FastAPI(
    title="Skill Gap API",
    description="Skill gap and career fit analysis for learners",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_metrics(app)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
