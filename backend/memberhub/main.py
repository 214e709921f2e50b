"""
MemberHub API

Main FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from memberhub.config import settings
from memberhub.middleware import ErrorHandlerMiddleware
from memberhub.routes import bookings, profile_picture, users
from memberhub.services.cleanup_scheduler import (
    get_scheduler_status,
    start_cleanup_scheduler,
    stop_cleanup_scheduler,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    start_cleanup_scheduler()
    yield
    # Shutdown
    stop_cleanup_scheduler()

app = FastAPI(
    title="MemberHub API",
    description="Membership management service with validated profile pictures",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Register routers
app.include_router(profile_picture.router, prefix="/api/upload", tags=["Profile Pictures"])
app.include_router(users.router, prefix="/api", tags=["Users"])
app.include_router(bookings.router, prefix="/api", tags=["Bookings"])


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": "MemberHub API",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """
    Detailed health check endpoint.

    Returns service health status and storage sweeper state.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0",
        "cleanup": get_scheduler_status(),
    }
