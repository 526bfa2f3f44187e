# ============================================================================
# FILE: catalog_api/main.py
# ============================================================================
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from catalog_api.api.v1.router import api_router
from catalog_api.core.exceptions import register_exception_handlers
from catalog_api.core.logging import setup_logging
from catalog_api.config import settings, check_settings
import logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

check_settings(settings)

# Create FastAPI app instance
app = FastAPI(
    title=settings.APP_NAME,
    description="Music catalog with artists, albums, songs and collaborative playlists",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API v1 router
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    """Create database tables on startup"""
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})")
    from catalog_api.db import models  # noqa: F401 registers tables on Base.metadata
    from catalog_api.db.base import Base
    from catalog_api.db.session import engine
    Base.metadata.create_all(bind=engine)


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info(f"Shutting down {settings.APP_NAME}")


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/")
async def root():
    return {"message": settings.APP_NAME, "version": "1.0.0", "docs": "/docs"}
