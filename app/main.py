"""
@file main.py
@brief FastAPI application factory and root endpoint.
@details
Initializes the PAFS FastAPI application with:
- Logging configuration
- Database initialization
- Middleware setup (CORS, Error handling)
- Router registration (API, Health)
- Exception handlers for domain and infrastructure errors

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException

# Internal modules
from app import __version__
from app.core.logging import setup_logging
from app.core import exceptions
from app.core.errors import InvalidLevelError
from app.core.middleware import DatabaseErrorMiddleware
from app.core.cache import cache
from app.api import routes
from app.api.endpoints import health
from app.db.seed import initialize_database

# Configure logging
logger = setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    @brief Application lifecycle manager
    @details
    Handles startup and shutdown events:
    - Database initialization
    - Redis connection
    """
    # Startup
    logger.info("=" * 60)
    logger.info("Starting PAFS API...")
    logger.info("=" * 60)

    # Initialize Database
    try:
        logger.info("Initializing database...")
        if initialize_database():
             logger.info("✓ Database initialization completed")
        else:
             logger.warning("⚠ Database initialization encountered issues")
    except Exception as e:
        logger.error(f"✗ Database initialization failed: {e}", exc_info=True)

    # Connect Cache
    await cache.connect()

    yield

    # Shutdown
    await cache.close()
    logger.info("PAFS API shutdown completed")


## @brief FastAPI application instance
app = FastAPI(
    title="PAFS API - Project Application and Funding Service",
    version=__version__,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url=None
)

# --------------------------------------------------------------------------
# Middleware
# --------------------------------------------------------------------------

# CORS
# Production Note: Restrict allow_origins in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Database Error Handling
app.add_middleware(DatabaseErrorMiddleware)


# --------------------------------------------------------------------------
# Routers
# --------------------------------------------------------------------------

app.include_router(health.router)
app.include_router(routes.router)


# --------------------------------------------------------------------------
# Exception Handlers
# --------------------------------------------------------------------------

app.add_exception_handler(HTTPException, exceptions.http_exception_handler)
app.add_exception_handler(RequestValidationError, exceptions.validation_exception_handler)
app.add_exception_handler(InvalidLevelError, exceptions.invalid_level_handler)
app.add_exception_handler(IntegrityError, exceptions.integrity_error_handler)
app.add_exception_handler(Exception, exceptions.general_exception_handler)


@app.get("/")
def read_root():
    """
    @brief Service identification and entry points
    """
    return {
        "service": "PAFS API",
        "version": __version__,
        "docs": "/api/docs",
        "health": "/health",
    }
