"""
@file health.py
@brief System health checks and status monitoring

@details
Provides health checks for:
- PostgreSQL database connectivity (critical: projects and areas live there)
- Redis cache connectivity (optional: only area listings are cached)

Returns appropriate status values for maintenance scenarios.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

import logging
from typing import Dict, Any
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from starlette.concurrency import run_in_threadpool
from app.db.database import SessionLocal
from app.core.cache import cache

logger = logging.getLogger(__name__)


class HealthStatus:
    """Health status indicator for system components"""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


def _ping_database():
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    finally:
        db.close()


async def check_database() -> Dict[str, Any]:
    """
    @brief Check PostgreSQL database connectivity

    @return Dict with status, message and component name
    @details
    Runs a trivial query in the thread pool.
    """
    try:
        await run_in_threadpool(_ping_database)
        return {
            "status": HealthStatus.HEALTHY,
            "message": "PostgreSQL database is healthy",
            "component": "database"
        }
    except OperationalError as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": HealthStatus.UNHEALTHY,
            "message": "PostgreSQL database is unavailable",
            "component": "database",
            "error": str(e)
        }
    except Exception as e:
        logger.error(f"Unexpected database health check error: {e}")
        return {
            "status": HealthStatus.DEGRADED,
            "message": "Database health check encountered an error",
            "component": "database",
            "error": str(e)
        }


async def check_cache() -> Dict[str, Any]:
    """
    @brief Check Redis cache connectivity

    @return Dict with status, message
    @details
    Redis is optional; an unreachable cache only degrades the service.
    """
    if not cache.client:
        return {
            "status": HealthStatus.DEGRADED,
            "message": "Redis cache is not initialized (running without cache)",
            "component": "cache"
        }
    try:
        await cache.client.ping()
        return {
            "status": HealthStatus.HEALTHY,
            "message": "Redis cache is healthy",
            "component": "cache"
        }
    except Exception as e:
        logger.warning(f"Cache health check failed: {e}")
        return {
            "status": HealthStatus.DEGRADED,
            "message": "Redis cache is unavailable (running in degraded mode)",
            "component": "cache",
            "error": str(e)
        }


async def get_system_health() -> Dict[str, Any]:
    """
    @brief Get comprehensive system health status

    @return Dict with overall status and component details
    @details
    - HEALTHY: all components operational
    - DEGRADED: database OK, cache unavailable
    - UNHEALTHY: database unavailable (critical failure)
    """
    db_status = await check_database()
    cache_status = await check_cache()

    if db_status["status"] == HealthStatus.UNHEALTHY:
        overall_status = HealthStatus.UNHEALTHY
    elif db_status["status"] == HealthStatus.DEGRADED or \
         cache_status["status"] == HealthStatus.DEGRADED:
        overall_status = HealthStatus.DEGRADED
    else:
        overall_status = HealthStatus.HEALTHY

    return {
        "status": overall_status,
        "components": {
            "database": db_status,
            "cache": cache_status
        },
        "message": get_status_message(overall_status)
    }


def get_status_message(status: str) -> str:
    """Get human-readable status message"""
    messages = {
        HealthStatus.HEALTHY: "System is operational",
        HealthStatus.DEGRADED: "System is running without cache (area listings are served from the database)",
        HealthStatus.UNHEALTHY: "System is in maintenance mode (database unavailable)"
    }
    return messages.get(status, "Unknown status")
