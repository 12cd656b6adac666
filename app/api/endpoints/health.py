"""
@file health.py
@brief Health check API endpoints
@details
Provides endpoints for monitoring system status, readiness, and liveness.
Project validation needs the database; the cache is optional, so a
degraded system still reports ready.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from app.core.health import get_system_health, HealthStatus

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """
    @brief Get system health status

    @details
    Returns 503 only when the database is unavailable.
    """
    health = await get_system_health()

    if health["status"] == HealthStatus.UNHEALTHY:
        return JSONResponse(
            status_code=503,
            content={
                "status": health["status"],
                "message": health["message"],
                "components": health["components"],
                "note": "System is in maintenance mode. Projects cannot be validated or saved."
            }
        )

    return {
        "status": health["status"],
        "message": health["message"],
        "components": health["components"]
    }


@router.get("/health/ready")
async def readiness_check():
    """
    @brief Kubernetes readiness probe
    @details Returns 200 when the database is reachable.
    """
    health = await get_system_health()

    if health["status"] != HealthStatus.UNHEALTHY:
        return {"ready": True, "status": "System is ready"}
    return JSONResponse(
        status_code=503,
        content={
            "ready": False,
            "status": "System is not ready",
            "reason": health["message"]
        }
    )


@router.get("/health/live")
async def liveness_check():
    """
    @brief Kubernetes liveness probe
    @details Returns 200 as long as application is running.
    """
    return {"alive": True, "status": "Application is running"}
