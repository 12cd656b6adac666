"""
@file middleware.py
@brief Custom middleware for error handling and request processing

@details
Provides centralized middleware for:
- Catching unhandled database errors raised out of the stores
- Providing consistent error responses

The validation services never catch infrastructure errors; this is
where they become 503 responses.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import DatabaseError, OperationalError

from app.core.exceptions import error_body

logger = logging.getLogger(__name__)


class DatabaseErrorMiddleware(BaseHTTPMiddleware):
    """
    @brief Middleware to catch database errors and return proper status messages

    @details
    Intercepts unhandled database exceptions and returns appropriate HTTP responses.
    Health check endpoints keep working even when the database is unavailable.
    """

    async def dispatch(self, request: Request, call_next):
        """
        @brief Process request and catch database errors

        @param request The HTTP request
        @param call_next The next middleware/route handler
        @return Response or error response
        """
        try:
            response = await call_next(request)
            return response
        except (OperationalError, DatabaseError) as e:
            logger.error(f"Database error handling {request.method} {request.url.path}: {e}")
            return JSONResponse(
                status_code=503,
                content=error_body(
                    503,
                    "SERVICE_UNAVAILABLE",
                    "Database connection failed. System is in maintenance mode.",
                ),
            )
        except Exception as e:
            logger.exception(f"Unexpected error handling {request.method} {request.url.path}: {e}")
            return JSONResponse(
                status_code=500,
                content=error_body(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."),
            )
