"""
@file exceptions.py
@brief Centralized exception handlers
@details
Provides consistent JSON error responses for HTTP exceptions, request
validation errors, unknown validation levels, duplicate writes and
unexpected server errors. Every body uses the same shape as domain
failures: {"statusCode", "errors": [{"errorCode", "message", "field"?}]}.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException

from app.core.errors import ErrorCodes, InvalidLevelError

logger = logging.getLogger(__name__)

## @brief Unique index guarding project names, see models.project
NAME_INDEX = "uq_project_name_lower"


def _constraint_name(exc: IntegrityError):
    """Name of the violated constraint as reported by psycopg2, if any"""
    diag = getattr(exc.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def error_body(status_code: int, error_code: str, message: str, field: str = None) -> dict:
    """Build the standard error response body for a single error"""
    error = {"errorCode": error_code, "message": message}
    if field:
        error["field"] = field
    return {"statusCode": status_code, "errors": [error]}


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    @brief Custom HTTP exception handler
    @details Provides consistent error responses across the API.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    @brief Request body / parameter validation error handler
    @details Lists one entry per invalid location.
    """
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "errorCode": "REQUEST_INVALID",
            "message": error.get("msg", "Invalid value"),
            "field": ".".join(location) or None,
        })
    return JSONResponse(status_code=422, content={"statusCode": 422, "errors": errors})


async def invalid_level_handler(request: Request, exc: InvalidLevelError):
    """
    @brief Unknown validation level
    """
    logger.warning(f"Rejected request for {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content=error_body(400, ErrorCodes.INVALID_LEVEL, str(exc), field="level"),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """
    @brief Constraint violated while writing

    @details
    Validation runs before the write but is not transactional with it.
    A project name taken in between trips the case-insensitive name index
    and is reported as a duplicate name; any other violation (area removed,
    reference number clash) is a generic conflict.
    """
    constraint = _constraint_name(exc)
    if constraint == NAME_INDEX:
        logger.warning(f"Duplicate project name on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=409,
            content=error_body(409, ErrorCodes.NAME_DUPLICATE, "A project with this name already exists", field="name"),
        )

    logger.error(f"Integrity error handling {request.method} {request.url.path} ({constraint}): {exc.orig}")
    return JSONResponse(
        status_code=409,
        content=error_body(
            409,
            ErrorCodes.DATA_CONFLICT,
            "The change conflicts with data saved at the same time. Please reload and try again.",
        ),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    @brief Catch-all exception handler
    @details
    Handles unexpected exceptions gracefully.
    Logs full error for debugging while returning safe message to client.
    """
    logger.exception(f"Unexpected error handling {request.url}: {exc}")

    return JSONResponse(
        status_code=500,
        content=error_body(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."),
    )
