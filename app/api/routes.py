"""
@file routes.py
@brief FastAPI endpoint definitions for the PAFS project API

@details
Provides RESTful endpoints for:
- Validating a project payload for one save-wizard step
- Creating or updating a project after validation
- Checking whether a project name is already taken
- Reading a stored project in its wire shape
- Listing areas and resolving an area with its PSO / EA parents

Every project request runs two stages: the level schema (field shapes,
status 400 with one entry per bad field) and then the business rules of
ValidationPipeline (first failure wins, with its own status).

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0

@see services.validation for the business rules
@see services.levels for the level schemas
"""

import logging
from typing import Annotated, Any, Dict, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, StringConstraints

from app.api.deps import get_area_store, get_pipeline, get_principal, get_project_store
from app.core.cache import AREA_CACHE_TTL, cache_response
from app.core.errors import ValidationResult, failures_to_response
from app.models.user import Principal
from app.services.area_hierarchy import AreaHierarchyService
from app.services.field_mapper import FieldMapper
from app.services.levels import NAME_PATTERN, registry
from app.services.stores import SqlAreaStore, SqlProjectStore
from app.services.validation import ValidationPipeline

## @brief FastAPI router instance for API endpoints
router = APIRouter(prefix="/api/v1")

## @brief Module-level logger
logger = logging.getLogger(__name__)


class ProjectRequest(BaseModel):
    """Body of the validate and upsert endpoints"""

    level: str
    payload: Dict[str, Any] = Field(default_factory=dict)


class NameCheckRequest(BaseModel):
    """Body of the name availability check"""

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255, pattern=NAME_PATTERN)]


def _success_context(result: ValidationResult) -> Dict[str, Any]:
    return {
        "areaData": result.area_data.to_dict() if result.area_data else None,
        "rfccCode": result.rfcc_code,
        "existingProject": result.existing_project.to_dict() if result.existing_project else None,
    }


async def _run_validation(
    body: ProjectRequest,
    principal: Principal,
    pipeline: ValidationPipeline,
) -> Tuple[Optional[ValidationResult], Optional[JSONResponse]]:
    """
    @brief Level schema first, then the business rules

    @return (result, None) on success, (result or None, error response) on failure
    @throws InvalidLevelError for an unknown level, mapped to 400 by its handler
    """
    failures = registry.validate_payload(body.level, body.payload)
    if failures:
        logger.warning(
            f"Payload rejected at level {body.level} for user {principal.user_id}: "
            f"{[failure.error_code for failure in failures]}"
        )
        return None, JSONResponse(status_code=400, content=failures_to_response(failures))

    result = await pipeline.validate(body.payload, principal, body.level)
    if not result.ok:
        return result, JSONResponse(status_code=result.error.status_code, content=result.error.to_response())
    return result, None


@router.post("/project/validate", tags=["Projects"])
async def validate_project(
    body: ProjectRequest,
    principal: Principal = Depends(get_principal),
    pipeline: ValidationPipeline = Depends(get_pipeline),
):
    """
    @brief Validate a payload for one save-wizard step without saving it

    @return 200 with the resolved area, RFCC code and stored project, or
            the first failure's status and error body
    """
    result, error = await _run_validation(body, principal, pipeline)
    if error:
        return error
    return {"success": True, "data": _success_context(result)}


@router.post("/project/upsert", tags=["Projects"])
async def upsert_project(
    body: ProjectRequest,
    principal: Principal = Depends(get_principal),
    pipeline: ValidationPipeline = Depends(get_pipeline),
    projects: SqlProjectStore = Depends(get_project_store),
):
    """
    @brief Validate, then create (201) or update (200) a project

    @details
    A create mints the reference number from the RMA's RFCC code. An
    update only moves the project to another area when an admin changed it.
    """
    result, error = await _run_validation(body, principal, pipeline)
    if error:
        return error

    area = result.area_data.area if result.area_data else None
    project = await projects.upsert(
        registry.strip_payload(body.level, body.payload),
        principal.user_id,
        rfcc_code=result.rfcc_code,
        area=area,
    )
    created = result.existing_project is None
    return JSONResponse(
        status_code=201 if created else 200,
        content={
            "success": True,
            "data": {
                "id": project.id,
                "referenceNumber": project.reference_number,
                "name": project.name,
            },
        },
    )


@router.post("/project/check-name", tags=["Projects"])
async def check_project_name(
    body: NameCheckRequest,
    principal: Principal = Depends(get_principal),
    projects: SqlProjectStore = Depends(get_project_store),
):
    """
    @brief Report whether a project already uses this name (case-insensitive)
    """
    return {"exists": await projects.name_exists(body.name)}


@router.get("/project/{reference_number:path}", tags=["Projects"])
async def get_project(
    reference_number: str,
    principal: Principal = Depends(get_principal),
    projects: SqlProjectStore = Depends(get_project_store),
):
    """
    @brief Return a stored project as a flat wire object

    @details
    Reference numbers contain slashes, hence the path converter.
    """
    row = await projects.get_with_joins(reference_number)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Project {reference_number} not found")
    return jsonable_encoder(FieldMapper.to_wire(row))


@cache_response(ttl=AREA_CACHE_TTL, key_prefix="api:areas", skip=("store",))
async def _cached_area_listing(area_type: Optional[str] = None, store: SqlAreaStore = None):
    areas = await store.list_areas(area_type)
    return [area.to_dict() for area in areas]


@router.get("/areas", tags=["Areas"])
async def list_areas(
    area_type: Optional[str] = Query(default=None, alias="type"),
    store: SqlAreaStore = Depends(get_area_store),
):
    """
    @brief List areas, optionally filtered by area type

    @details
    Cached in Redis for AREA_CACHE_TTL seconds per type filter.
    """
    areas = await _cached_area_listing(area_type=area_type, store=store)
    return {"areas": areas, "count": len(areas)}


@router.get("/areas/{area_id}", tags=["Areas"])
async def get_area(area_id: int, store: SqlAreaStore = Depends(get_area_store)):
    """
    @brief Return one area with its PSO and EA parents
    """
    area = await AreaHierarchyService(store).get_with_parents(area_id)
    if area is None:
        raise HTTPException(status_code=404, detail=f"Area {area_id} not found")
    return {**area.to_dict(), "rfccCode": area.rfcc_code}
