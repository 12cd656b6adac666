"""
@file validation.py
@brief Validation pipeline run before a project is created or updated

@details
One pass of ValidationPipeline.validate() runs these steps in order and
stops at the first failure:

1. create vs update: a payload without referenceNumber creates
2. update only: the referenced project must exist
3. authorization (create: RMA member of the target area;
   update: admin, member of the project area or of its PSO parent)
4. common fields: duplicate name, financial start year <= end year
   using stored years for whichever side the payload omits
5. create only: the target area must be an RMA with an RFCC code
6. update only: an area change is admin-only and re-checks the new area
7. update only: milestone dates against the stored financial years

Failures are returned inside a ValidationResult, never raised. Errors
from the stores (database unavailable, ...) propagate unchanged.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

import logging
from typing import Any, Mapping, Optional, Tuple

from app.core.errors import ErrorCodes, ValidationFailure, ValidationResult
from app.models.area import same_area_id
from app.models.project import ProjectRecord
from app.models.user import Principal
from app.services.area_hierarchy import AreaHierarchyService, AreaWithParents
from app.services.permissions import can_create_project, can_update_project
from app.services.stores import AreaStore, ProjectStore
from app.services.timeline import is_timeline_level, validate_timeline

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Project with the specified reference number does not exist"
NAME_DUPLICATE = "A project with this name already exists"
AREA_CHANGE_ADMIN_ONLY = "Only admin users can change the area of a project"
AREA_NOT_FOUND = "The specified areaId does not exist"
RFCC_NOT_FOUND = "Could not determine RFCC code. RMA must have a PSO parent with RFCC code."


def _present(payload: Mapping[str, Any], field: str) -> bool:
    value = payload.get(field)
    return value is not None and not (isinstance(value, str) and value.strip() == "")


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class ValidationPipeline:
    """
    @brief Orchestrates the business rules for one create or update request

    @details
    Holds no state between calls; one instance may serve concurrent
    requests as long as its stores can.
    """

    def __init__(self, area_store: AreaStore, project_store: ProjectStore):
        self.projects = project_store
        self.areas = AreaHierarchyService(area_store)

    async def validate(
        self,
        payload: Mapping[str, Any],
        principal: Principal,
        level: Optional[str] = None,
    ) -> ValidationResult:
        """
        @brief Run every rule for `payload` submitted at `level`

        @param payload Wire payload (camelCase field names)
        @param principal The authenticated caller
        @param level Name of the wizard step being saved
        @return ValidationResult with `error` set, or with the success context
        """
        reference_number = payload.get("referenceNumber")
        if not reference_number:
            return await self._validate_create(payload, principal)
        return await self._validate_update(payload, principal, level, reference_number)

    # ------------------------------------------------------------------
    # Create / update flows
    # ------------------------------------------------------------------

    async def _validate_create(self, payload: Mapping[str, Any], principal: Principal) -> ValidationResult:
        area_id = payload.get("areaId")

        decision = can_create_project(principal, area_id)
        if not decision.allowed:
            logger.warning(
                f"Project creation denied for user {principal.user_id} in area {area_id}: {decision.reason}"
            )
            return ValidationResult.failed(
                ValidationFailure.forbidden(ErrorCodes.NOT_ALLOWED_TO_CREATE, decision.reason)
            )

        failure = await self._check_common_fields(payload, principal, existing=None)
        if failure:
            return ValidationResult.failed(failure)

        area, failure = await self._resolve_project_area(area_id, principal)
        if failure:
            return ValidationResult.failed(failure)

        return ValidationResult(area_data=area, rfcc_code=area.rfcc_code)

    async def _validate_update(
        self,
        payload: Mapping[str, Any],
        principal: Principal,
        level: Optional[str],
        reference_number: str,
    ) -> ValidationResult:
        existing = await self.projects.get_by_reference_number(reference_number)
        if existing is None:
            logger.warning(
                f"Attempted to update non-existent project {reference_number} (user {principal.user_id})"
            )
            return ValidationResult.failed(
                ValidationFailure.not_found(ErrorCodes.INVALID_DATA, PROJECT_NOT_FOUND)
            )

        project_area = None
        if existing.area_id is not None:
            project_area = await self.areas.get_with_parents(existing.area_id)
        decision = can_update_project(principal, project_area)
        if not decision.allowed:
            logger.warning(
                f"Project update denied for user {principal.user_id} on {reference_number}: {decision.reason}"
            )
            return ValidationResult.failed(
                ValidationFailure.forbidden(ErrorCodes.NOT_ALLOWED_TO_UPDATE, decision.reason)
            )

        failure = await self._check_common_fields(payload, principal, existing=existing)
        if failure:
            return ValidationResult.failed(failure)

        area_data = None
        new_area_id = payload.get("areaId")
        if _present(payload, "areaId") and not same_area_id(new_area_id, existing.area_id):
            if not principal.is_admin:
                logger.warning(
                    f"Non-admin user attempted to change project area "
                    f"(user {principal.user_id}, project {reference_number}, area {new_area_id})"
                )
                return ValidationResult.failed(
                    ValidationFailure.forbidden(ErrorCodes.NOT_ALLOWED_TO_UPDATE, AREA_CHANGE_ADMIN_ONLY)
                )
            area_data, failure = await self._resolve_project_area(new_area_id, principal)
            if failure:
                return ValidationResult.failed(failure)

        if is_timeline_level(level):
            failure = validate_timeline(
                payload,
                level,
                existing.financial_start_year,
                existing.financial_end_year,
            )
            if failure:
                logger.warning(
                    f"Timeline validation failed for {reference_number} at {level}: {failure.message}"
                )
                return ValidationResult.failed(failure)

        return ValidationResult(
            area_data=area_data,
            rfcc_code=area_data.rfcc_code if area_data else None,
            existing_project=existing,
        )

    # ------------------------------------------------------------------
    # Individual checks
    # ------------------------------------------------------------------

    async def _check_common_fields(
        self,
        payload: Mapping[str, Any],
        principal: Principal,
        existing: Optional[ProjectRecord],
    ) -> Optional[ValidationFailure]:
        if _present(payload, "name"):
            exclude = existing.reference_number if existing else None
            if await self.projects.name_exists(payload["name"], exclude):
                logger.warning(
                    f"Duplicate project name detected during upsert: {payload['name']!r} (user {principal.user_id})"
                )
                return ValidationFailure.conflict(ErrorCodes.NAME_DUPLICATE, NAME_DUPLICATE, field="name")

        return self._check_financial_years(payload, existing)

    @staticmethod
    def _check_financial_years(
        payload: Mapping[str, Any],
        existing: Optional[ProjectRecord],
    ) -> Optional[ValidationFailure]:
        """
        @brief Start year must not exceed end year

        @details
        A side the payload omits falls back to the stored value, so a
        partial update of either year is still checked against the other.
        The error names the field the caller actually sent.
        """
        start_sent = _present(payload, "financialStartYear")
        end_sent = _present(payload, "financialEndYear")
        if not start_sent and not end_sent:
            return None

        start = payload.get("financialStartYear") if start_sent else (
            existing.financial_start_year if existing else None
        )
        end = payload.get("financialEndYear") if end_sent else (
            existing.financial_end_year if existing else None
        )
        start, end = _as_int(start), _as_int(end)
        if start is None or end is None or start <= end:
            return None

        logger.warning(f"Financial start year {start} is after end year {end}")
        if not start_sent:
            return ValidationFailure.invalid(
                ErrorCodes.FINANCIAL_END_YEAR_SHOULD_BE_GREATER_THAN_START_YEAR,
                f"Financial end year ({end}) must not be before the financial start year ({start})",
                field="financialEndYear",
            )
        return ValidationFailure.invalid(
            ErrorCodes.FINANCIAL_START_YEAR_SHOULD_BE_LESS_THAN_END_YEAR,
            f"Financial start year ({start}) must not be after the financial end year ({end})",
            field="financialStartYear",
        )

    async def _resolve_project_area(
        self,
        area_id: Any,
        principal: Principal,
    ) -> Tuple[Optional[AreaWithParents], Optional[ValidationFailure]]:
        """
        @brief Resolve the area a project will belong to

        @details
        Every area problem is a 400 AREA_IS_NOT_ALLOWED on field areaId:
        unknown area, area that is not an RMA, RMA without an RFCC code.
        """
        area = await self.areas.get_with_parents(area_id)
        if area is None:
            logger.warning(f"Specified areaId {area_id} does not exist (user {principal.user_id})")
            return None, ValidationFailure.invalid(ErrorCodes.AREA_IS_NOT_ALLOWED, AREA_NOT_FOUND, field="areaId")

        if not area.area.is_rma:
            logger.warning(f"Selected area {area_id} is not an RMA (user {principal.user_id})")
            return None, ValidationFailure.invalid(
                ErrorCodes.AREA_IS_NOT_ALLOWED,
                f"Selected area must be an RMA. Selected area type is: {area.area_type}",
                field="areaId",
            )

        if not area.rfcc_code:
            logger.warning(f"No RFCC code for RMA {area_id}: missing PSO parent or sub type")
            return None, ValidationFailure.invalid(ErrorCodes.AREA_IS_NOT_ALLOWED, RFCC_NOT_FOUND, field="areaId")

        return area, None
