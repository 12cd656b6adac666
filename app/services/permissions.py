"""
@file permissions.py
@brief Create and update authorization for projects

@details
Rules, evaluated against an explicitly supplied Principal:

Create
1. only RMA users may create projects
2. the user must be a member of the target area

Update
1. admins may update any project
2. without resolvable area data non-admins are denied
3. members of the project's own area may update
4. members of the area's PSO parent may update (one level, never further)

Area identifiers compare by their string form, so 5 and "5" match.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

from dataclasses import dataclass
from typing import Any, Optional

from app.models.area import same_area_id
from app.models.user import Principal
from app.services.area_hierarchy import AreaWithParents

ONLY_RMA_CAN_CREATE = "Only RMA users can create projects"
NO_ACCESS_TO_AREA = "You do not have access to the specified area"
AREA_INFO_NOT_FOUND = "Project area information not found"
NO_UPDATE_PERMISSION = (
    "You do not have permission to update this project. "
    "You must have access to the project area or its parent PSO area."
)


@dataclass(frozen=True)
class PermissionDecision:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOWED = PermissionDecision(True)


def has_access_to_area(principal: Principal, area_id: Any) -> bool:
    """True when the principal is a member of the area"""
    if area_id is None:
        return False
    return any(same_area_id(membership.area_id, area_id) for membership in principal.areas)


def can_create_project(principal: Principal, area_id: Any) -> PermissionDecision:
    if not principal.is_rma:
        return PermissionDecision(False, ONLY_RMA_CAN_CREATE)
    if not has_access_to_area(principal, area_id):
        return PermissionDecision(False, NO_ACCESS_TO_AREA)
    return ALLOWED


def can_update_project(principal: Principal, area: Optional[AreaWithParents]) -> PermissionDecision:
    """
    @brief Decide whether the principal may update a project in `area`

    @param area The project's area with its parents, or None if unresolvable
    """
    if principal.is_admin:
        return ALLOWED
    if area is None:
        return PermissionDecision(False, AREA_INFO_NOT_FOUND)
    if has_access_to_area(principal, area.id):
        return ALLOWED
    if area.pso is not None and has_access_to_area(principal, area.pso.id):
        return ALLOWED
    return PermissionDecision(False, NO_UPDATE_PERMISSION)
