"""
@file area_hierarchy.py
@brief Area lookup and bounded parent-chain resolution

@details
The area tree is fixed-depth (EA Area -> PSO Area -> RMA), so parents are
resolved with at most two sequential lookups rather than a recursive walk:

1. RMA  -> parent_id -> PSO Area (kept only if it really is a PSO Area)
2. PSO  -> parent_id -> EA Area  (kept only if it really is an EA Area)

A missing or mistyped parent is reported as None on the result, never
raised. The RFCC code lives on the PSO Area's sub_type.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from app.core.errors import AreaNotFoundError
from app.models.area import AreaRecord, AreaType
from app.services.stores import AreaStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AreaWithParents:
    """An area with its PSO and EA ancestors, each None when unresolvable"""

    area: AreaRecord
    pso: Optional[AreaRecord] = None
    ea: Optional[AreaRecord] = None

    @property
    def id(self) -> int:
        return self.area.id

    @property
    def area_type(self) -> str:
        return self.area.area_type

    @property
    def rfcc_code(self) -> Optional[str]:
        return self.pso.sub_type if self.pso and self.pso.sub_type else None

    def to_dict(self) -> Dict[str, Any]:
        data = self.area.to_dict()
        data["PSO"] = self.pso.to_dict() if self.pso else None
        data["EA"] = self.ea.to_dict() if self.ea else None
        return data


class AreaHierarchyService:
    """
    @brief Resolves areas and their PSO / EA parents through an AreaStore
    """

    def __init__(self, store: AreaStore):
        self.store = store

    async def get_by_id(self, area_id: Any) -> AreaRecord:
        """
        @brief Strict single-area lookup

        @throws AreaNotFoundError if no area has this id
        """
        area = await self.store.get_by_id(area_id)
        if area is None:
            raise AreaNotFoundError(area_id)
        return area

    async def _parent_of_type(self, area: AreaRecord, area_type: AreaType) -> Optional[AreaRecord]:
        if area.parent_id is None:
            return None
        parent = await self.store.get_by_id(area.parent_id)
        if parent is None or parent.area_type != area_type:
            return None
        return parent

    async def get_with_parents(self, area_id: Any) -> Optional[AreaWithParents]:
        """
        @brief Resolve an area and its PSO / EA ancestors

        @details
        - PSO Area: the area itself is the PSO; its parent is the EA.
        - RMA: the parent is the PSO (when it is one); the PSO's parent is the EA.
        - Any other type: no parents are resolved.

        @param area_id Area identifier, int or numeric string
        @return AreaWithParents, or None when the area itself does not exist
        """
        area = await self.store.get_by_id(area_id)
        if area is None:
            return None

        if area.is_pso:
            pso = area
        elif area.is_rma:
            pso = await self._parent_of_type(area, AreaType.PSO)
        else:
            return AreaWithParents(area=area)

        ea = await self._parent_of_type(pso, AreaType.EA) if pso else None
        return AreaWithParents(area=area, pso=pso, ea=ea)

    async def get_rfcc_code(self, area: Union[AreaRecord, Any]) -> Optional[str]:
        """
        @brief Regional coordination code for a PSO Area or RMA

        @details
        Accepts an AreaRecord or an area id. An id that matches no area
        raises AreaNotFoundError; an area that simply has no resolvable
        code returns None and is logged at INFO.

        @return The PSO Area's sub_type, or None
        """
        if not isinstance(area, AreaRecord):
            area = await self.get_by_id(area)

        if area.is_pso:
            code = area.sub_type
        elif area.is_rma:
            pso = await self._parent_of_type(area, AreaType.PSO)
            code = pso.sub_type if pso else None
        else:
            code = None

        if not code:
            logger.info(f"No RFCC code resolvable for area {area.id} ({area.area_type})")
            return None
        return code
