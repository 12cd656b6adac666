"""
@file stores.py
@brief Data access for areas, users and projects

@details
The validation services depend only on the AreaStore and ProjectStore
protocols: a handful of awaitable read operations. The Sql* classes
implement them on a SQLAlchemy Session; blocking calls run in Starlette's
thread pool so the event loop is never held by a query.

SqlProjectStore also carries the write side used after a successful
validation: reference number minting and the project upsert, both in the
upsert transaction.

Database errors are not caught here. They propagate to the caller and are
mapped to 503 by DatabaseErrorMiddleware.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.models.area import Area, AreaRecord, UserArea
from app.models.project import AreaProject, Project, ProjectRecord, ProjectState, ReferenceCounter
from app.models.user import AreaMembership, Principal, User
from app.services.field_mapper import FieldMapper

logger = logging.getLogger(__name__)

## @brief Fixed middle part of every reference number
REFERENCE_NUMBER_TEMPLATE = "C501E"

## @brief Suffix appended to both counter parts
COUNTER_SUFFIX = "A"

## @brief Highest low counter before rolling over into the high counter
MAX_LOW_COUNTER = 999

## @brief State given to newly created projects
DRAFT_STATE = "draft"


class AreaStore(Protocol):
    """Read access to areas needed for hierarchy resolution"""

    async def get_by_id(self, area_id: Any) -> Optional[AreaRecord]:
        ...


class ProjectStore(Protocol):
    """Read access to projects needed for validation"""

    async def get_by_reference_number(self, reference_number: str) -> Optional[ProjectRecord]:
        ...

    async def name_exists(self, name: str, exclude_reference_number: Optional[str] = None) -> bool:
        ...


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def format_reference_number(rfcc_code: str, high_counter: int, low_counter: int) -> str:
    """
    @brief Build a reference number from its parts

    @return e.g. "ANC501E/000A/001A"
    """
    return (
        f"{rfcc_code}{REFERENCE_NUMBER_TEMPLATE}/"
        f"{high_counter:03d}{COUNTER_SUFFIX}/{low_counter:03d}{COUNTER_SUFFIX}"
    )


def slug_for(reference_number: str) -> str:
    """Lower-case reference number with slashes replaced by dashes"""
    return reference_number.lower().replace("/", "-")


def next_counters(current: Optional[ReferenceCounter]) -> tuple:
    """
    @brief Compute the (high, low) counter pair that follows `current`

    @details
    A missing counter starts at (0, 1). The low counter rolls over to 1
    and increments the high counter once it has reached MAX_LOW_COUNTER.
    """
    if current is None:
        return 0, 1
    if current.low_counter >= MAX_LOW_COUNTER:
        return current.high_counter + 1, 1
    return current.high_counter, current.low_counter + 1


class SqlAreaStore:
    """AreaStore backed by the pafs_core_areas table"""

    def __init__(self, db: Session):
        self.db = db

    def _get_by_id(self, area_id: Any) -> Optional[AreaRecord]:
        key = _to_int(area_id)
        if key is None:
            return None
        area = self.db.query(Area).filter(Area.id == key).first()
        return AreaRecord.from_orm(area) if area else None

    async def get_by_id(self, area_id: Any) -> Optional[AreaRecord]:
        return await run_in_threadpool(self._get_by_id, area_id)

    def _list_areas(self, area_type: Optional[str]) -> List[AreaRecord]:
        query = self.db.query(Area)
        if area_type:
            query = query.filter(Area.area_type == area_type)
        return [AreaRecord.from_orm(area) for area in query.order_by(Area.name).all()]

    async def list_areas(self, area_type: Optional[str] = None) -> List[AreaRecord]:
        """List areas, optionally restricted to one area type, ordered by name"""
        return await run_in_threadpool(self._list_areas, area_type)


class SqlUserStore:
    """Builds principals from pafs_core_users and pafs_core_user_areas"""

    def __init__(self, db: Session):
        self.db = db

    def _get_principal(self, user_id: Any) -> Optional[Principal]:
        key = _to_int(user_id)
        if key is None:
            return None
        user = self.db.query(User).filter(User.id == key).first()
        if not user:
            return None

        rows = (
            self.db.query(UserArea, Area)
            .join(Area, Area.id == UserArea.area_id)
            .filter(UserArea.user_id == key)
            .all()
        )
        memberships = [
            AreaMembership(
                area_id=area.id,
                primary=bool(user_area.primary),
                area_type=area.area_type,
                name=area.name,
            )
            for user_area, area in rows
        ]
        return Principal.from_memberships(user.id, user.admin, memberships)

    async def get_principal(self, user_id: Any) -> Optional[Principal]:
        return await run_in_threadpool(self._get_principal, user_id)


class SqlProjectStore:
    """
    @brief ProjectStore backed by pafs_core_projects and its side tables

    @details
    Reads always target version 1 of a reference number, the only version
    this service writes.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Reads used by validation
    # ------------------------------------------------------------------

    def _find_project(self, reference_number: str) -> Optional[Project]:
        return (
            self.db.query(Project)
            .filter(Project.reference_number == reference_number, Project.version == 1)
            .first()
        )

    def _get_by_reference_number(self, reference_number: str) -> Optional[ProjectRecord]:
        project = self._find_project(reference_number)
        if not project:
            return None

        link = (
            self.db.query(AreaProject)
            .filter(AreaProject.project_id == project.id, AreaProject.owner.is_(True))
            .first()
        )
        state = self.db.query(ProjectState).filter(ProjectState.project_id == project.id).first()
        return ProjectRecord(
            id=project.id,
            reference_number=project.reference_number,
            name=project.name,
            area_id=link.area_id if link else None,
            financial_start_year=project.earliest_start_year,
            financial_end_year=project.project_end_financial_year,
            state=state.state if state else None,
        )

    async def get_by_reference_number(self, reference_number: str) -> Optional[ProjectRecord]:
        return await run_in_threadpool(self._get_by_reference_number, reference_number)

    def _name_exists(self, name: str, exclude_reference_number: Optional[str]) -> bool:
        query = self.db.query(Project.id).filter(func.lower(Project.name) == name.strip().lower())
        if exclude_reference_number:
            query = query.filter(Project.reference_number != exclude_reference_number)
        return query.first() is not None

    async def name_exists(self, name: str, exclude_reference_number: Optional[str] = None) -> bool:
        """Case-insensitive duplicate name check excluding one reference number"""
        return await run_in_threadpool(self._name_exists, name, exclude_reference_number)

    def _get_with_joins(self, reference_number: str) -> Optional[Dict[str, Any]]:
        project = self._find_project(reference_number)
        if not project:
            return None

        row = project.to_row()
        state = self.db.query(ProjectState).filter(ProjectState.project_id == project.id).first()
        link = self.db.query(AreaProject).filter(AreaProject.project_id == project.id).first()
        if state:
            row[ProjectState.__tablename__] = {"state": state.state}
        if link:
            row[AreaProject.__tablename__] = {"area_id": link.area_id, "owner": link.owner}
        return row

    async def get_with_joins(self, reference_number: str) -> Optional[Dict[str, Any]]:
        """Storage row of a project with its state and area link nested by table name"""
        return await run_in_threadpool(self._get_with_joins, reference_number)

    # ------------------------------------------------------------------
    # Writes used after successful validation
    # ------------------------------------------------------------------

    def _increment_counter(self, rfcc_code: str) -> tuple:
        # the row must exist before it can be locked; concurrent first creates
        # for one RFCC code then queue on the same lock
        self.db.execute(
            insert(ReferenceCounter)
            .values(rfcc_code=rfcc_code, high_counter=0, low_counter=0)
            .on_conflict_do_nothing(index_elements=[ReferenceCounter.rfcc_code])
        )
        counter = (
            self.db.query(ReferenceCounter)
            .filter(ReferenceCounter.rfcc_code == rfcc_code)
            .with_for_update()
            .one()
        )
        counter.high_counter, counter.low_counter = next_counters(counter)
        self.db.flush()
        return counter.high_counter, counter.low_counter

    def _generate_reference_number(self, rfcc_code: str) -> str:
        high, low = self._increment_counter(rfcc_code)
        reference_number = format_reference_number(rfcc_code, high, low)
        logger.info(f"Generated reference number {reference_number} for RFCC {rfcc_code}")
        return reference_number

    def _upsert(
        self,
        payload: Dict[str, Any],
        user_id: Any,
        rfcc_code: Optional[str],
        area: Optional[AreaRecord],
    ) -> Project:
        data = FieldMapper.to_storage(payload)
        reference_number = payload.get("referenceNumber")

        if reference_number:
            project = self._find_project(reference_number)
            if project is None:
                raise LookupError(f"Project {reference_number} not found")
            if area is not None:
                data["rma_name"] = area.name
            for column, value in data.items():
                setattr(project, column, value)
            if area is not None:
                link = self.db.query(AreaProject).filter(AreaProject.project_id == project.id).first()
                if link:
                    link.area_id = area.id
                else:
                    self.db.add(AreaProject(project_id=project.id, area_id=area.id, owner=True))
            if "urgencyDetails" in payload:
                project.urgency_details_updated_at = func.now()
            self.db.commit()
            self.db.refresh(project)
            logger.info(f"Updated project {reference_number}")
            return project

        reference_number = self._generate_reference_number(rfcc_code)
        if area is not None:
            data["rma_name"] = area.name
        project = Project(
            **data,
            reference_number=reference_number,
            version=1,
            slug=slug_for(reference_number),
            creator_id=_to_int(user_id),
        )
        self.db.add(project)
        self.db.flush()
        self.db.add(ProjectState(project_id=project.id, state=DRAFT_STATE))
        if area is not None:
            self.db.add(AreaProject(project_id=project.id, area_id=area.id, owner=True))
        self.db.commit()
        self.db.refresh(project)
        logger.info(f"Created project {reference_number} in area {area.id if area else None}")
        return project

    async def upsert(
        self,
        payload: Dict[str, Any],
        user_id: Any,
        rfcc_code: Optional[str] = None,
        area: Optional[AreaRecord] = None,
    ) -> Project:
        """
        @brief Create or update a project from a validated wire payload

        @details
        Without a referenceNumber a new project is created: a reference
        number is minted for `rfcc_code`, the project starts in the draft
        state and `area` becomes its owning RMA. With a referenceNumber the
        mapped fields overwrite the stored ones; `area` is only passed when
        the area was changed.

        The counter row is locked while the reference number is minted.
        A name taken between validation and this write surfaces as an
        IntegrityError from the case-insensitive unique name index.
        """
        def work():
            try:
                return self._upsert(payload, user_id, rfcc_code, area)
            except Exception:
                self.db.rollback()
                raise

        return await run_in_threadpool(work)
