"""
Area Hierarchy Data Model

This module defines the SQLAlchemy ORM models for the organisational area tree
and the user memberships that grant access to it.

The tree is shallow and typed:
- Country at the root
- EA Area under the country
- PSO Area under an EA Area, carrying the RFCC code in sub_type
- RMA under a PSO Area, owning flood-defence projects
- Authority as an unrelated root-level type

Models: Area, UserArea
Records: AreaRecord (detached, immutable view used by the services)

Author: PAFS Project
License: AGPL-3.0
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

from sqlalchemy import BigInteger, Boolean, Column, Date, DateTime, ForeignKey, String, func
from app.db.base import Base


class AreaType(str, Enum):
    """Stored values of Area.area_type"""

    COUNTRY = "Country"
    EA = "EA Area"
    PSO = "PSO Area"
    RMA = "RMA"
    AUTHORITY = "Authority"


class Area(Base):
    """
    SQLAlchemy ORM model for a node of the area tree.

    Attributes:
        id (int): Area identifier, primary key
        name (str): Display name
        area_type (str): One of the AreaType values
        parent_id (int): Parent area, null for root-level areas
        sub_type (str): RFCC code for PSO Areas, authority code for RMAs
        identifier (str): External identifier from the source register
        end_date (date): Date the area stopped being active, if any
    """

    __tablename__ = "pafs_core_areas"

    id = Column(BigInteger, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    area_type = Column(String(50), nullable=False, index=True)
    parent_id = Column(BigInteger, ForeignKey("pafs_core_areas.id"), nullable=True, index=True)
    sub_type = Column(String(50), nullable=True)
    identifier = Column(String(50), nullable=True)
    end_date = Column(Date, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class UserArea(Base):
    """
    Membership of a user in an area.

    A user may belong to several areas; exactly one is normally flagged as
    primary and decides whether the user acts as an RMA, PSO or EA user.
    """

    __tablename__ = "pafs_core_user_areas"

    id = Column(BigInteger, primary_key=True, index=True)
    user_id = Column(BigInteger, ForeignKey("pafs_core_users.id"), nullable=False, index=True)
    area_id = Column(BigInteger, ForeignKey("pafs_core_areas.id"), nullable=False, index=True)
    primary = Column(Boolean, default=False, nullable=False)


@dataclass(frozen=True)
class AreaRecord:
    """Read-only snapshot of an Area row, safe to pass between threads."""

    id: int
    name: str
    area_type: str
    parent_id: Optional[int] = None
    sub_type: Optional[str] = None
    identifier: Optional[str] = None
    end_date: Optional[date] = None

    @classmethod
    def from_orm(cls, area: Area) -> "AreaRecord":
        return cls(
            id=area.id,
            name=area.name,
            area_type=area.area_type,
            parent_id=area.parent_id,
            sub_type=area.sub_type,
            identifier=area.identifier,
            end_date=area.end_date,
        )

    @property
    def is_rma(self) -> bool:
        return self.area_type == AreaType.RMA

    @property
    def is_pso(self) -> bool:
        return self.area_type == AreaType.PSO

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "areaType": self.area_type,
            "parentId": self.parent_id,
            "subType": self.sub_type,
            "identifier": self.identifier,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }


def same_area_id(left: Any, right: Any) -> bool:
    """
    Compare two area identifiers regardless of representation.

    Identifiers arrive as ints from the database and as strings or ints
    from JSON payloads, so 5 and "5" name the same area.
    """
    if left is None or right is None:
        return False
    return str(left).strip() == str(right).strip()
