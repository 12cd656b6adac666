"""
User and Principal Model

This module defines the SQLAlchemy ORM model for user accounts and the
in-memory Principal that represents the authenticated caller while a
request is validated.

Model: User
- Account identity and the global admin flag

Record: Principal
- userId, isAdmin, isRma and the list of area memberships
- isRma derives from the type of the primary area

Author: PAFS Project
License: AGPL-3.0
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy import BigInteger, Boolean, Column, DateTime, String, func
from app.db.base import Base
from app.models.area import AreaType


class User(Base):
    """
    SQLAlchemy ORM model for a user account.

    Attributes:
        id (int): User identifier, primary key
        email (str): Login email, unique
        first_name (str): Given name
        last_name (str): Family name
        admin (bool): Global administrator flag
    """

    __tablename__ = "pafs_core_users"

    id = Column(BigInteger, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    admin = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


@dataclass(frozen=True)
class AreaMembership:
    """One area a principal may act for"""

    area_id: Any
    primary: bool = False
    area_type: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class Principal:
    """
    The authenticated caller as seen by the permission rules.

    Flags are explicit values supplied by whoever builds the principal;
    the rules never look anything up on their own.
    """

    user_id: Any
    is_admin: bool = False
    is_rma: bool = False
    areas: List[AreaMembership] = field(default_factory=list)

    @classmethod
    def from_memberships(cls, user_id: Any, is_admin: bool, memberships: List[AreaMembership]) -> "Principal":
        """Build a principal whose RMA flag follows the primary area type"""
        primary = next((area for area in memberships if area.primary), None)
        return cls(
            user_id=user_id,
            is_admin=bool(is_admin),
            is_rma=bool(primary and primary.area_type == AreaType.RMA),
            areas=list(memberships),
        )
