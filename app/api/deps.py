"""
@file deps.py
@brief FastAPI dependencies shared by the project and area endpoints

@details
The upstream auth gateway authenticates the caller and forwards the user
id in the X-User-Id header. get_principal turns that id into a Principal
with its admin flag and area memberships. Stores and the validation
pipeline are built per request around the request's database session.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.user import Principal
from app.services.stores import SqlAreaStore, SqlProjectStore, SqlUserStore
from app.services.validation import ValidationPipeline

logger = logging.getLogger(__name__)


async def get_principal(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> Principal:
    """
    @brief Resolve the calling user from the X-User-Id header

    @throws HTTPException(401) when the header is missing or names no user
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    principal = await SqlUserStore(db).get_principal(x_user_id)
    if principal is None:
        logger.warning(f"Unknown user id in X-User-Id header: {x_user_id}")
        raise HTTPException(status_code=401, detail="Authentication required")
    return principal


def get_area_store(db: Session = Depends(get_db)) -> SqlAreaStore:
    return SqlAreaStore(db)


def get_project_store(db: Session = Depends(get_db)) -> SqlProjectStore:
    return SqlProjectStore(db)


def get_pipeline(
    area_store: SqlAreaStore = Depends(get_area_store),
    project_store: SqlProjectStore = Depends(get_project_store),
) -> ValidationPipeline:
    return ValidationPipeline(area_store, project_store)
