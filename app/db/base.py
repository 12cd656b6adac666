"""
Database Base Configuration Module

This module establishes the SQLAlchemy declarative base shared by the area,
user and project ORM models. Importing app.db.base alone does not register
the tables; app.db.seed imports every model module before create_all.

Author: PAFS Project
License: AGPL-3.0
"""

from sqlalchemy.orm import declarative_base

# All ORM models must inherit from this base to be registered with SQLAlchemy
Base = declarative_base()
