"""
@file __init__.py
@brief PAFS backend application package initialization

@details
Package defining the FastAPI application and supporting modules for
capital flood-defence project proposals: area hierarchy resolution,
project permissions and the multi-step save validation pipeline.

**Package Structure:**
- api/: FastAPI route handlers and request dependencies
- models/: SQLAlchemy ORM models and the request principal
- services/: Business logic layer (validation pipeline, permissions, mapping)
- db/: Database configuration, session management, and initialization
- core/: Logging, error handling, middleware, cache and health checks

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0

@see main for FastAPI application setup
@see services.validation for the project validation pipeline
"""

__version__ = "1.0.0"
