"""
Test Suite for PAFS Backend

This package contains unit tests, API tests and fixtures for the PAFS
project validation service.

Test Categories:
- test_area_hierarchy: Area lookup and PSO / EA parent resolution
- test_permissions: Create and update authorization rules
- test_timeline: Milestone dates against the financial year window
- test_field_mapper: Wire <-> storage field mapping
- test_levels: Level schemas and payload validation
- test_validation: The validation pipeline end to end over fake stores
- test_api: FastAPI endpoints
- test_models, test_cache, test_resilience, test_seed: ambient layers
- conftest.py: Shared fixtures and test configuration

Running Tests:
    pytest              # Run all tests
    pytest -v           # Verbose output
    pytest tests/test_validation.py -v  # Run specific test file
    pytest --cov        # With coverage report

Author: PAFS Project
License: AGPL-3.0
"""
