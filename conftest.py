"""
StudyMapper - Pytest Configuration
==================================

Shared fixtures for the root-level test modules.
"""

import os

import pytest

# Set test environment BEFORE any app imports
os.environ["ENVIRONMENT"] = "test"

from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture
def client() -> TestClient:
    """HTTP client that turns unhandled errors into 500 responses instead of raising."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def heading_notes() -> str:
    return (
        "PHOTOSYNTHESIS\n"
        "LIGHT REACTIONS\n"
        "Chlorophyll absorbs light energy inside the chloroplast membranes.\n"
        "CALVIN CYCLE\n"
        "Carbon dioxide is fixed into sugars during the Calvin cycle.\n"
        "LIMITING FACTORS\n"
        "Light intensity, carbon dioxide and temperature limit photosynthesis.\n"
    )
