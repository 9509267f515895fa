"""Root conftest — shared test configuration and record builders."""

import os

import pytest

# Ensure tests never touch a developer database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SEED_ON_STARTUP", "false")

from sitebook.core.domain_types import ProjectId, ProjectStatus  # noqa: E402
from sitebook.core.records import Project  # noqa: E402


def make_project(**overrides) -> Project:
    """Project snapshot with sensible defaults; override any field."""
    fields = {
        "id": ProjectId(1),
        "name": "Test Site",
        "budget": 100000,
        "spent": 0,
        "progress": 0,
        "status": ProjectStatus.ACTIVE,
        "start_date": "2024-01-01",
        "end_date": "",
    }
    fields.update(overrides)
    return Project(**fields)


@pytest.fixture
def project_factory():
    return make_project
