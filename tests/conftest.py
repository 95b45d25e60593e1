"""
Pytest configuration and shared fixtures.
"""

import pytest
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, Any, List

from skillmatch.database import init_database, get_session
from skillmatch.logger import get_logger, reset_logger

NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp directory, console off."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def valid_profile_data() -> Dict[str, Any]:
    """Valid profile record."""
    return {
        "name": "Ada Lovelace",
        "email": "Ada@Example.com",
        "bio": "Backend engineer building data pipelines in Python and SQL.",
        "skills": ["Python", "SQL", " python ", "Docker"],
    }


@pytest.fixture
def valid_job_data() -> Dict[str, Any]:
    """Valid job record."""
    return {
        "title": "Data Engineer",
        "description": "Build data pipelines with Python, SQL and Airflow.",
        "location": "Remote",
        "job_type": "Full-time",
        "experience_level": "Mid",
        "budget": {"min": 90000, "max": 120000},
        "skills": ["Python", "SQL", "Airflow"],
    }


@pytest.fixture
def profile() -> Dict[str, Any]:
    """The profile suggestions are computed for."""
    return {
        "id": 1,
        "name": "Ada",
        "email": "ada@example.com",
        "bio": "Python developer working on machine learning pipelines",
        "skills": ["Python", "SQL", "Docker"],
    }


@pytest.fixture
def other_profiles(profile) -> List[Dict[str, Any]]:
    return [
        profile,
        {"id": 2, "name": "Grace", "email": "grace@example.com", "bio": "",
         "skills": ["Python", "SQL", "Kubernetes"]},
        {"id": 3, "name": "Linus", "email": "linus@example.com", "bio": "",
         "skills": ["C", "Linux", "Git"]},
        {"id": 4, "name": "Empty", "email": "empty@example.com", "bio": "", "skills": []},
        {"id": 5, "name": "Margaret", "email": "margaret@example.com", "bio": "",
         "skills": ["python", "docker", "sql"]},
    ]


@pytest.fixture
def jobs() -> List[Dict[str, Any]]:
    return [
        {"id": 10, "title": "Data Engineer", "status": "Active", "posted_by": 2,
         "description": "Python and SQL pipelines for machine learning",
         "skills": ["Python", "SQL", "Airflow"], "created_at": NOW - timedelta(days=2)},
        {"id": 11, "title": "Platform Engineer", "status": "Active", "posted_by": 3,
         "description": "Kubernetes clusters and Docker images",
         "skills": ["Docker", "Kubernetes", "Terraform", "Go"], "created_at": NOW - timedelta(days=5)},
        {"id": 12, "title": "Frontend Developer", "status": "Active", "posted_by": 3,
         "description": "React and TypeScript user interfaces",
         "skills": ["React", "TypeScript"], "created_at": NOW - timedelta(days=1)},
        {"id": 13, "title": "Own Posting", "status": "Active", "posted_by": 1,
         "description": "Python everything",
         "skills": ["Python", "SQL", "Docker"], "created_at": NOW - timedelta(days=1)},
        {"id": 14, "title": "Closed Role", "status": "Closed", "posted_by": 2,
         "description": "Python and SQL",
         "skills": ["Python", "SQL", "Docker"], "created_at": NOW - timedelta(days=1)},
        {"id": 15, "title": "Old ML Role", "status": "Active", "posted_by": 2,
         "description": "Machine learning with Python",
         "skills": ["Python", "PyTorch"], "created_at": NOW - timedelta(days=60)},
    ]


@pytest.fixture
def db_path(tmp_path) -> Path:
    path = tmp_path / "skillmatch.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Create a temporary database and return a session."""
    session = get_session(db_path)
    yield session
    session.close()
