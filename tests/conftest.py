"""Shared pytest fixtures for ecolage tests."""

import logging
import os
import tempfile

import pytest

from ecolage.domain.tuition import TuitionService
from ecolage.log import shutdown_logging
from ecolage.store.factories import create_sqlite_store


@pytest.fixture
def temp_store():
    """Create a temporary document store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def tuition_service(temp_store):
    """Create a TuitionService with a temporary store."""
    return TuitionService(temp_store)


@pytest.fixture
def sample_classes(temp_store):
    """Add a few classes to the classes collection."""
    classes = temp_store.collection("classes")
    return [
        classes.create({"name": "GSA", "level": "Maternelle"}),
        classes.create({"name": "7", "level": "Primaire"}),
        classes.create({"name": "Nouvelle classe", "level": "Primaire"}),
    ]


@pytest.fixture
def sample_employees(temp_store):
    """Add employees to the employees collection."""
    employees = temp_store.collection("employees")
    return [
        employees.create(
            {
                "first_name": "Rija",
                "last_name": "Rakoto",
                "position": "Enseignant",
                "department": "Primaire",
                "salary": 500000,
                "status": "active",
            }
        ),
        employees.create(
            {
                "first_name": "Voahangy",
                "last_name": "Rabe",
                "position": "Directrice",
                "department": "Administration",
                "salary": 1000000,
                "status": "active",
            }
        ),
        employees.create(
            {
                "first_name": "Hery",
                "last_name": "Randria",
                "position": "Gardien",
                "department": "Services",
                "salary": 300000,
                "status": "inactive",
            }
        ),
    ]


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove the rich handler a CLI invocation may have installed."""
    level = logging.getLogger().level
    yield
    shutdown_logging()
    logging.getLogger().setLevel(level)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
