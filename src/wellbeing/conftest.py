# src/wellbeing/conftest.py
"""
Pytest configuration and shared fixtures.

Tests are co-located with implementation files using the *_test.py suffix.
Most tests run against the in-memory store. PostgresStore integration tests
use the db_connection fixture and are skipped unless DATABASE_URL points at a
test database.
"""

import os

# Set environment BEFORE importing any app modules
os.environ["WELLBEING_ENV"] = "test"
os.environ["USE_IN_MEMORY_DB"] = "true"

from datetime import date

import psycopg
import pytest

from wellbeing import db
from wellbeing.config import config
from wellbeing.store import InMemoryStore

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def test_db():
    """
    Apply the migrations to the test database once per session.

    Skips when DATABASE_URL is not set.
    """
    if not config.database_url:
        pytest.skip("DATABASE_URL not set")

    db.apply_migrations()
    return config.database_url


@pytest.fixture
def db_connection(test_db):
    """
    Provide a database connection with transaction rollback.

    Tables are truncated first; everything the test writes is rolled back.
    """
    conn = psycopg.connect(test_db)

    with conn.cursor() as cur:
        cur.execute("TRUNCATE entry_data, entry_definitions, entry_values")
    conn.commit()

    db.set_connection_override(conn)

    yield conn

    conn.rollback()
    db.clear_connection_override()
    conn.close()


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def store():
    """Provide an empty in-memory store."""
    return InMemoryStore()


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def entry_repo(store):
    """Provide an EntryRepository over the in-memory store."""
    from wellbeing.entry import EntryRepository

    return EntryRepository(store)


@pytest.fixture
def definition_repo(store):
    """Provide a DefinitionRepository over the in-memory store."""
    from wellbeing.definition import DefinitionRepository

    return DefinitionRepository(store)


@pytest.fixture
def handler(store):
    """Provide a CommandHandler over the in-memory store."""
    from wellbeing.commands import CommandHandler

    return CommandHandler.for_store(store)


# =============================================================================
# Seed Data Fixtures
# =============================================================================


@pytest.fixture
def sample_entries(entry_repo) -> list:
    """Seed a handful of entries across two categories and five days."""
    from wellbeing.entry import Entry

    entries = [
        Entry(date(2024, 1, 1), "observation", "mood", ["happy"]),
        Entry(date(2024, 1, 2), "observation", "mood", ["sad"]),
        Entry(date(2024, 1, 2), "symptom", "headache", ["mild", "evening"]),
        Entry(date(2024, 1, 3), "observation", "sleep", ["8h"]),
        Entry(date(2024, 1, 5), "Symptom", "Headache", []),
    ]
    return [entry_repo.add_or_replace(e) for e in entries]


@pytest.fixture
def sample_catalog(definition_repo) -> None:
    """Seed definitions and values for the observation and symptom categories."""
    definition_repo.create_type("observation", "mood", allow_multiple=False)
    definition_repo.create_type("observation", "sleep", allow_multiple=False)
    definition_repo.create_type("symptom", "headache", allow_multiple=True)

    definition_repo.add_value("mood", "happy", notable=False)
    definition_repo.add_value("mood", "sad", notable=True)
    definition_repo.add_value("headache", "mild", notable=False)
    definition_repo.add_value("headache", "severe", notable=True)


# =============================================================================
# Flask App Fixtures
# =============================================================================


@pytest.fixture
def app(store):
    """Create Flask application for testing."""
    from wellbeing.app import create_app

    app = create_app(store=store)
    app.config["TESTING"] = True

    return app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()
