"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- A throwaway SQLite database per test
- The record store and identifier generators
- HTTP client for API testing
"""

import random
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from health_registry.database import build_engine, build_session_maker, init_models
from health_registry.dependencies import get_identifier_generator, get_record_store
from health_registry.main import app
from health_registry.models import PersonRecord
from health_registry.repositories import RecordStore
from health_registry.services.identifiers import IdentifierGenerator

FIXED_NOW = datetime(2026, 1, 18, 9, 30)
PERSON_ID = "HLTH-20260118-10001"


class ScriptedRandom:
    """Random source returning a fixed sequence, to force collisions."""

    def __init__(self, values):
        self._values = iter(values)

    def randint(self, a, b):
        return next(self._values)


def make_person(health_id: str = PERSON_ID, **overrides) -> PersonRecord:
    fields = {
        "health_id": health_id,
        "name": "Asha Verma",
        "date_of_birth": "1990-04-12",
        "city": "New Delhi",
        "email": f"{health_id.lower()}@example.com",
        "blood_group": "B+",
        "national_id": "1234-5678-9012",
        "fingerprint_scanned": False,
    }
    fields.update(overrides)
    return PersonRecord(**fields)


def candidate_payload(**overrides) -> dict:
    payload = {
        "name": "Asha Verma",
        "dateOfBirth": "1990-04-12",
        "city": "New Delhi",
        "email": "asha@example.com",
        "bloodGroup": "B+",
        "nationalId": "1234-5678-9012",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """SQLite engine on a fresh file with all tables created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(test_engine) -> RecordStore:
    return RecordStore(build_session_maker(test_engine))


@pytest_asyncio.fixture
async def person(store) -> PersonRecord:
    """A registered person with the default test identifier."""
    return await store.create_person(make_person())


# =============================================================================
# Identifier Fixtures
# =============================================================================


@pytest.fixture
def generator() -> IdentifierGenerator:
    """Seeded generator with a fixed clock, so identifiers are reproducible."""
    return IdentifierGenerator(rng=random.Random(20260118), clock=lambda: FIXED_NOW)


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(store, generator):
    """Async test client for the FastAPI app backed by the test database.

    The lifespan does not run under ASGITransport, so the store is supplied
    through dependency overrides instead of app state.
    """
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_identifier_generator] = lambda: generator

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.pop(get_record_store, None)
    app.dependency_overrides.pop(get_identifier_generator, None)
