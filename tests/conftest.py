"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample coordinates, profiles and zones
- A scripted random source
- Mock enrichment client
- A wired field mapping service
- FastAPI test client
"""
import pytest
import numpy as np
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from agrowatch.main import app
from agrowatch.api.dependencies import build_field_mapping_service, get_field_mapping_service
from agrowatch.domain.models import Coordinate, SiteProfile, ZoneRecord, classify_status
from agrowatch.infrastructure.enrichment_client import EnrichmentClient
from agrowatch.services.domain.assessment_generator import AssessmentGenerator


class ScriptedRng:
    """
    Stand-in for numpy.random.Generator that replays fixed draws.

    integers() pops from the queue given at construction and falls back to
    the low bound once the queue is empty.
    """

    def __init__(self, integers=(), uniform=50.0):
        self._integers = list(integers)
        self._uniform = uniform

    def integers(self, low, high=None):
        if self._integers:
            return self._integers.pop(0)
        return 0 if high is None else low

    def uniform(self, low=0.0, high=1.0):
        return self._uniform


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def san_francisco() -> Coordinate:
    return Coordinate(latitude=37.7749, longitude=-122.4194)


@pytest.fixture
def sample_profile() -> SiteProfile:
    """An enriched profile with real lookup results."""
    return SiteProfile(
        place="Napa, Napa County, California, United States",
        temperature="21.4°C",
        humidity="63%",
        moisture="47%",
        soil_type="Loamy",
    )


@pytest.fixture
def sentinel_profile() -> SiteProfile:
    """A profile produced when both lookups failed."""
    return SiteProfile(
        place="Unknown Location",
        temperature="N/A",
        humidity="N/A",
        moisture="33%",
        soil_type="Clay",
    )


def make_zone(zone_id: str, score: int = 90, name: str = "Test Zone") -> ZoneRecord:
    """Build a zone whose status matches its score."""
    return ZoneRecord(
        id=zone_id,
        name=name,
        score=score,
        status=classify_status(score),
        temperature="20.0°C",
        humidity="50%",
        moisture="40%",
    )


@pytest.fixture
def seeded_rng() -> np.random.Generator:
    return np.random.default_rng(1234)


# ============================================================
# Mock Client Fixtures
# ============================================================

@pytest.fixture
def mock_enrichment_client(sample_profile):
    """Create a mock enrichment client that always returns sample_profile."""
    mock_client = AsyncMock(spec=EnrichmentClient)
    mock_client.enrich.return_value = sample_profile
    return mock_client


@pytest.fixture
def field_mapping_service(mock_enrichment_client, seeded_rng):
    """A freshly seeded application state container."""
    return build_field_mapping_service(
        mock_enrichment_client,
        generator=AssessmentGenerator(rng=seeded_rng),
    )


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client(field_mapping_service) -> TestClient:
    """Create a synchronous test client bound to field_mapping_service."""
    app.dependency_overrides[get_field_mapping_service] = lambda: field_mapping_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def async_test_client(field_mapping_service) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client bound to field_mapping_service."""
    app.dependency_overrides[get_field_mapping_service] = lambda: field_mapping_service
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
