"""API test fixtures — FastAPI app over an in-memory store and a mock model.

Invariants:
    - get_store/get_clock/get_advisor overridden; no database, no network
    - The advisor is a real DecisionAdvisor over MockAnthropicClient, so
      prompt dispatch and error mapping run for real
"""

import pytest
from httpx import ASGITransport, AsyncClient

from decision_twin.api.dependencies import get_advisor, get_clock, get_store
from decision_twin.infrastructure.kv_store import InMemoryKeyValueStore
from decision_twin.main import app
from decision_twin.services.decision_advisor import DecisionAdvisor
from tests.factories import FakeClock
from tests.services.mock_anthropic import MockAnthropicClient


@pytest.fixture
def api_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def api_clock():
    return FakeClock()


@pytest.fixture
def anthropic_mock():
    return MockAnthropicClient()


@pytest.fixture
async def client(api_store, api_clock, anthropic_mock):
    app.dependency_overrides[get_store] = lambda: api_store
    app.dependency_overrides[get_clock] = lambda: api_clock
    app.dependency_overrides[get_advisor] = lambda: DecisionAdvisor(
        anthropic_mock, model="claude-test",
    )
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def seeded_decision(client):
    res = await client.post("/api/v1/decisions", json={
        "title": "Move to Lisbon",
        "choice": "Move in spring",
        "alternatives": ["Stay", "Porto"],
        "category": "Personal",
        "confidence": 75,
        "tags": ["relocation"],
        "context": "Remote job makes it possible",
    })
    assert res.status_code == 201
    return res.json()
