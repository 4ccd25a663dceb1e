"""Service test fixtures — in-memory store, fixed clock, fake advisor.

Invariants:
    - Every test gets a fresh InMemoryKeyValueStore
    - Time is frozen via a mutable FakeClock; tests advance it explicitly
    - sql_store runs against a throwaway SQLite file (real SQLAlchemy path)

Design Decisions:
    - SQLite file under tmp_path instead of :memory: so every SqlKeyValueStore
      session sees the same database
"""

import pytest

from decision_twin.infrastructure.database import DatabaseSessionManager
from decision_twin.infrastructure.kv_store import InMemoryKeyValueStore, SqlKeyValueStore
from decision_twin.services.decision_repository import DecisionRepository
from decision_twin.services.reminder_engine import ReminderEngine
from tests.factories import FakeClock
from tests.services.mock_anthropic import FakeAdvisor


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def reminders(store, clock):
    return ReminderEngine(store, clock)


@pytest.fixture
def repo(store, reminders, clock):
    return DecisionRepository(store, reminders, clock=clock)


@pytest.fixture
def advisor():
    return FakeAdvisor()


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest.fixture
def sql_store(db_manager):
    return SqlKeyValueStore(db_manager)
