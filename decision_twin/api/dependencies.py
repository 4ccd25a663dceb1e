"""API Dependencies — FastAPI providers wiring services to the store, clock and advisor.

Invariants:
    - Every request gets fresh service objects over the process-wide store
    - Tests override get_store / get_clock / get_advisor via
      app.dependency_overrides; nothing else needs patching

Design Decisions:
    - Anthropic client cached per process (lru_cache, like get_settings)
    - The SQL store is the fallback; a host store injected at startup via
      set_host_store() takes precedence
"""

from functools import lru_cache

from fastapi import Depends

from decision_twin.config import get_settings
from decision_twin.core.clock import Clock, utc_now
from decision_twin.core.repository_protocols import KeyValueStore
from decision_twin.infrastructure.anthropic_client import ResilientAnthropicClient
from decision_twin.infrastructure.database import get_db_manager
from decision_twin.infrastructure.kv_store import SqlKeyValueStore, StorageAdapter
from decision_twin.services.decision_advisor import DecisionAdvisor
from decision_twin.services.decision_repository import DecisionRepository
from decision_twin.services.integrations import IntegrationService
from decision_twin.services.reminder_engine import ReminderEngine
from decision_twin.services.settings_service import SettingsService
from decision_twin.services.sharing_service import SharingService
from decision_twin.services.template_registry import TemplateRegistry
from decision_twin.services.weekly_review_service import WeeklyReviewService

_host_store: KeyValueStore | None = None


def set_host_store(store: KeyValueStore | None) -> None:
    global _host_store
    _host_store = store


def get_store() -> KeyValueStore:
    if _host_store is not None:
        return StorageAdapter(host=_host_store)
    return StorageAdapter(fallback=SqlKeyValueStore(get_db_manager()))


def get_clock() -> Clock:
    return utc_now


@lru_cache
def get_anthropic_client() -> ResilientAnthropicClient:
    settings = get_settings()
    return ResilientAnthropicClient(
        api_key=settings.anthropic_api_key,
        max_retries=settings.anthropic_max_retries,
        base_delay_ms=settings.anthropic_base_delay_ms,
        max_delay_ms=settings.anthropic_max_delay_ms,
        timeout_seconds=settings.anthropic_timeout_seconds,
    )


def get_advisor() -> DecisionAdvisor:
    settings = get_settings()
    return DecisionAdvisor(
        get_anthropic_client(),
        model=settings.advisor_model,
        max_tokens=settings.advisor_max_tokens,
        context_decisions=settings.advisor_context_decisions,
    )


def get_settings_service(store: KeyValueStore = Depends(get_store)) -> SettingsService:
    return SettingsService(store)


def get_reminder_engine(
    store: KeyValueStore = Depends(get_store), clock: Clock = Depends(get_clock),
) -> ReminderEngine:
    return ReminderEngine(store, clock)


def get_integration_service(
    settings: SettingsService = Depends(get_settings_service),
    clock: Clock = Depends(get_clock),
) -> IntegrationService:
    return IntegrationService(
        settings, timeout_seconds=get_settings().webhook_timeout_seconds, clock=clock,
    )


def get_repository(
    store: KeyValueStore = Depends(get_store),
    reminders: ReminderEngine = Depends(get_reminder_engine),
    integrations: IntegrationService = Depends(get_integration_service),
    clock: Clock = Depends(get_clock),
) -> DecisionRepository:
    return DecisionRepository(store, reminders, integrations, clock)


def get_template_registry(store: KeyValueStore = Depends(get_store)) -> TemplateRegistry:
    return TemplateRegistry(store)


def get_sharing_service(
    store: KeyValueStore = Depends(get_store), clock: Clock = Depends(get_clock),
) -> SharingService:
    return SharingService(store, get_settings().public_base_url, clock)


def get_review_service(
    store: KeyValueStore = Depends(get_store),
    reminders: ReminderEngine = Depends(get_reminder_engine),
    advisor: DecisionAdvisor = Depends(get_advisor),
    clock: Clock = Depends(get_clock),
) -> WeeklyReviewService:
    return WeeklyReviewService(store, reminders, advisor, clock)
