"""Settings Service — app and integration preferences, merged over defaults.

Invariants:
    - Missing or malformed stored settings read as the defaults
    - save_* merges the provided fields over the current value and persists
      the full object; an invalid merged value raises EntityValidationError
      and writes nothing
"""

from typing import TypeVar

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from decision_twin.core.errors import EntityValidationError
from decision_twin.core.repository_protocols import KeyValueStore
from decision_twin.schemas.advice import AdviceSettings
from decision_twin.schemas.base import CamelModel
from decision_twin.schemas.preferences import AppSettings, IntegrationSettings
from decision_twin.services.record_io import read_model, write_model

SETTINGS_KEY = "settings"
INTEGRATION_SETTINGS_KEY = "integration_settings"

M = TypeVar("M", bound=CamelModel)


def merge_settings(current: M, partial: dict) -> M:
    """Overlay camelCase or snake_case fields on current and revalidate."""
    overrides = {to_snake(key): value for key, value in partial.items()}
    try:
        return type(current).model_validate({**current.model_dump(), **overrides})
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"])
        raise EntityValidationError(f"Invalid setting: {first['msg']}", field)


class SettingsService:
    def __init__(self, store: KeyValueStore):
        self.store = store

    async def get_settings(self) -> AppSettings:
        return await read_model(self.store, SETTINGS_KEY, AppSettings) or AppSettings()

    async def save_settings(self, partial: dict) -> AppSettings:
        updated = merge_settings(await self.get_settings(), partial)
        await write_model(self.store, SETTINGS_KEY, updated)
        return updated

    async def get_advice_settings(self) -> AdviceSettings:
        """The advisor-facing subset of the stored app settings."""
        app = await self.get_settings()
        return AdviceSettings(
            tone=app.tone.value,
            advice_style=app.advice_style.value,
            show_confidence_scores=app.show_confidence_scores,
            language=app.language.value,
        )

    async def reset_settings(self) -> AppSettings:
        defaults = AppSettings()
        await write_model(self.store, SETTINGS_KEY, defaults)
        return defaults

    async def get_integration_settings(self) -> IntegrationSettings:
        stored = await read_model(
            self.store, INTEGRATION_SETTINGS_KEY, IntegrationSettings,
        )
        return stored or IntegrationSettings()

    async def save_integration_settings(self, partial: dict) -> IntegrationSettings:
        updated = merge_settings(await self.get_integration_settings(), partial)
        await write_model(self.store, INTEGRATION_SETTINGS_KEY, updated)
        return updated

