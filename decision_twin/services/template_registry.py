"""Template Registry — user-saved templates at `templates`, merged with the built-ins."""

import logging
import uuid

from decision_twin.core.default_templates import merge_catalog, upsert_template
from decision_twin.core.repository_protocols import KeyValueStore
from decision_twin.schemas.template import DecisionTemplate, TemplateCreate
from decision_twin.services.record_io import read_model_list, write_model_list

logger = logging.getLogger(__name__)

TEMPLATES_KEY = "templates"


class TemplateRegistry:
    def __init__(self, store: KeyValueStore):
        self.store = store

    async def get_custom_templates(self) -> list[DecisionTemplate]:
        return await read_model_list(self.store, TEMPLATES_KEY, DecisionTemplate)

    async def save_custom_template(self, template: DecisionTemplate) -> None:
        templates = upsert_template(await self.get_custom_templates(), template)
        await write_model_list(self.store, TEMPLATES_KEY, templates)

    async def create_custom_template(self, data: TemplateCreate) -> DecisionTemplate:
        template = DecisionTemplate(
            **data.model_dump(exclude={"id"}),
            id=data.id or f"custom-{uuid.uuid4().hex[:12]}",
            is_custom=True,
        )
        await self.save_custom_template(template)
        return template

    async def delete_custom_template(self, template_id: str) -> None:
        templates = [
            t for t in await self.get_custom_templates() if t.id != template_id
        ]
        await write_model_list(self.store, TEMPLATES_KEY, templates)

    async def get_all_templates(self) -> list[DecisionTemplate]:
        return merge_catalog(await self.get_custom_templates())
