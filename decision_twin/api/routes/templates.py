"""Template Routes — built-in plus custom entry-form templates."""

from fastapi import APIRouter, Depends, Response, status

from decision_twin.api.dependencies import get_template_registry
from decision_twin.core.domain_types import CANONICAL_CATEGORIES
from decision_twin.core.errors import EntityValidationError
from decision_twin.schemas.template import DecisionTemplate, TemplateCreate
from decision_twin.services.template_registry import TemplateRegistry

router = APIRouter(prefix="/api/v1/templates", tags=["templates"])


@router.get("", response_model=list[DecisionTemplate])
async def all_templates(registry: TemplateRegistry = Depends(get_template_registry)):
    return await registry.get_all_templates()


@router.get("/categories", response_model=list[str])
async def categories():
    return list(CANONICAL_CATEGORIES)


@router.get("/custom",response_model=list[DecisionTemplate])
async def custom_templates(registry: TemplateRegistry = Depends(get_template_registry)):
    return await registry.get_custom_templates()


@router.post("", response_model=DecisionTemplate, status_code=status.HTTP_201_CREATED)
async def create_template(
    body: TemplateCreate, registry: TemplateRegistry = Depends(get_template_registry),
):
    return await registry.create_custom_template(body)


@router.put("/{template_id}", response_model=DecisionTemplate)
async def save_template(
    template_id: str, body: DecisionTemplate,
    registry: TemplateRegistry = Depends(get_template_registry),
):
    if body.id != template_id:
        raise EntityValidationError("Body id does not match path", "id")
    await registry.save_custom_template(body)
    return body


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: str, registry: TemplateRegistry = Depends(get_template_registry),
):
    await registry.delete_custom_template(template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
