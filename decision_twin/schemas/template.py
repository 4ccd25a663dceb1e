"""Template Schemas — prefill patterns for the entry form."""

from pydantic import Field

from decision_twin.schemas.base import CamelModel


class DecisionTemplate(CamelModel):
    id: str
    name: str
    category: str
    tags: list[str] = Field(default_factory=list)
    title_placeholder: str = ""
    choice_placeholder: str = ""
    alternatives_placeholder: str = ""
    context_placeholder: str = ""
    icon: str = ""
    is_custom: bool | None = None


class TemplateCreate(CamelModel):
    """User-saved template; id assigned on save when absent."""
    id: str | None = None
    name: str = Field(min_length=1, max_length=100)
    category: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list, max_length=20)
    title_placeholder: str = Field("", max_length=500)
    choice_placeholder: str = Field("", max_length=2000)
    alternatives_placeholder: str = Field("", max_length=2000)
    context_placeholder: str = Field("", max_length=5000)
    icon: str = "📝"
