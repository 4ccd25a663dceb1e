"""Decision Schemas — the root entity, its embedded outcomes, drafts and inputs.

Invariants:
    - Decision.id and created_at are assigned once, never mutated
    - Outcomes are embedded and append-only (no independent identity outside the decision)
    - Category is an open string; confidence is 0–100, rating 1–10
    - DecisionDraft accepts any partial, possibly-invalid form state
    - DecisionCreate/OutcomeCreate carry the form limits; the repository
      itself performs no validation
"""

from pydantic import BaseModel, Field, field_validator

from decision_twin.core.text_sanitize import sanitize_text
from decision_twin.schemas.base import CamelModel, UtcDatetime


class Outcome(CamelModel):
    """A rating/reflection recorded after the fact."""
    id: str
    rating: int = Field(ge=0, le=10)
    would_choose_differently: bool
    reflection: str = ""
    created_at: UtcDatetime


class Decision(CamelModel):
    """A logged decision. Persisted at decision:<id>."""
    id: str
    title: str
    choice: str
    alternatives: list[str] = Field(default_factory=list)
    category: str
    confidence: int = Field(ge=0, le=100)
    tags: list[str] = Field(default_factory=list)
    context: str = ""
    created_at: UtcDatetime
    outcomes: list[Outcome] = Field(default_factory=list)


class DecisionDraft(CamelModel):
    """In-progress entry form state. Single slot at decision_draft."""
    title: str | None = None
    choice: str | None = None
    alternatives: list[str] | None = None
    category: str | None = None
    confidence: int | None = None
    tags: list[str] | None = None
    context: str | None = None


# --- Inputs -------------------------------------------------------------------


class DecisionCreate(CamelModel):
    """Entry form submission."""
    title: str = Field(min_length=1, max_length=500)
    choice: str = Field(min_length=1, max_length=2000)
    alternatives: list[str] = Field(default_factory=list, max_length=20)
    category: str = Field(min_length=1)
    confidence: int = Field(ge=0, le=100)
    tags: list[str] = Field(default_factory=list, max_length=20)
    context: str = Field("", max_length=5000)

    @field_validator("title", "choice", "context", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return sanitize_text(v)
        return v

    @field_validator("alternatives")
    @classmethod
    def check_alternatives(cls, v: list[str]) -> list[str]:
        cleaned = [sanitize_text(a) for a in v]
        if any(len(a) > 500 for a in cleaned):
            raise ValueError("Alternative must be less than 500 characters")
        return [a for a in cleaned if a]

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: list[str]) -> list[str]:
        cleaned = [sanitize_text(t) for t in v]
        if any(len(t) > 50 for t in cleaned):
            raise ValueError("Tag must be less than 50 characters")
        deduped: list[str] = []
        for tag in cleaned:
            if tag and tag not in deduped:
                deduped.append(tag)
        return deduped


class OutcomeCreate(CamelModel):
    """Outcome form submission."""
    rating: int = Field(ge=1, le=10)
    would_choose_differently: bool
    reflection: str = Field("", max_length=2000)

    @field_validator("reflection", mode="before")
    @classmethod
    def strip_reflection(cls, v):
        if isinstance(v, str):
            return sanitize_text(v)
        return v


class DashboardStats(BaseModel):
    """Aggregates shown on the dashboard/insights views."""
    total_decisions: int
    success_rate: int
    avg_confidence: int
    category_breakdown: list[tuple[str, int]]
    has_enough_data: bool
