"""Advice Schemas — the decision-ai request/response contract and stored insights.

Invariants:
    - AdviceRequest mirrors the POST body of the decision-ai endpoint
    - AdviceResponse.content is free text (markdown-ish), possibly non-JSON
    - Decisions inside a request are trusted as sent (no store lookup)
    - A guided session that fails validation is treated as absent (start over)
"""

from typing import Literal

from pydantic import BaseModel, Field

from decision_twin.core.domain_types import PromptType
from decision_twin.schemas.base import CamelModel, UtcDatetime
from decision_twin.schemas.decision import Decision, DecisionDraft
from decision_twin.schemas.review import WeekSummary


class GuidedAnswer(CamelModel):
    question: str
    answer: str


class OptionRating(CamelModel):
    option: str
    rating: int = Field(ge=1, le=10)


class AdviceSettings(CamelModel):
    tone: str = "encouraging"
    advice_style: str = "balanced"
    show_confidence_scores: bool = True
    language: str = "en"


class AdviceRequest(CamelModel):
    type: PromptType
    decisions: list[Decision] = Field(default_factory=list)
    current_decision: DecisionDraft | None = None
    question: str | None = Field(None, max_length=5000)
    guided_answers: list[GuidedAnswer] | None = None
    option_ratings: list[OptionRating] | None = None
    week_summary: WeekSummary | None = None
    text_content: str | None = Field(None, max_length=20_000)
    settings: AdviceSettings | None = None


class AdviceResponse(CamelModel):
    content: str
    type: PromptType


class GuidedQuestion(CamelModel):
    id: str
    question: str
    placeholder: str = ""


class GuidedOption(CamelModel):
    id: str
    title: str
    description: str = ""
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)


class InsightPattern(BaseModel):
    pattern: str
    confidence: Literal["high", "medium", "low"]
    examples: list[str] = Field(default_factory=list)


class Insights(CamelModel):
    """AI-generated pattern summary, persisted at `insights`."""
    top_patterns: list[InsightPattern] = Field(default_factory=list)
    success_factors: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    personality: str = ""
    generated_at: int


GUIDED_STEP_COUNT = 5


class GuidedSession(CamelModel):
    """Resumable guided-decision progress, persisted at `guided_session`.

    `step` indexes question, clarifying, options, rating, recommendation.
    """
    step: int = Field(0, ge=0, lt=GUIDED_STEP_COUNT)
    decision_question: str = ""
    questions: list[GuidedQuestion] = Field(default_factory=list)
    answers: dict[str, str] = Field(default_factory=dict)
    options: list[GuidedOption] = Field(default_factory=list)
    ratings: dict[str, int] = Field(default_factory=dict)
    recommendation: str = ""
    saved_at: UtcDatetime | None = None
