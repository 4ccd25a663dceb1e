"""Weekly Review Schemas — one review per Monday-start week at review:<weekStart>.

Invariants:
    - week_start (yyyy-MM-dd) is the identity; saving overwrites in full
    - summary fields are derived, never set independently by users
    - wins are snapshots taken at computation time, not live links
"""

from pydantic import BaseModel, Field, field_validator

from decision_twin.core.domain_types import ConfidenceTrend
from decision_twin.core.text_sanitize import sanitize_text
from decision_twin.schemas.base import CamelModel, UtcDatetime


class WeekSummary(CamelModel):
    decision_count: int = 0
    most_active_day: str | None = None
    primary_category: str | None = None
    confidence_trend: ConfidenceTrend = ConfidenceTrend.STABLE
    avg_confidence: int = 0


class Win(CamelModel):
    decision_id: str
    title: str
    outcome: str
    rating: int


class UpcomingFollowup(CamelModel):
    decision_id: str
    title: str
    due_date: UtcDatetime


class LookingAhead(CamelModel):
    upcoming_followups: list[UpcomingFollowup] = Field(default_factory=list)
    suggested_focus_areas: list[str] = Field(default_factory=list)


class WeeklyReview(CamelModel):
    week_start: str
    summary: WeekSummary
    wins: list[Win] = Field(default_factory=list)
    reflection_questions: list[str] = Field(default_factory=list)
    reflection_answers: dict[str, str] = Field(default_factory=dict)
    looking_ahead: LookingAhead = Field(default_factory=LookingAhead)
    week_rating: int = Field(5, ge=1, le=10)
    week_goal: str = ""
    created_at: UtcDatetime
    updated_at: UtcDatetime


class WeeklyReviewSave(CamelModel):
    """User-entered part of a review."""
    week_rating: int | None = Field(None, ge=1, le=10)
    reflection_answers: dict[str, str] = Field(default_factory=dict)
    week_goal: str | None = Field(None, max_length=500)

    @field_validator("reflection_answers")
    @classmethod
    def check_answers(cls, v: dict[str, str]) -> dict[str, str]:
        if any(len(a) > 1000 for a in v.values()):
            raise ValueError("Answer must be less than 1000 characters")
        return v

    @field_validator("week_goal", mode="before")
    @classmethod
    def strip_goal(cls, v):
        if isinstance(v, str):
            return sanitize_text(v)
        return v


class ReviewWeeks(BaseModel):
    weeks: list[str]
