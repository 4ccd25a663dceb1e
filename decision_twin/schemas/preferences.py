"""Preference Schemas — user settings persisted at `settings` and `integration_settings`.

Invariants:
    - Stored values are merged over defaults on read (missing keys → default)
    - Update schemas are all-optional; only provided fields overwrite
"""

from typing import Literal

from pydantic import Field

from decision_twin.core.domain_types import AdviceStyle, Language, Tone
from decision_twin.schemas.base import CamelModel


class AppSettings(CamelModel):
    # Advisor personality
    tone: Tone = Tone.ENCOURAGING
    advice_style: AdviceStyle = AdviceStyle.BALANCED
    show_confidence_scores: bool = True
    language: Language = Language.EN

    # Privacy & data
    auto_delete_old_decisions: Literal["never", "1year", "2years"] = "never"

    # Notifications
    outcome_reminders: bool = True
    reminder_timing: Literal["1day", "3days", "1week", "custom"] = "1week"
    custom_reminder_days: int | None = 7
    daily_logging_reminder: bool = False
    daily_logging_reminder_time: str = Field("09:00", pattern=r"^\d{2}:\d{2}$")

    # Display
    theme: Literal["light", "dark", "auto"] = "dark"
    compact_view: bool = False
    default_chart_type: Literal["bar", "line", "pie", "area"] = "bar"

    # Advanced AI features
    advanced_ai: bool = True
    show_impact_predictor: bool = True
    show_alternative_suggester: bool = True
    show_bias_detector: bool = True
    show_decision_replay: bool = True


class IntegrationSettings(CamelModel):
    webhook_url: str = ""
    webhook_enabled: bool = False
    notion_database_id: str | None = None
