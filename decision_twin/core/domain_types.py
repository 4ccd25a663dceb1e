"""Domain Types — closed value sets used across the codebase.

Invariants:
    - Ids are opaque strings
    - All closed value sets encoded as str Enums — no raw string matching
    - Category is deliberately NOT an enum: any string is accepted,
      CANONICAL_CATEGORIES is only the list offered to users

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


CANONICAL_CATEGORIES: tuple[str, ...] = (
    "Career", "Finance", "Health", "Relationships",
    "Personal", "Education", "Purchase", "Other",
)


# ─── Enums ───────────────────────────────────────────────────────

class ReminderType(str, Enum):
    """Follow-up offsets. Value doubles as the reminder id suffix."""
    ONE_DAY = "1day"
    SEVEN_DAY = "7day"
    THIRTY_DAY = "30day"


REMINDER_OFFSET_DAYS: dict[ReminderType, int] = {
    ReminderType.ONE_DAY: 1,
    ReminderType.SEVEN_DAY: 7,
    ReminderType.THIRTY_DAY: 30,
}


class ReminderStatus(str, Enum):
    """Stored reminder status. Eligibility is computed, never stored."""
    PENDING = "pending"
    SNOOZED = "snoozed"
    COMPLETED = "completed"


class ShareType(str, Enum):
    FULL = "full"
    SUMMARY = "summary"


class ConfidenceTrend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class DateRange(str, Enum):
    """History window, counted back from now."""
    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "3months"
    YEAR = "year"


DATE_RANGE_DAYS: dict[DateRange, int] = {
    DateRange.WEEK: 7,
    DateRange.MONTH: 30,
    DateRange.THREE_MONTHS: 90,
    DateRange.YEAR: 365,
}


class OutcomeStatus(str, Enum):
    ALL = "all"
    WITH_OUTCOME = "with-outcome"
    WITHOUT_OUTCOME = "without-outcome"


class HistorySort(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    CONFIDENCE_HIGH = "confidence-high"
    CONFIDENCE_LOW = "confidence-low"


class Tone(str, Enum):
    ENCOURAGING = "encouraging"
    HONEST = "honest"
    ANALYTICAL = "analytical"
    FRIENDLY = "friendly"


class AdviceStyle(str, Enum):
    DIRECT = "direct"
    EXPLORATORY = "exploratory"
    BALANCED = "balanced"


class Language(str, Enum):
    """Supported UI/advice languages."""
    EN = "en"
    ES = "es"
    FR = "fr"
    DE = "de"
    PT = "pt"


class PromptType(str, Enum):
    """Advisor request types accepted by the decision-ai endpoint."""
    PREDICT = "predict"
    ALTERNATIVES = "alternatives"
    BIASES = "biases"
    REPLAY = "replay"
    CHAT = "chat"
    GUIDED_QUESTIONS = "guided-questions"
    GUIDED_OPTIONS = "guided-options"
    GUIDED_RECOMMENDATION = "guided-recommendation"
    WEEKLY_REFLECTION = "weekly-reflection"
    PARSE_TEXT = "parse-text"


class JournalFormat(str, Enum):
    DAYONE = "dayone"
    OBSIDIAN = "obsidian"
    MARKDOWN = "markdown"
