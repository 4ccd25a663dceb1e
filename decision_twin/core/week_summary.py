"""Week Summary — pure weekly-review computations over a decision list.

Invariants:
    - get_week_start() canonicalizes any date/datetime to its Monday, yyyy-MM-dd;
      this string is the only identity of a review
    - The week window is [week_start 00:00 UTC, week_start + 7 days)
    - most_active_day / primary_category: mode with ties to first encountered,
      None for an empty week
    - avg_confidence: half-up rounded mean, 0 for an empty week
    - confidence_trend is always STABLE (historical comparison not implemented)
    - Wins: decisions created strictly before the week with at least one
      outcome rated >= 7 and not would-choose-differently; first three of
      the given (newest-first) order; snapshot of the LAST outcome
"""

from datetime import date, datetime, time, timedelta, timezone

from decision_twin.core.clock import as_utc
from decision_twin.core.decision_stats import average_confidence, mode_first_seen
from decision_twin.core.domain_types import ConfidenceTrend
from decision_twin.schemas.decision import Decision
from decision_twin.schemas.reminder import PendingFollowup
from decision_twin.schemas.review import UpcomingFollowup, WeekSummary, Win

WIN_MIN_RATING = 7
MAX_WINS = 3
MAX_UPCOMING_FOLLOWUPS = 5
DEFAULT_WIN_TEXT = "Great outcome!"
_WEEK_FORMAT = "%Y-%m-%d"
_WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday",
    "Friday", "Saturday", "Sunday",
)


def get_week_start(value: date | datetime | None = None) -> str:
    if value is None:
        value = datetime.now(timezone.utc)
    if isinstance(value, datetime):
        value = as_utc(value).date()
    monday = value - timedelta(days=value.weekday())
    return monday.strftime(_WEEK_FORMAT)


def parse_week_start(week_start: str) -> datetime:
    """Monday 00:00 UTC of a yyyy-MM-dd week key."""
    day = datetime.strptime(week_start, _WEEK_FORMAT).date()
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def week_window(week_start: str) -> tuple[datetime, datetime]:
    start = parse_week_start(week_start)
    return start, start + timedelta(days=7)


def select_week_decisions(
    decisions: list[Decision], week_start: str,
) -> list[Decision]:
    start, end = week_window(week_start)
    return [d for d in decisions if start <= d.created_at < end]


def weekday_name(value: datetime) -> str:
    return _WEEKDAY_NAMES[as_utc(value).weekday()]


def compute_week_summary(week_decisions: list[Decision]) -> WeekSummary:
    if not week_decisions:
        return WeekSummary()
    return WeekSummary(
        decision_count=len(week_decisions),
        most_active_day=mode_first_seen(
            weekday_name(d.created_at) for d in week_decisions
        ),
        primary_category=mode_first_seen(d.category for d in week_decisions),
        confidence_trend=ConfidenceTrend.STABLE,
        avg_confidence=average_confidence(week_decisions),
    )


def _is_win(decision: Decision) -> bool:
    return any(
        o.rating >= WIN_MIN_RATING and not o.would_choose_differently
        for o in decision.outcomes
    )


def extract_wins(decisions: list[Decision], week_start: str) -> list[Win]:
    start = parse_week_start(week_start)
    winners = [
        d for d in decisions if d.created_at < start and _is_win(d)
    ][:MAX_WINS]
    wins = []
    for d in winners:
        last = d.outcomes[-1]
        wins.append(Win(
            decision_id=d.id,
            title=d.title,
            outcome=last.reflection or DEFAULT_WIN_TEXT,
            rating=last.rating,
        ))
    return wins


def upcoming_followups(
    followups: list[PendingFollowup],
) -> list[UpcomingFollowup]:
    return [
        UpcomingFollowup(
            decision_id=f.decision_id, title=f.decision_title, due_date=f.due_date,
        )
        for f in followups[:MAX_UPCOMING_FOLLOWUPS]
    ]


def fallback_reflection_questions(decision_count: int) -> list[str]:
    return [
        f"You made {decision_count} decisions this week. What pattern do you notice?",
        "Which decision are you most uncertain about?",
        "What would you do differently next week?",
    ]


def canonical_week_start(value: str) -> str:
    """Monday key of the week containing a yyyy-MM-dd date; ValueError if unparseable."""
    return get_week_start(datetime.strptime(value, _WEEK_FORMAT).date())
