"""Tests for week_summary — week keys, weekly aggregates and wins."""

from datetime import date, datetime, timedelta, timezone

import pytest

from decision_twin.core.domain_types import ConfidenceTrend
from decision_twin.core.week_summary import (
    DEFAULT_WIN_TEXT, canonical_week_start, compute_week_summary, extract_wins,
    fallback_reflection_questions, get_week_start, parse_week_start,
    select_week_decisions,
)
from tests.factories import T0, make_decision, make_outcome


# --- Week keys ----------------------------------------------------------------


def test_week_start_of_monday_is_itself():
    assert get_week_start(date(2024, 1, 1)) == "2024-01-01"


def test_week_start_of_sunday_is_previous_monday():
    assert get_week_start(date(2024, 1, 7)) == "2024-01-01"


def test_week_start_uses_utc_for_aware_datetimes():
    # 2024-01-08 01:00 in UTC+3 is still Sunday in UTC
    tz = timezone(timedelta(hours=3))
    assert get_week_start(datetime(2024, 1, 8, 1, 0, tzinfo=tz)) == "2024-01-01"


@pytest.mark.parametrize("offset", range(14))
def test_week_start_is_stable_through_parse(offset):
    day = T0 + timedelta(days=offset)
    week = get_week_start(day)
    assert get_week_start(parse_week_start(week)) == week
    assert parse_week_start(week).weekday() == 0


def test_canonical_week_start():
    assert canonical_week_start("2024-01-10") == "2024-01-08"


def test_canonical_week_start_rejects_garbage():
    with pytest.raises(ValueError):
        canonical_week_start("last-week")


# --- Summary ------------------------------------------------------------------


def test_select_week_decisions_uses_half_open_window():
    inside = make_decision(id="in", created_at=T0)
    edge = make_decision(id="edge", created_at=datetime(2024, 1, 8, tzinfo=timezone.utc))
    before = make_decision(id="before", created_at=T0 - timedelta(days=1))
    selected = select_week_decisions([inside, edge, before], "2024-01-01")
    assert [d.id for d in selected] == ["in"]


def test_empty_week_summary():
    summary = compute_week_summary([])
    assert summary.decision_count == 0
    assert summary.most_active_day is None
    assert summary.primary_category is None
    assert summary.avg_confidence == 0


def test_week_summary_aggregates():
    decisions = [
        make_decision(id="a", category="Finance", confidence=60, created_at=T0 + timedelta(days=2)),
        make_decision(id="b", category="Career", confidence=80, created_at=T0),
        make_decision(id="c", category="Career", confidence=90, created_at=T0 + timedelta(days=2)),
    ]
    summary = compute_week_summary(decisions)
    assert summary.decision_count == 3
    assert summary.most_active_day == "Wednesday"
    assert summary.primary_category == "Career"
    assert summary.avg_confidence == 77
    assert summary.confidence_trend == ConfidenceTrend.STABLE


# --- Wins ---------------------------------------------------------------------


def test_wins_only_from_decisions_before_the_week():
    old = make_decision(
        id="old", created_at=T0 - timedelta(days=10),
        outcomes=[make_outcome(rating=9, reflection="Worked out")],
    )
    this_week = make_decision(id="new", outcomes=[make_outcome(rating=10)])
    wins = extract_wins([this_week, old], "2024-01-01")
    assert [w.decision_id for w in wins] == ["old"]
    assert wins[0].outcome == "Worked out"
    assert wins[0].rating == 9


def test_regretted_or_low_rated_outcomes_are_not_wins():
    regret = make_decision(
        id="r", created_at=T0 - timedelta(days=3),
        outcomes=[make_outcome(rating=9, would_choose_differently=True)],
    )
    low = make_decision(
        id="l", created_at=T0 - timedelta(days=3), outcomes=[make_outcome(rating=6)],
    )
    assert extract_wins([regret, low], "2024-01-01") == []


def test_win_snapshot_uses_last_outcome_and_default_text():
    decision = make_decision(
        created_at=T0 - timedelta(days=5),
        outcomes=[
            make_outcome(id="o-1", rating=9, reflection="first"),
            make_outcome(id="o-2", rating=4, reflection=""),
        ],
    )
    win = extract_wins([decision], "2024-01-01")[0]
    assert win.rating == 4
    assert win.outcome == DEFAULT_WIN_TEXT


def test_wins_capped_at_three():
    decisions = [
        make_decision(
            id=str(i), created_at=T0 - timedelta(days=i + 1),
            outcomes=[make_outcome(rating=8)],
        )
        for i in range(5)
    ]
    assert [w.decision_id for w in extract_wins(decisions, "2024-01-01")] == ["0", "1", "2"]


def test_fallback_questions_mention_count():
    questions = fallback_reflection_questions(4)
    assert len(questions) == 3
    assert "4 decisions" in questions[0]
