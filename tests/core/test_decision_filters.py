"""Tests for decision_filters — history search, filters and orderings."""

from datetime import timedelta

import pytest

from decision_twin.core.decision_filters import (
    HistoryFilter, filter_decisions, matches_query, sort_history,
)
from decision_twin.core.domain_types import DateRange, HistorySort, OutcomeStatus
from tests.factories import T0, make_decision, make_outcome

NOW = T0 + timedelta(days=60)


@pytest.fixture
def history():
    return [
        make_decision(
            id="recent", title="Buy a bike", choice="Road bike", category="Purchase",
            confidence=40, tags=["Fitness"], created_at=NOW - timedelta(days=2),
        ),
        make_decision(
            id="month", title="Switch teams", choice="Join platform", category="Career",
            confidence=90, created_at=NOW - timedelta(days=20),
            outcomes=[make_outcome()],
        ),
        make_decision(
            id="old", title="Move flats", choice="Stay put", category="Personal",
            confidence=65, created_at=NOW - timedelta(days=60),
        ),
    ]


def _ids(decisions):
    return [d.id for d in decisions]


def test_no_filters_is_newest_first(history):
    assert _ids(filter_decisions(list(reversed(history)), HistoryFilter(), NOW)) == [
        "recent", "month", "old",
    ]


@pytest.mark.parametrize("query,expected", [
    ("BIKE", ["recent"]),          # title, any case
    ("platform", ["month"]),       # choice
    ("fitn", ["recent"]),          # tag substring
    ("  ", ["recent", "month", "old"]),
    ("nothing", []),
])
def test_search_matches_title_choice_or_tags(history, query, expected):
    assert _ids(filter_decisions(history, HistoryFilter(query=query), NOW)) == expected


def test_blank_query_matches_everything():
    assert matches_query(make_decision(), "")


def test_category_is_exact(history):
    assert _ids(filter_decisions(history, HistoryFilter(category="Career"), NOW)) == ["month"]
    assert filter_decisions(history, HistoryFilter(category="career"), NOW) == []


@pytest.mark.parametrize("date_range,expected", [
    (DateRange.WEEK, ["recent"]),
    (DateRange.MONTH, ["recent", "month"]),
    (DateRange.THREE_MONTHS, ["recent", "month", "old"]),
    (DateRange.ALL, ["recent", "month", "old"]),
])
def test_date_range_counts_back_from_now(history, date_range, expected):
    assert _ids(filter_decisions(history, HistoryFilter(date_range=date_range), NOW)) == expected


def test_date_range_lower_bound_is_inclusive():
    edge = make_decision(created_at=NOW - timedelta(days=7))
    assert filter_decisions([edge], HistoryFilter(date_range=DateRange.WEEK), NOW) == [edge]


def test_confidence_bounds_are_inclusive(history):
    filters = HistoryFilter(min_confidence=40, max_confidence=65)
    assert _ids(filter_decisions(history, filters, NOW)) == ["recent", "old"]


def test_outcome_status(history):
    with_outcome = HistoryFilter(outcome_status=OutcomeStatus.WITH_OUTCOME)
    without = HistoryFilter(outcome_status=OutcomeStatus.WITHOUT_OUTCOME)
    assert _ids(filter_decisions(history, with_outcome, NOW)) == ["month"]
    assert _ids(filter_decisions(history, without, NOW)) == ["recent", "old"]


@pytest.mark.parametrize("order,expected", [
    (HistorySort.NEWEST, ["recent", "month", "old"]),
    (HistorySort.OLDEST, ["old", "month", "recent"]),
    (HistorySort.CONFIDENCE_HIGH, ["month", "old", "recent"]),
    (HistorySort.CONFIDENCE_LOW, ["recent", "old", "month"]),
])
def test_sort_orders(history, order, expected):
    assert _ids(sort_history(history, order)) == expected


def test_confidence_ties_keep_newest_first():
    older = make_decision(id="older", confidence=50)
    newer = make_decision(id="newer", confidence=50, created_at=T0 + timedelta(days=1))
    assert _ids(sort_history([older, newer], HistorySort.CONFIDENCE_HIGH)) == ["newer", "older"]
    assert _ids(sort_history([older, newer], HistorySort.CONFIDENCE_LOW)) == ["newer", "older"]
