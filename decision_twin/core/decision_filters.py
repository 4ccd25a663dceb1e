"""Decision Filters — history search, narrowing and ordering.

Invariants:
    - Search is a case-insensitive substring match on title, choice or any tag
    - Category matches exactly; None means every category
    - Date ranges count back from `now`; the lower bound is inclusive
    - Confidence bounds are inclusive
    - Every ordering is stable: ties keep newest-first order
"""

from dataclasses import dataclass
from datetime import datetime

from decision_twin.core.clock import add_days
from decision_twin.core.decision_stats import sort_newest_first
from decision_twin.core.domain_types import (
    DATE_RANGE_DAYS, DateRange, HistorySort, OutcomeStatus,
)
from decision_twin.schemas.decision import Decision


@dataclass(frozen=True)
class HistoryFilter:
    query: str = ""
    category: str | None = None
    date_range: DateRange = DateRange.ALL
    min_confidence: int = 0
    max_confidence: int = 100
    outcome_status: OutcomeStatus = OutcomeStatus.ALL
    sort: HistorySort = HistorySort.NEWEST


def matches_query(decision: Decision, query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    return (
        needle in decision.title.lower()
        or needle in decision.choice.lower()
        or any(needle in tag.lower() for tag in decision.tags)
    )


def _in_date_range(decision: Decision, date_range: DateRange, now: datetime) -> bool:
    if date_range == DateRange.ALL:
        return True
    return decision.created_at >= add_days(now, -DATE_RANGE_DAYS[date_range])


def _matches_outcome_status(decision: Decision, status: OutcomeStatus) -> bool:
    if status == OutcomeStatus.WITH_OUTCOME:
        return bool(decision.outcomes)
    if status == OutcomeStatus.WITHOUT_OUTCOME:
        return not decision.outcomes
    return True


def sort_history(decisions: list[Decision], order: HistorySort) -> list[Decision]:
    newest = sort_newest_first(decisions)
    if order == HistorySort.OLDEST:
        return sorted(newest, key=lambda d: d.created_at)
    if order == HistorySort.CONFIDENCE_HIGH:
        return sorted(newest, key=lambda d: d.confidence, reverse=True)
    if order == HistorySort.CONFIDENCE_LOW:
        return sorted(newest, key=lambda d: d.confidence)
    return newest


def filter_decisions(
    decisions: list[Decision], filters: HistoryFilter, now: datetime,
) -> list[Decision]:
    kept = [
        d for d in decisions
        if matches_query(d, filters.query)
        and (filters.category is None or d.category == filters.category)
        and _in_date_range(d, filters.date_range, now)
        and filters.min_confidence <= d.confidence <= filters.max_confidence
        and _matches_outcome_status(d, filters.outcome_status)
    ]
    return sort_history(kept, filters.sort)
