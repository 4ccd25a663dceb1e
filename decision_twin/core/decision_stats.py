"""Decision Stats — pure aggregates over decision lists.

Invariants:
    - No IO; inputs are already-validated Decision objects
    - success_rate is 0 when there are no outcomes at all, otherwise
      round(mean(rating) / 10 * 100)
    - Rounding is half-up (2.5 → 3), matching what users saw in the web UI
    - Newest-first ordering is stable: equal created_at keeps input order
"""

import math
from collections import Counter
from typing import Iterable

from decision_twin.schemas.decision import DashboardStats, Decision

_MIN_DECISIONS_FOR_INSIGHTS = 5
_TOP_CATEGORIES = 5


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_success_rate(decisions: Iterable[Decision]) -> int:
    ratings = [o.rating for d in decisions for o in d.outcomes]
    if not ratings:
        return 0
    return round_half_up(sum(ratings) / len(ratings) / 10 * 100)


def average_confidence(decisions: list[Decision]) -> int:
    if not decisions:
        return 0
    return round_half_up(sum(d.confidence for d in decisions) / len(decisions))


def sort_newest_first(decisions: list[Decision]) -> list[Decision]:
    return sorted(decisions, key=lambda d: d.created_at, reverse=True)


def mode_first_seen(values: Iterable[str]) -> str | None:
    """Most frequent value; ties go to the value encountered first."""
    counts = Counter(values)
    if not counts:
        return None
    # Counter preserves insertion order and max() returns the first maximum
    return max(counts, key=lambda k: counts[k])


def compute_dashboard_stats(decisions: list[Decision]) -> DashboardStats:
    categories = Counter(d.category for d in decisions)
    breakdown = sorted(categories.items(), key=lambda kv: kv[1], reverse=True)
    return DashboardStats(
        total_decisions=len(decisions),
        success_rate=calculate_success_rate(decisions),
        avg_confidence=average_confidence(decisions),
        category_breakdown=breakdown[:_TOP_CATEGORIES],
        has_enough_data=len(decisions) >= _MIN_DECISIONS_FOR_INSIGHTS,
    )
