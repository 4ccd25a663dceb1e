"""Reminder Rules — schedule generation and due/pending eligibility, pure.

Invariants:
    - build_reminders() always yields exactly three reminders, ids
      "<decisionId>-1day|7day|30day", due at created_at + 1/7/30 days
    - replace_for_decision() drops every prior reminder of the decision
      before appending the new set (re-creation is idempotent, not additive)
    - Eligibility is recomputed on every read from (reminders, decisions, now);
      no stored "due" flag exists
    - A reminder is eligible iff: status != completed, not snoozed into the
      future, its decision exists, and no outcome on that decision has
      created_at >= reminder.created_at
    - Due additionally requires due_date <= now
    - Status transitions are unrestricted; snoozed_until is set only when
      snooze_days is given and cleared otherwise

Design Decisions:
    - Functions take `now` explicitly so callers (and tests) control time
    - Pending followups sort by due_date (stable) and keep the first per decision
"""

from datetime import datetime

from decision_twin.core.clock import add_days
from decision_twin.core.domain_types import (
    REMINDER_OFFSET_DAYS, ReminderStatus, ReminderType,
)
from decision_twin.schemas.decision import Decision
from decision_twin.schemas.reminder import PendingFollowup, Reminder


def reminder_id(decision_id: str, reminder_type: ReminderType) -> str:
    return f"{decision_id}-{reminder_type.value}"


def build_reminders(decision: Decision) -> list[Reminder]:
    """Three pending follow-ups anchored at the decision's creation time."""
    return [
        Reminder(
            id=reminder_id(decision.id, rtype),
            decision_id=decision.id,
            decision_title=decision.title,
            due_date=add_days(decision.created_at, days),
            type=rtype,
            status=ReminderStatus.PENDING,
            created_at=decision.created_at,
        )
        for rtype, days in REMINDER_OFFSET_DAYS.items()
    ]


def replace_for_decision(
    reminders: list[Reminder], decision: Decision,
) -> list[Reminder]:
    kept = [r for r in reminders if r.decision_id != decision.id]
    return kept + build_reminders(decision)


def apply_status(
    reminder: Reminder,
    status: ReminderStatus,
    now: datetime,
    snooze_days: float | None = None,
) -> Reminder:
    return reminder.model_copy(update={
        "status": status,
        "snoozed_until": add_days(now, snooze_days) if snooze_days else None,
    })


def update_status(
    reminders: list[Reminder],
    target_id: str,
    status: ReminderStatus,
    now: datetime,
    snooze_days: float | None = None,
) -> list[Reminder]:
    return [
        apply_status(r, status, now, snooze_days) if r.id == target_id else r
        for r in reminders
    ]


def complete_for_decision(
    reminders: list[Reminder], decision_id: str,
) -> list[Reminder]:
    return [
        r.model_copy(update={"status": ReminderStatus.COMPLETED})
        if r.decision_id == decision_id else r
        for r in reminders
    ]


def has_outcome_since(decision: Decision, since: datetime) -> bool:
    return any(o.created_at >= since for o in decision.outcomes)


def is_eligible(
    reminder: Reminder, decisions_by_id: dict[str, Decision], now: datetime,
) -> bool:
    if reminder.status == ReminderStatus.COMPLETED:
        return False
    if (
        reminder.status == ReminderStatus.SNOOZED
        and reminder.snoozed_until is not None
        and reminder.snoozed_until > now
    ):
        return False
    decision = decisions_by_id.get(reminder.decision_id)
    if decision is None:
        return False
    return not has_outcome_since(decision, reminder.created_at)


def _index(decisions: list[Decision]) -> dict[str, Decision]:
    # First occurrence wins, mirroring a linear find()
    index: dict[str, Decision] = {}
    for d in decisions:
        index.setdefault(d.id, d)
    return index


def select_due(
    reminders: list[Reminder], decisions: list[Decision], now: datetime,
) -> list[Reminder]:
    by_id = _index(decisions)
    return [
        r for r in reminders
        if r.due_date <= now and is_eligible(r, by_id, now)
    ]


def select_pending_followups(
    reminders: list[Reminder], decisions: list[Decision], now: datetime,
) -> list[PendingFollowup]:
    by_id = _index(decisions)
    eligible = [r for r in reminders if is_eligible(r, by_id, now)]
    eligible.sort(key=lambda r: r.due_date)

    seen: set[str] = set()
    followups: list[PendingFollowup] = []
    for r in eligible:
        if r.decision_id in seen:
            continue
        seen.add(r.decision_id)
        followups.append(PendingFollowup(
            **r.model_dump(), decision=by_id[r.decision_id],
        ))
    return followups
