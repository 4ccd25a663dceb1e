"""Reminder Schemas — follow-up reminders stored as one array at `reminders`.

Invariants:
    - id = "<decisionId>-<type>" for the three standard types
    - decision_title is a snapshot taken at creation (no cascading rename)
    - snoozed_until is present only while status is snoozed
"""

from pydantic import Field, model_validator

from decision_twin.core.domain_types import ReminderStatus, ReminderType
from decision_twin.schemas.base import CamelModel, UtcDatetime
from decision_twin.schemas.decision import Decision


class Reminder(CamelModel):
    id: str
    decision_id: str
    decision_title: str
    due_date: UtcDatetime
    type: ReminderType
    status: ReminderStatus = ReminderStatus.PENDING
    snoozed_until: UtcDatetime | None = None
    created_at: UtcDatetime


class PendingFollowup(Reminder):
    """Reminder decorated with its resolved decision."""
    decision: Decision


class ReminderStatusUpdate(CamelModel):
    """Explicit user action on a reminder."""
    status: ReminderStatus
    snooze_days: int | None = Field(None, ge=1, le=365)

    @model_validator(mode="after")
    def validate_snooze(self):
        if self.status == ReminderStatus.SNOOZED and not self.snooze_days:
            raise ValueError("snoozed status requires snooze_days")
        return self
