"""Reminder Engine — persists the follow-up schedule and answers due/pending queries.

Invariants:
    - All reminders live in one JSON array at `reminders`; every mutation is
      read-all, transform, write-all
    - Due/pending eligibility is recomputed on each call against the current
      decisions and the injected clock
    - Updating an unknown reminder id rewrites the array unchanged (no error)

Design Decisions:
    - Reads decisions through record_io, not DecisionRepository, so the
      repository can own an engine without a cycle
    - dismiss() is an alias for completing the reminder
"""

import logging

from decision_twin.core import reminder_rules
from decision_twin.core.clock import Clock, utc_now
from decision_twin.core.domain_types import ReminderStatus
from decision_twin.core.repository_protocols import KeyValueStore
from decision_twin.schemas.decision import Decision
from decision_twin.schemas.reminder import PendingFollowup, Reminder
from decision_twin.services.record_io import (
    list_decisions, read_model_list, write_model_list,
)

logger = logging.getLogger(__name__)

REMINDERS_KEY = "reminders"


class ReminderEngine:
    def __init__(self, store: KeyValueStore, clock: Clock = utc_now):
        self.store = store
        self.clock = clock

    async def get_all(self) -> list[Reminder]:
        return await read_model_list(self.store, REMINDERS_KEY, Reminder)

    async def _write_all(self, reminders: list[Reminder]) -> None:
        await write_model_list(self.store, REMINDERS_KEY, reminders)

    async def create_reminders_for_decision(self, decision: Decision) -> list[Reminder]:
        reminders = reminder_rules.replace_for_decision(await self.get_all(), decision)
        await self._write_all(reminders)
        logger.info("Reminders scheduled", extra={"decision_id": decision.id})
        return [r for r in reminders if r.decision_id == decision.id]

    async def get_due_reminders(self) -> list[Reminder]:
        reminders = await self.get_all()
        decisions = await list_decisions(self.store)
        return reminder_rules.select_due(reminders, decisions, self.clock())

    async def get_pending_followups(self) -> list[PendingFollowup]:
        reminders = await self.get_all()
        decisions = await list_decisions(self.store)
        return reminder_rules.select_pending_followups(
            reminders, decisions, self.clock(),
        )

    async def update_reminder_status(
        self,
        reminder_id: str,
        status: ReminderStatus,
        snooze_days: float | None = None,
    ) -> Reminder | None:
        """Set status; return the updated reminder, or None for an unknown id."""
        reminders = reminder_rules.update_status(
            await self.get_all(), reminder_id, status, self.clock(), snooze_days,
        )
        await self._write_all(reminders)
        updated = next((r for r in reminders if r.id == reminder_id), None)
        if updated is None:
            logger.warning("Unknown reminder", extra={"reminder_id": reminder_id})
        return updated

    async def dismiss(self, reminder_id: str) -> Reminder | None:
        return await self.update_reminder_status(reminder_id, ReminderStatus.COMPLETED)

    async def complete(self, reminder_id: str) -> Reminder | None:
        return await self.update_reminder_status(reminder_id, ReminderStatus.COMPLETED)

    async def snooze(self, reminder_id: str, days: float) -> Reminder | None:
        return await self.update_reminder_status(
            reminder_id, ReminderStatus.SNOOZED, snooze_days=days,
        )

    async def mark_decision_reminders_completed(self, decision_id: str) -> None:
        reminders = reminder_rules.complete_for_decision(
            await self.get_all(), decision_id,
        )
        await self._write_all(reminders)

    async def delete_reminders_for_decision(self, decision_id: str) -> None:
        reminders = [r for r in await self.get_all() if r.decision_id != decision_id]
        await self._write_all(reminders)
