"""Decision Repository — decisions, embedded outcomes, draft, insights and guided-session slots.

Invariants:
    - One decision per key `decision:<id>`; save() is a full overwrite and
      performs no validation
    - get() of a malformed record is None; list() skips malformed records
      and returns newest first (stable on equal created_at)
    - delete() also removes the decision's reminders; shares are untouched
    - add_outcome() on a missing decision returns None and writes nothing;
      otherwise appends, saves, then completes ALL reminders of the decision
    - create() is the only place ids and created_at are assigned
    - save_guided_session() stamps saved_at; an unreadable session reads as None

Design Decisions:
    - Reminders via an injected ReminderEngine; webhook via an optional
      IntegrationService so the repository stays usable without one
"""

import logging
import uuid

from decision_twin.core.clock import Clock, utc_now
from decision_twin.core.decision_stats import compute_dashboard_stats
from decision_twin.core.repository_protocols import KeyValueStore
from decision_twin.schemas.advice import GuidedSession, Insights
from decision_twin.schemas.decision import (
    DashboardStats, Decision, DecisionCreate, DecisionDraft, Outcome, OutcomeCreate,
)
from decision_twin.services.integrations import IntegrationService
from decision_twin.services.record_io import (
    decision_key, list_decisions, read_model, write_model,
)
from decision_twin.services.reminder_engine import ReminderEngine

logger = logging.getLogger(__name__)

DRAFT_KEY = "decision_draft"
INSIGHTS_KEY = "insights"
GUIDED_SESSION_KEY = "guided_session"


class DecisionRepository:
    def __init__(
        self,
        store: KeyValueStore,
        reminders: ReminderEngine,
        integrations: IntegrationService | None = None,
        clock: Clock = utc_now,
    ):
        self.store = store
        self.reminders = reminders
        self.integrations = integrations
        self.clock = clock

    # --- Decisions -------------------------------------------------------------

    async def save(self, decision: Decision) -> None:
        await write_model(self.store, decision_key(decision.id), decision)

    async def get(self, decision_id: str) -> Decision | None:
        return await read_model(self.store, decision_key(decision_id), Decision)

    async def list(self) -> list[Decision]:
        return await list_decisions(self.store)

    async def delete(self, decision_id: str) -> None:
        await self.store.remove(decision_key(decision_id))
        await self.reminders.delete_reminders_for_decision(decision_id)
        logger.info("Decision deleted", extra={"decision_id": decision_id})

    async def create(self, data: DecisionCreate) -> Decision:
        """Assign id/created_at, save, schedule reminders, notify the webhook."""
        decision = Decision(
            id=str(uuid.uuid4()), created_at=self.clock(), outcomes=[],
            **data.model_dump(),
        )
        await self.save(decision)
        await self.reminders.create_reminders_for_decision(decision)
        if self.integrations is not None:
            await self.integrations.trigger_webhook(decision)
        logger.info("Decision logged", extra={"decision_id": decision.id})
        return decision

    # --- Outcomes --------------------------------------------------------------

    async def add_outcome(self, decision_id: str, outcome: Outcome) -> Decision | None:
        decision = await self.get(decision_id)
        if decision is None:
            return None
        decision.outcomes = [*decision.outcomes, outcome]
        await self.save(decision)
        await self.reminders.mark_decision_reminders_completed(decision_id)
        return decision

    async def record_outcome(
        self, decision_id: str, data: OutcomeCreate,
    ) -> Decision | None:
        outcome = Outcome(
            id=str(uuid.uuid4()), created_at=self.clock(), **data.model_dump(),
        )
        return await self.add_outcome(decision_id, outcome)

    # --- Aggregates ------------------------------------------------------------

    async def dashboard_stats(self) -> DashboardStats:
        return compute_dashboard_stats(await self.list())

    # --- Draft slot ------------------------------------------------------------

    async def save_draft(self, draft: DecisionDraft) -> None:
        await write_model(self.store, DRAFT_KEY, draft)

    async def get_draft(self) -> DecisionDraft | None:
        return await read_model(self.store, DRAFT_KEY, DecisionDraft)

    async def clear_draft(self) -> None:
        await self.store.remove(DRAFT_KEY)

    # --- Insights --------------------------------------------------------------

    async def save_insights(self, insights: Insights) -> None:
        await write_model(self.store, INSIGHTS_KEY, insights)

    async def get_insights(self) -> Insights | None:
        return await read_model(self.store, INSIGHTS_KEY, Insights)

    async def clear_insights(self) -> None:
        await self.store.remove(INSIGHTS_KEY)

    # --- Guided session --------------------------------------------------------

    async def save_guided_session(self, session: GuidedSession) -> GuidedSession:
        stamped = session.model_copy(update={"saved_at": self.clock()})
        await write_model(self.store, GUIDED_SESSION_KEY, stamped)
        return stamped

    async def get_guided_session(self) -> GuidedSession | None:
        return await read_model(self.store, GUIDED_SESSION_KEY, GuidedSession)

    async def clear_guided_session(self) -> None:
        await self.store.remove(GUIDED_SESSION_KEY)
