"""Weekly Review Service — per-week reflection records at `review:<weekStart>`.

Invariants:
    - save_weekly_review() overwrites the whole record for its week_start
    - build_weekly_review() never persists; it returns the saved review or a
      freshly computed one
    - Weeks are computed in UTC
    - generate_reflection_questions() always yields questions: advisor text,
      else lines containing '?', else the built-in fallback set

Design Decisions:
    - Advisor is optional; without one the fallback questions are used
    - Fallback questions are translated to the user's language via
      deep-translator (run in a worker thread, it blocks on network IO)
"""

import asyncio
import logging

from decision_twin.core import week_summary
from decision_twin.core.clock import Clock, utc_now
from decision_twin.core.domain_types import PromptType
from decision_twin.core.errors import AdvisorAPIError
from decision_twin.core.language_strings import coerce_language
from decision_twin.core.parse_advice import (
    MAX_REFLECTION_QUESTIONS, parse_reflection_questions,
)
from decision_twin.core.repository_protocols import AdviceGateway, KeyValueStore
from decision_twin.schemas.advice import AdviceSettings
from decision_twin.schemas.review import LookingAhead, WeeklyReview, WeeklyReviewSave
from decision_twin.services.record_io import list_decisions, read_model, write_model
from decision_twin.services.reminder_engine import ReminderEngine
from decision_twin.services.translate_fallback import translate_questions

logger = logging.getLogger(__name__)

REVIEW_PREFIX = "review:"


def review_key(week_start: str) -> str:
    return f"{REVIEW_PREFIX}{week_start}"


class WeeklyReviewService:
    def __init__(
        self,
        store: KeyValueStore,
        reminders: ReminderEngine,
        advisor: AdviceGateway | None = None,
        clock: Clock = utc_now,
    ):
        self.store = store
        self.reminders = reminders
        self.advisor = advisor
        self.clock = clock

    def current_week_start(self) -> str:
        return week_summary.get_week_start(self.clock())

    async def get_weekly_review(self, week_start: str) -> WeeklyReview | None:
        return await read_model(self.store, review_key(week_start), WeeklyReview)

    async def save_weekly_review(self, review: WeeklyReview) -> None:
        await write_model(self.store, review_key(review.week_start), review)

    async def get_all_review_weeks(self) -> list[str]:
        items = await self.store.list(REVIEW_PREFIX)
        weeks = [item.key[len(REVIEW_PREFIX):] for item in items]
        # yyyy-MM-dd sorts chronologically as text
        return sorted(weeks, reverse=True)

    async def has_current_week_review(self) -> bool:
        return await self.get_weekly_review(self.current_week_start()) is not None

    async def build_weekly_review(self, week_start: str) -> WeeklyReview:
        saved = await self.get_weekly_review(week_start)
        if saved is not None:
            return saved

        decisions = await list_decisions(self.store)
        week_decisions = week_summary.select_week_decisions(decisions, week_start)
        followups = await self.reminders.get_pending_followups()
        now = self.clock()
        return WeeklyReview(
            week_start=week_start,
            summary=week_summary.compute_week_summary(week_decisions),
            wins=week_summary.extract_wins(decisions, week_start),
            looking_ahead=LookingAhead(
                upcoming_followups=week_summary.upcoming_followups(followups),
            ),
            created_at=now,
            updated_at=now,
        )

    async def save_reflection(
        self, week_start: str, data: WeeklyReviewSave,
    ) -> WeeklyReview:
        review = await self.build_weekly_review(week_start)
        update = {
            "reflection_answers": {**review.reflection_answers, **data.reflection_answers},
            "updated_at": self.clock(),
        }
        if data.week_rating is not None:
            update["week_rating"] = data.week_rating
        if data.week_goal is not None:
            update["week_goal"] = data.week_goal
        review = review.model_copy(update=update)
        await self.save_weekly_review(review)
        logger.info(f"Weekly review saved for {week_start}")
        return review

    async def generate_reflection_questions(
        self, week_start: str, settings: AdviceSettings | None = None,
    ) -> list[str]:
        """Ask the advisor for questions; store them on the week's review."""
        settings = settings or AdviceSettings()
        review = await self.build_weekly_review(week_start)
        decisions = week_summary.select_week_decisions(
            await list_decisions(self.store), week_start,
        )

        questions: list[str] = []
        if self.advisor is not None:
            try:
                content = await self.advisor.invoke(
                    PromptType.WEEKLY_REFLECTION.value,
                    {
                        "decisions": [d.to_dict() for d in decisions],
                        "weekSummary": review.summary.to_dict(),
                        "settings": settings.to_dict(),
                    },
                )
                questions = parse_reflection_questions(content)[:MAX_REFLECTION_QUESTIONS]
            except AdvisorAPIError as e:
                logger.warning(
                    f"Reflection questions unavailable: {e.message}",
                    extra={"prompt_type": PromptType.WEEKLY_REFLECTION.value},
                )

        if not questions:
            questions = await asyncio.to_thread(
                translate_questions,
                week_summary.fallback_reflection_questions(len(decisions)),
                coerce_language(settings.language),
            )

        review = review.model_copy(
            update={"reflection_questions": questions, "updated_at": self.clock()},
        )
        await self.save_weekly_review(review)
        return questions
