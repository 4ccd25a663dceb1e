"""Weekly Review Routes — list weeks, build/save a week's review, generate questions.

Invariants:
    - Any yyyy-MM-dd in the path is canonicalized to its Monday
    - Question generation falls back to the stored app settings when the
      body carries none
"""

from fastapi import APIRouter, Body, Depends

from decision_twin.api.dependencies import get_review_service, get_settings_service
from decision_twin.core.errors import EntityValidationError
from decision_twin.core.week_summary import canonical_week_start
from decision_twin.schemas.advice import AdviceSettings
from decision_twin.schemas.review import ReviewWeeks, WeeklyReview, WeeklyReviewSave
from decision_twin.services.settings_service import SettingsService
from decision_twin.services.weekly_review_service import WeeklyReviewService

router = APIRouter(prefix="/api/v1/reviews", tags=["reviews"])


def _week(week_start: str) -> str:
    try:
        return canonical_week_start(week_start)
    except ValueError:
        raise EntityValidationError(
            f"Invalid week start '{week_start}', expected yyyy-MM-dd", "week_start",
        )


@router.get("", response_model=ReviewWeeks)
async def review_weeks(service: WeeklyReviewService = Depends(get_review_service)):
    return ReviewWeeks(weeks=await service.get_all_review_weeks())


@router.get("/current", response_model=WeeklyReview)
async def current_review(service: WeeklyReviewService = Depends(get_review_service)):
    return await service.build_weekly_review(service.current_week_start())


@router.get("/current/exists")
async def current_review_exists(
    service: WeeklyReviewService = Depends(get_review_service),
):
    return {"exists": await service.has_current_week_review()}


@router.get("/{week_start}", response_model=WeeklyReview)
async def get_review(
    week_start: str, service: WeeklyReviewService = Depends(get_review_service),
):
    return await service.build_weekly_review(_week(week_start))


@router.put("/{week_start}", response_model=WeeklyReview)
async def save_review(
    week_start: str, body: WeeklyReviewSave,
    service: WeeklyReviewService = Depends(get_review_service),
):
    return await service.save_reflection(_week(week_start), body)


@router.post("/{week_start}/questions")
async def generate_questions(
    week_start: str,
    body: AdviceSettings | None = Body(None),
    service: WeeklyReviewService = Depends(get_review_service),
    settings_service: SettingsService = Depends(get_settings_service),
):
    if body is None:
        body = await settings_service.get_advice_settings()
    questions = await service.generate_reflection_questions(_week(week_start), body)
    return {"questions": questions}
