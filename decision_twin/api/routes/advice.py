"""Advisor Routes — the decision-ai proxy plus structured guided-decision helpers.

Invariants:
    - POST /decision-ai returns {content, type}; an unknown type is a 400
      UNKNOWN_PROMPT_TYPE, rate limit 429, exhausted credit 402
    - Request settings default to the stored app settings
    - Guided helpers never fail on model output: unusable JSON yields the
      built-in fallback set, translated to the request language
    - The guided session slot is resumable: GET returns null when nothing
      readable is stored
"""

import asyncio

from fastapi import APIRouter, Body, Depends, Response, status

from decision_twin.api.dependencies import (
    get_advisor, get_repository, get_settings_service,
)
from decision_twin.core.domain_types import PromptType
from decision_twin.core.language_strings import coerce_language
from decision_twin.core.parse_advice import (
    FALLBACK_GUIDED_OPTIONS, FALLBACK_GUIDED_QUESTIONS,
    parse_guided_options, parse_guided_questions,
)
from decision_twin.schemas.advice import (
    AdviceResponse, GuidedOption, GuidedQuestion, GuidedSession,
)
from decision_twin.services.decision_advisor import DecisionAdvisor
from decision_twin.services.decision_repository import DecisionRepository
from decision_twin.services.settings_service import SettingsService
from decision_twin.services.translate_fallback import (
    translate_guided_options, translate_guided_questions,
)

router = APIRouter(prefix="/api/v1/decision-ai", tags=["decision-ai"])


async def _with_settings(payload: dict, settings_service: SettingsService) -> dict:
    if payload.get("settings"):
        return payload
    stored = await settings_service.get_advice_settings()
    return {**payload, "settings": stored.to_dict()}


def _language(payload: dict):
    return coerce_language((payload.get("settings") or {}).get("language"))


@router.post("", response_model=AdviceResponse)
async def decision_ai(
    body: dict = Body(...),
    advisor: DecisionAdvisor = Depends(get_advisor),
    settings_service: SettingsService = Depends(get_settings_service),
):
    prompt_type = str(body.get("type", ""))
    payload = await _with_settings(body, settings_service)
    content = await advisor.invoke(prompt_type, payload)
    return AdviceResponse(content=content, type=PromptType(prompt_type))


@router.post("/guided/questions", response_model=list[GuidedQuestion])
async def guided_questions(
    body: dict = Body(...),
    advisor: DecisionAdvisor = Depends(get_advisor),
    settings_service: SettingsService = Depends(get_settings_service),
):
    payload = await _with_settings(body, settings_service)
    content = await advisor.invoke(PromptType.GUIDED_QUESTIONS.value, payload)
    questions = parse_guided_questions(content)
    if questions:
        return questions
    return await asyncio.to_thread(
        translate_guided_questions, list(FALLBACK_GUIDED_QUESTIONS), _language(payload),
    )


@router.post("/guided/options", response_model=list[GuidedOption])
async def guided_options(
    body: dict = Body(...),
    advisor: DecisionAdvisor = Depends(get_advisor),
    settings_service: SettingsService = Depends(get_settings_service),
):
    payload = await _with_settings(body, settings_service)
    content = await advisor.invoke(PromptType.GUIDED_OPTIONS.value, payload)
    options = parse_guided_options(content)
    if options:
        return options
    return await asyncio.to_thread(
        translate_guided_options, list(FALLBACK_GUIDED_OPTIONS), _language(payload),
    )


# --- Guided session -------------------------------------------------------------


@router.get("/guided/session", response_model=GuidedSession | None)
async def get_guided_session(repo: DecisionRepository = Depends(get_repository)):
    return await repo.get_guided_session()


@router.put("/guided/session", response_model=GuidedSession)
async def save_guided_session(
    body: GuidedSession, repo: DecisionRepository = Depends(get_repository),
):
    return await repo.save_guided_session(body)


@router.delete("/guided/session", status_code=status.HTTP_204_NO_CONTENT)
async def clear_guided_session(repo: DecisionRepository = Depends(get_repository)):
    await repo.clear_guided_session()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
