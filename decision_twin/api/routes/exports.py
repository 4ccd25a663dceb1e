"""Export & Import Routes — Notion/ICS/journal exports, CSV and free-text imports.

Invariants:
    - Imports only parse; nothing is saved until the client posts decisions
    - Free-text import goes through the advisor (parse-text); an empty or
      unparseable answer yields an empty list
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from decision_twin.api.dependencies import get_advisor, get_clock, get_repository
from decision_twin.core.clock import Clock
from decision_twin.core.domain_types import JournalFormat, PromptType
from decision_twin.core.errors import ErrorContext, ResourceNotFoundError
from decision_twin.core.journal_export import (
    export_to_journal_format, export_to_notion, generate_ics_events, parse_csv,
)
from decision_twin.core.parse_advice import parse_extracted_decisions
from decision_twin.schemas.journal import (
    CsvImport, JournalExport, ParsedDecision, TextImport,
)
from decision_twin.services.decision_advisor import DecisionAdvisor
from decision_twin.services.decision_repository import DecisionRepository

router = APIRouter(prefix="/api/v1/exports", tags=["exports"])


@router.get("/notion", response_class=PlainTextResponse)
async def notion_export(
    repo: DecisionRepository = Depends(get_repository),
    clock: Clock = Depends(get_clock),
):
    content = export_to_notion(await repo.list(), clock())
    return PlainTextResponse(
        content, media_type="text/markdown",
        headers={"Content-Disposition": 'attachment; filename="decisions-notion.md"'},
    )


@router.get("/calendar", response_class=PlainTextResponse)
async def calendar_export(
    repo: DecisionRepository = Depends(get_repository),
    clock: Clock = Depends(get_clock),
):
    content = generate_ics_events(await repo.list(), clock())
    return PlainTextResponse(
        content, media_type="text/calendar",
        headers={"Content-Disposition": 'attachment; filename="decision-reviews.ics"'},
    )


@router.get("/journal", response_model=list[JournalExport])
async def journal_export_all(
    format: JournalFormat = Query(JournalFormat.MARKDOWN),
    repo: DecisionRepository = Depends(get_repository),
):
    return [export_to_journal_format(d, format) for d in await repo.list()]


@router.get("/journal/{decision_id}", response_model=JournalExport)
async def journal_export_one(
    decision_id: str,
    format: JournalFormat = Query(JournalFormat.MARKDOWN),
    repo: DecisionRepository = Depends(get_repository),
):
    decision = await repo.get(decision_id)
    if decision is None:
        raise ResourceNotFoundError(
            "Decision", decision_id, ErrorContext(decision_id=decision_id),
        )
    return export_to_journal_format(decision, format)


@router.post("/import/csv", response_model=list[ParsedDecision])
async def import_csv(body: CsvImport):
    return parse_csv(body.content)


@router.post("/import/text", response_model=list[ParsedDecision])
async def import_text(
    body: TextImport, advisor: DecisionAdvisor = Depends(get_advisor),
):
    content = await advisor.invoke(
        PromptType.PARSE_TEXT.value, {"textContent": body.text, "decisions": []},
    )
    return parse_extracted_decisions(content)
