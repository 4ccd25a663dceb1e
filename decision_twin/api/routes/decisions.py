"""Decision Routes — journal CRUD, outcomes, the draft slot, insights and stats.

Invariants:
    - Static paths (/stats, /draft, /insights) are declared before /{decision_id}
    - A missing decision is always a 404 ResourceNotFoundError
    - PUT /{decision_id} requires the body id to match the path
    - GET "" with no query parameters lists every decision newest first
"""

from fastapi import APIRouter, Depends, Query, Response, status

from decision_twin.api.dependencies import get_clock, get_repository
from decision_twin.core.clock import Clock
from decision_twin.core.decision_filters import HistoryFilter, filter_decisions
from decision_twin.core.domain_types import DateRange, HistorySort, OutcomeStatus
from decision_twin.core.errors import (
    EntityValidationError, ErrorContext, ResourceNotFoundError,
)
from decision_twin.schemas.advice import Insights
from decision_twin.schemas.decision import (
    DashboardStats, Decision, DecisionCreate, DecisionDraft, OutcomeCreate,
)
from decision_twin.services.decision_repository import DecisionRepository

router = APIRouter(prefix="/api/v1/decisions", tags=["decisions"])


def _not_found(decision_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Decision", decision_id, ErrorContext(decision_id=decision_id),
    )


@router.get("", response_model=list[Decision])
async def list_decisions(
    q: str = Query("", max_length=200),
    category: str | None = None,
    date_range: DateRange = Query(DateRange.ALL, alias="dateRange"),
    min_confidence: int = Query(0, ge=0, le=100, alias="minConfidence"),
    max_confidence: int = Query(100, ge=0, le=100, alias="maxConfidence"),
    outcome_status: OutcomeStatus = Query(OutcomeStatus.ALL, alias="outcomeStatus"),
    sort: HistorySort = Query(HistorySort.NEWEST, alias="sortBy"),
    repo: DecisionRepository = Depends(get_repository),
    clock: Clock = Depends(get_clock),
):
    """History view: every decision, optionally searched, narrowed and reordered."""
    filters = HistoryFilter(
        query=q, category=category, date_range=date_range,
        min_confidence=min_confidence, max_confidence=max_confidence,
        outcome_status=outcome_status, sort=sort,
    )
    return filter_decisions(await repo.list(), filters, clock())


@router.post("", response_model=Decision, status_code=status.HTTP_201_CREATED)
async def create_decision(
    body: DecisionCreate, repo: DecisionRepository = Depends(get_repository),
):
    return await repo.create(body)


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(repo: DecisionRepository = Depends(get_repository)):
    return await repo.dashboard_stats()


# --- Draft ----------------------------------------------------------------------


@router.get("/draft", response_model=DecisionDraft | None)
async def get_draft(repo: DecisionRepository = Depends(get_repository)):
    return await repo.get_draft()


@router.put("/draft", status_code=status.HTTP_204_NO_CONTENT)
async def save_draft(
    body: DecisionDraft, repo: DecisionRepository = Depends(get_repository),
):
    await repo.save_draft(body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/draft", status_code=status.HTTP_204_NO_CONTENT)
async def clear_draft(repo: DecisionRepository = Depends(get_repository)):
    await repo.clear_draft()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Insights -------------------------------------------------------------------


@router.get("/insights", response_model=Insights | None)
async def get_insights(repo: DecisionRepository = Depends(get_repository)):
    return await repo.get_insights()


@router.put("/insights", status_code=status.HTTP_204_NO_CONTENT)
async def save_insights(
    body: Insights, repo: DecisionRepository = Depends(get_repository),
):
    await repo.save_insights(body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/insights", status_code=status.HTTP_204_NO_CONTENT)
async def clear_insights(repo: DecisionRepository = Depends(get_repository)):
    await repo.clear_insights()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Single decision ------------------------------------------------------------


@router.get("/{decision_id}", response_model=Decision)
async def get_decision(
    decision_id: str, repo: DecisionRepository = Depends(get_repository),
):
    decision = await repo.get(decision_id)
    if decision is None:
        raise _not_found(decision_id)
    return decision


@router.put("/{decision_id}", response_model=Decision)
async def save_decision(
    decision_id: str, body: Decision,
    repo: DecisionRepository = Depends(get_repository),
):
    """Full overwrite of a stored decision."""
    if body.id != decision_id:
        raise EntityValidationError(
            "Body id does not match path", "id", ErrorContext(decision_id=decision_id),
        )
    await repo.save(body)
    return body


@router.delete("/{decision_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_decision(
    decision_id: str, repo: DecisionRepository = Depends(get_repository),
):
    await repo.delete(decision_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{decision_id}/outcomes", response_model=Decision,
    status_code=status.HTTP_201_CREATED,
)
async def record_outcome(
    decision_id: str, body: OutcomeCreate,
    repo: DecisionRepository = Depends(get_repository),
):
    decision = await repo.record_outcome(decision_id, body)
    if decision is None:
        raise _not_found(decision_id)
    return decision
