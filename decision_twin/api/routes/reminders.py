"""Reminder Routes — due list, pending follow-ups and user actions on a reminder."""

from fastapi import APIRouter, Depends, Query

from decision_twin.api.dependencies import get_reminder_engine
from decision_twin.core.errors import ResourceNotFoundError
from decision_twin.schemas.reminder import PendingFollowup, Reminder, ReminderStatusUpdate
from decision_twin.services.reminder_engine import ReminderEngine

router = APIRouter(prefix="/api/v1/reminders", tags=["reminders"])


def _or_404(reminder: Reminder | None, reminder_id: str) -> Reminder:
    if reminder is None:
        raise ResourceNotFoundError("Reminder", reminder_id)
    return reminder


@router.get("", response_model=list[Reminder])
async def list_reminders(engine: ReminderEngine = Depends(get_reminder_engine)):
    return await engine.get_all()


@router.get("/due", response_model=list[Reminder])
async def due_reminders(engine: ReminderEngine = Depends(get_reminder_engine)):
    return await engine.get_due_reminders()


@router.get("/pending", response_model=list[PendingFollowup])
async def pending_followups(engine: ReminderEngine = Depends(get_reminder_engine)):
    return await engine.get_pending_followups()


@router.patch("/{reminder_id}", response_model=Reminder)
async def update_status(
    reminder_id: str, body: ReminderStatusUpdate,
    engine: ReminderEngine = Depends(get_reminder_engine),
):
    updated = await engine.update_reminder_status(
        reminder_id, body.status, body.snooze_days,
    )
    return _or_404(updated, reminder_id)


@router.post("/{reminder_id}/dismiss", response_model=Reminder)
async def dismiss(
    reminder_id: str, engine: ReminderEngine = Depends(get_reminder_engine),
):
    return _or_404(await engine.dismiss(reminder_id), reminder_id)


@router.post("/{reminder_id}/complete", response_model=Reminder)
async def complete(
    reminder_id: str, engine: ReminderEngine = Depends(get_reminder_engine),
):
    return _or_404(await engine.complete(reminder_id), reminder_id)


@router.post("/{reminder_id}/snooze", response_model=Reminder)
async def snooze(
    reminder_id: str,
    days: int = Query(1, ge=1, le=365),
    engine: ReminderEngine = Depends(get_reminder_engine),
):
    return _or_404(await engine.snooze(reminder_id, days), reminder_id)
