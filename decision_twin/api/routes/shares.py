"""Share Routes — create, read, revoke and comment on shared decisions.

Invariants:
    - Reading, or commenting on, a revoked/expired share is a 404
    - New shares default to the stored sharing settings
"""

from fastapi import APIRouter, Depends, Response, status

from decision_twin.api.dependencies import get_repository, get_sharing_service
from decision_twin.core.errors import ErrorContext, ResourceNotFoundError
from decision_twin.schemas.sharing import (
    CommentCreate, ShareCreate, SharedComment, SharedDecision, ShareLink,
    SharingSettings, SharingSettingsUpdate,
)
from decision_twin.services.decision_repository import DecisionRepository
from decision_twin.services.sharing_service import SharingService

router = APIRouter(prefix="/api/v1/shares", tags=["shares"])


def _share_not_found(share_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError("Share", share_id, ErrorContext(share_id=share_id))


@router.get("/settings", response_model=SharingSettings)
async def get_settings(service: SharingService = Depends(get_sharing_service)):
    return await service.get_sharing_settings()


@router.patch("/settings", response_model=SharingSettings)
async def update_settings(
    body: SharingSettingsUpdate, service: SharingService = Depends(get_sharing_service),
):
    return await service.save_sharing_settings(body.model_dump(exclude_none=True))


@router.post("", response_model=ShareLink, status_code=status.HTTP_201_CREATED)
async def create_share(
    body: ShareCreate,
    service: SharingService = Depends(get_sharing_service),
    repo: DecisionRepository = Depends(get_repository),
):
    decision = await repo.get(body.decision_id)
    if decision is None:
        raise ResourceNotFoundError(
            "Decision", body.decision_id, ErrorContext(decision_id=body.decision_id),
        )
    defaults = await service.get_sharing_settings()
    share = await service.share_decision(
        decision,
        body.share_type or defaults.default_share_type,
        body.expire_days or defaults.default_expire_days,
    )
    return ShareLink(share=share, url=service.get_share_url(share.share_id))


@router.get("/comments/unread")
async def unread_comments(service: SharingService = Depends(get_sharing_service)):
    return {"count": await service.get_unread_comments_count()}


@router.post("/comments/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_comments_read(service: SharingService = Depends(get_sharing_service)):
    await service.mark_comments_as_read()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/cleanup")
async def cleanup(service: SharingService = Depends(get_sharing_service)):
    return {"removed": await service.cleanup_expired_shares()}


@router.get("/decision/{decision_id}", response_model=list[SharedDecision])
async def shares_for_decision(
    decision_id: str, service: SharingService = Depends(get_sharing_service),
):
    return await service.get_shares_for_decision(decision_id)


@router.get("/decision/{decision_id}/active")
async def decision_has_active_shares(
    decision_id: str, service: SharingService = Depends(get_sharing_service),
):
    return {"active": await service.has_active_shares(decision_id)}


@router.get("/{share_id}", response_model=SharedDecision)
async def get_share(share_id: str, service: SharingService = Depends(get_sharing_service)):
    share = await service.get_shared_decision(share_id)
    if share is None:
        raise _share_not_found(share_id)
    return share


@router.delete("/{share_id}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_share(
    share_id: str, service: SharingService = Depends(get_sharing_service),
):
    await service.revoke_share(share_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{share_id}/comments", response_model=list[SharedComment])
async def get_comments(
    share_id: str, service: SharingService = Depends(get_sharing_service),
):
    return await service.get_comments(share_id)


@router.post(
    "/{share_id}/comments", response_model=SharedComment,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    share_id: str, body: CommentCreate,
    service: SharingService = Depends(get_sharing_service),
):
    comment = await service.add_comment(share_id, body.author, body.content)
    if comment is None:
        raise _share_not_found(share_id)
    return comment
