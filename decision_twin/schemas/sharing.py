"""Sharing Schemas — frozen, expiring, revocable projections of a decision.

Invariants:
    - decision is a copy taken at share time, never a live reference
    - revoked/expired shares stay stored until cleanup_expired_shares()
    - comments are append-only
"""

from pydantic import Field

from decision_twin.core.domain_types import ShareType
from decision_twin.schemas.base import CamelModel, UtcDatetime
from decision_twin.schemas.decision import Decision


class SharedComment(CamelModel):
    id: str
    share_id: str
    author: str
    content: str
    created_at: UtcDatetime


class SharedDecision(CamelModel):
    id: str
    share_id: str
    decision_id: str
    decision: Decision
    share_type: ShareType
    expires_at: UtcDatetime
    created_at: UtcDatetime
    revoked: bool = False
    comments: list[SharedComment] = Field(default_factory=list)


class SharingSettings(CamelModel):
    enabled: bool = False
    default_share_type: ShareType = ShareType.SUMMARY
    default_expire_days: int = Field(7, ge=1, le=365)


class SharingSettingsUpdate(CamelModel):
    enabled: bool | None = None
    default_share_type: ShareType | None = None
    default_expire_days: int | None = Field(None, ge=1, le=365)


class ShareCreate(CamelModel):
    decision_id: str
    share_type: ShareType | None = None
    expire_days: int | None = Field(None, ge=1, le=365)


class CommentCreate(CamelModel):
    author: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1, max_length=2000)


class ShareLink(CamelModel):
    share: SharedDecision
    url: str
