"""Sharing Service — expiring, revocable share links with comments.

Invariants:
    - All shares live in one JSON array at `shared_decisions`
    - Revoked or expired shares are invisible to every read path but stay
      stored until cleanup_expired_shares()
    - Comments are appended only to readable shares
    - `last_comments_check` holds a bare ISO timestamp, not JSON

Design Decisions:
    - Share settings are merged over defaults like the other settings slots
    - Share URLs come from the configured public base URL
"""

import logging
import random
import uuid
from datetime import datetime, timezone

from decision_twin.core import sharing_rules
from decision_twin.core.clock import Clock, add_days, as_utc, to_iso, utc_now
from decision_twin.core.domain_types import ShareType
from decision_twin.core.repository_protocols import KeyValueStore
from decision_twin.schemas.decision import Decision
from decision_twin.schemas.sharing import (
    SharedComment, SharedDecision, SharingSettings,
)
from decision_twin.services.record_io import (
    read_model, read_model_list, write_model, write_model_list,
)
from decision_twin.services.settings_service import merge_settings

logger = logging.getLogger(__name__)

SHARED_KEY = "shared_decisions"
SHARING_SETTINGS_KEY = "sharing_settings"
LAST_COMMENTS_CHECK_KEY = "last_comments_check"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SharingService:
    def __init__(
        self,
        store: KeyValueStore,
        public_base_url: str = "",
        clock: Clock = utc_now,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.public_base_url = public_base_url.rstrip("/")
        self.clock = clock
        self.rng = rng

    async def get_shared_decisions(self) -> list[SharedDecision]:
        return await read_model_list(self.store, SHARED_KEY, SharedDecision)

    async def _save_all(self, shares: list[SharedDecision]) -> None:
        await write_model_list(self.store, SHARED_KEY, shares)

    async def share_decision(
        self,
        decision: Decision,
        share_type: ShareType = ShareType.SUMMARY,
        expire_days: int = 7,
    ) -> SharedDecision:
        now = self.clock()
        share = SharedDecision(
            id=str(uuid.uuid4()),
            share_id=sharing_rules.generate_share_id(now, self.rng),
            decision_id=decision.id,
            decision=sharing_rules.snapshot_decision(decision, share_type),
            share_type=share_type,
            expires_at=add_days(now, expire_days),
            created_at=now,
        )
        shares = await self.get_shared_decisions()
        shares.append(share)
        await self._save_all(shares)
        logger.info(
            "Decision shared",
            extra={"decision_id": decision.id, "share_id": share.share_id},
        )
        return share

    async def get_shared_decision(self, share_id: str) -> SharedDecision | None:
        found = next(
            (s for s in await self.get_shared_decisions() if s.share_id == share_id),
            None,
        )
        if found is None or not sharing_rules.is_readable(found, self.clock()):
            return None
        return found

    async def get_shares_for_decision(self, decision_id: str) -> list[SharedDecision]:
        return [
            s for s in await self.get_shared_decisions()
            if s.decision_id == decision_id and not s.revoked
        ]

    async def revoke_share(self, share_id: str) -> None:
        shares = [
            s.model_copy(update={"revoked": True}) if s.share_id == share_id else s
            for s in await self.get_shared_decisions()
        ]
        await self._save_all(shares)
        logger.info("Share revoked", extra={"share_id": share_id})

    async def add_comment(
        self, share_id: str, author: str, content: str,
    ) -> SharedComment | None:
        shares = await self.get_shared_decisions()
        now = self.clock()
        target = next((s for s in shares if s.share_id == share_id), None)
        if target is None or not sharing_rules.is_readable(target, now):
            return None
        comment = SharedComment(
            id=str(uuid.uuid4()), share_id=share_id,
            author=author, content=content, created_at=now,
        )
        target.comments.append(comment)
        await self._save_all(shares)
        return comment

    async def get_comments(self, share_id: str) -> list[SharedComment]:
        share = await self.get_shared_decision(share_id)
        return share.comments if share else []

    async def cleanup_expired_shares(self) -> int:
        shares = await self.get_shared_decisions()
        now = self.clock()
        valid = [s for s in shares if sharing_rules.is_active(s, now)]
        await self._save_all(valid)
        removed = len(shares) - len(valid)
        if removed:
            logger.info(f"Removed {removed} expired or revoked shares")
        return removed

    async def has_active_shares(self, decision_id: str) -> bool:
        now = self.clock()
        return any(
            sharing_rules.is_active(s, now)
            for s in await self.get_shares_for_decision(decision_id)
        )

    def get_share_url(self, share_id: str) -> str:
        return f"{self.public_base_url}/shared/{share_id}"

    # --- Settings --------------------------------------------------------------

    async def get_sharing_settings(self) -> SharingSettings:
        stored = await read_model(self.store, SHARING_SETTINGS_KEY, SharingSettings)
        return stored or SharingSettings()

    async def save_sharing_settings(self, partial: dict) -> SharingSettings:
        updated = merge_settings(await self.get_sharing_settings(), partial)
        await write_model(self.store, SHARING_SETTINGS_KEY, updated)
        return updated

    # --- Comment notifications -------------------------------------------------

    async def _last_comments_check(self) -> datetime:
        raw = await self.store.get(LAST_COMMENTS_CHECK_KEY)
        if not raw:
            return _EPOCH
        try:
            return as_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))
        except ValueError:
            logger.warning(
                "Unreadable comment check timestamp",
                extra={"store_key": LAST_COMMENTS_CHECK_KEY},
            )
            return _EPOCH

    async def get_unread_comments_count(self) -> int:
        return sharing_rules.count_unread_comments(
            await self.get_shared_decisions(), await self._last_comments_check(),
        )

    async def mark_comments_as_read(self) -> None:
        await self.store.set(LAST_COMMENTS_CHECK_KEY, to_iso(self.clock()))
