"""Sharing Rules — share ids, decision snapshots and read-time visibility, pure.

Invariants:
    - A share embeds a copy of the decision; summary shares cut context to
      200 characters and append "..." only when something was cut
    - A share is readable iff not revoked and expires_at >= now
    - cleanup keeps only shares that are not revoked and expire strictly after now
"""

import random
import string
from datetime import datetime

from decision_twin.core.domain_types import ShareType
from decision_twin.schemas.decision import Decision
from decision_twin.schemas.sharing import SharedDecision

SUMMARY_CONTEXT_LIMIT = 200
_SHARE_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_SHARE_SUFFIX_LENGTH = 9


def generate_share_id(now: datetime, rng: random.Random | None = None) -> str:
    """share_<epoch ms>_<9 base36 chars>."""
    rng = rng or random.SystemRandom()
    suffix = "".join(
        rng.choice(_SHARE_SUFFIX_ALPHABET) for _ in range(_SHARE_SUFFIX_LENGTH)
    )
    return f"share_{int(now.timestamp() * 1000)}_{suffix}"


def summarize_context(context: str) -> str:
    if len(context) > SUMMARY_CONTEXT_LIMIT:
        return context[:SUMMARY_CONTEXT_LIMIT] + "..."
    return context


def snapshot_decision(decision: Decision, share_type: ShareType) -> Decision:
    snapshot = decision.model_copy(deep=True)
    if share_type == ShareType.SUMMARY:
        snapshot.context = summarize_context(snapshot.context)
    return snapshot


def is_readable(share: SharedDecision, now: datetime) -> bool:
    return not share.revoked and share.expires_at >= now


def is_active(share: SharedDecision, now: datetime) -> bool:
    return not share.revoked and share.expires_at > now


def count_unread_comments(
    shares: list[SharedDecision], last_checked: datetime,
) -> int:
    return sum(
        1 for s in shares for c in s.comments if c.created_at > last_checked
    )
