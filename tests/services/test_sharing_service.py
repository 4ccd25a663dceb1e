"""Sharing Service tests — share lifecycle, comments and unread counts.

Invariants:
    - Revoked/expired shares disappear from reads but stay stored until cleanup
    - Comments land only on readable shares
"""

import random
from datetime import timedelta

import pytest

from decision_twin.core.domain_types import ShareType
from decision_twin.core.errors import EntityValidationError
from decision_twin.services.sharing_service import SharingService
from tests.factories import make_decision


@pytest.fixture
def sharing(store, clock):
    return SharingService(store, "https://twin.example/", clock, random.Random(3))


async def test_share_summary_truncates_context(sharing, clock):
    share = await sharing.share_decision(make_decision(context="z" * 300))
    assert share.share_type == ShareType.SUMMARY
    assert len(share.decision.context) == 203
    assert share.expires_at == clock() + timedelta(days=7)
    assert share.share_id.startswith("share_")


async def test_shared_decision_is_a_frozen_copy(sharing):
    decision = make_decision()
    share = await sharing.share_decision(decision, ShareType.FULL)
    decision.title = "renamed later"
    fetched = await sharing.get_shared_decision(share.share_id)
    assert fetched.decision.title == "Take the job"


async def test_expired_share_is_hidden_but_kept(sharing, clock):
    share = await sharing.share_decision(make_decision(), expire_days=1)
    clock.advance(days=1)
    assert await sharing.get_shared_decision(share.share_id) is not None
    clock.advance(seconds=1)
    assert await sharing.get_shared_decision(share.share_id) is None
    assert len(await sharing.get_shared_decisions()) == 1


async def test_revoked_share_is_hidden(sharing):
    share = await sharing.share_decision(make_decision())
    await sharing.revoke_share(share.share_id)
    assert await sharing.get_shared_decision(share.share_id) is None
    assert await sharing.get_shares_for_decision("d-1") == []
    assert await sharing.has_active_shares("d-1") is False


async def test_cleanup_drops_expired_and_revoked(sharing, clock):
    keep = await sharing.share_decision(make_decision(), expire_days=30)
    await sharing.share_decision(make_decision(), expire_days=1)
    revoked = await sharing.share_decision(make_decision(), expire_days=30)
    await sharing.revoke_share(revoked.share_id)
    clock.advance(days=2)

    assert await sharing.cleanup_expired_shares() == 2
    assert [s.share_id for s in await sharing.get_shared_decisions()] == [keep.share_id]


async def test_comments_on_readable_share(sharing):
    share = await sharing.share_decision(make_decision())
    comment = await sharing.add_comment(share.share_id, "Sam", "Bold move")
    assert comment.author == "Sam"
    assert [c.content for c in await sharing.get_comments(share.share_id)] == ["Bold move"]


async def test_comment_on_revoked_or_missing_share_is_rejected(sharing):
    share = await sharing.share_decision(make_decision())
    await sharing.revoke_share(share.share_id)
    assert await sharing.add_comment(share.share_id, "Sam", "hi") is None
    assert await sharing.add_comment("share_0_missing", "Sam", "hi") is None


async def test_unread_comments_follow_last_check(sharing, clock):
    share = await sharing.share_decision(make_decision())
    clock.advance(minutes=1)
    await sharing.add_comment(share.share_id, "A", "one")
    assert await sharing.get_unread_comments_count() == 1

    clock.advance(minutes=1)
    await sharing.mark_comments_as_read()
    assert await sharing.get_unread_comments_count() == 0

    clock.advance(minutes=1)
    await sharing.add_comment(share.share_id, "B", "two")
    assert await sharing.get_unread_comments_count() == 1


async def test_share_url(sharing):
    assert sharing.get_share_url("share_1_x") == "https://twin.example/shared/share_1_x"


async def test_sharing_settings_merge(sharing):
    assert (await sharing.get_sharing_settings()).default_expire_days == 7
    updated = await sharing.save_sharing_settings({"defaultExpireDays": 14, "enabled": True})
    assert updated.default_expire_days == 14
    assert (await sharing.get_sharing_settings()).enabled is True


async def test_invalid_sharing_settings_rejected(sharing):
    with pytest.raises(EntityValidationError):
        await sharing.save_sharing_settings({"defaultExpireDays": 0})
