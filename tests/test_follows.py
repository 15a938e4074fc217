"""Tests for following and unfollowing artists."""

from datetime import datetime

import pytest

from hiver.domain.relationships import FollowEdge
from hiver.engine import RelationshipEngine
from hiver.errors import SelfReferenceError, Unauthenticated
from hiver.relationship_store.local import LocalRelationshipStore


async def test_follow_is_directional(engine: RelationshipEngine) -> None:
    """Following B makes A a follower of B but not the other way round."""
    await engine.follow("alice", "erin")

    assert await engine.get_follow_status("alice", "erin") is True
    assert await engine.get_follow_status("erin", "alice") is False


async def test_follow_self_is_rejected(engine: RelationshipEngine) -> None:
    with pytest.raises(SelfReferenceError):
        await engine.follow("alice", "alice")


async def test_follow_requires_viewer(engine: RelationshipEngine) -> None:
    with pytest.raises(Unauthenticated):
        await engine.follow(None, "erin")
    with pytest.raises(Unauthenticated):
        await engine.unfollow("", "erin")


async def test_follow_status_without_viewer_is_false(engine: RelationshipEngine) -> None:
    await engine.follow("alice", "erin")

    assert await engine.get_follow_status(None, "erin") is False


async def test_follow_twice_keeps_one_edge(
    engine: RelationshipEngine, relationship_store: LocalRelationshipStore
) -> None:
    """A second follow returns the existing edge instead of creating another."""
    first = await engine.follow("alice", "erin")
    second = await engine.follow("alice", "erin")

    assert second.created_at == first.created_at
    assert await relationship_store.count_followers("erin") == 1


async def test_unfollow_missing_edge_is_noop(engine: RelationshipEngine) -> None:
    await engine.follow("bob", "erin")

    await engine.unfollow("alice", "erin")

    assert await engine.get_follow_status("alice", "erin") is False
    assert await engine.count_followers("erin") == 1


async def test_follower_count_after_unfollow(engine: RelationshipEngine) -> None:
    """Three fans follow an artist and one unfollows."""
    for fan in ["alice", "bob", "carol"]:
        await engine.follow(fan, "erin")

    await engine.unfollow("bob", "erin")

    assert await engine.count_followers("erin") == 2
    assert await engine.get_follow_status("bob", "erin") is False


async def test_list_following_newest_first() -> None:
    store = LocalRelationshipStore.from_data(
        follows=[
            FollowEdge(follower="alice", followee="erin", created_at=datetime(2025, 1, 1)),
            FollowEdge(follower="alice", followee="bob", created_at=datetime(2025, 3, 1)),
            FollowEdge(follower="carol", followee="erin", created_at=datetime(2025, 2, 1)),
        ]
    )

    following = await RelationshipEngine(store).list_following("alice")

    assert [edge.followee for edge in following] == ["bob", "erin"]
