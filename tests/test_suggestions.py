"""Tests for "people you may know" suggestions."""

from hiver.domain.profile import Profile
from hiver.engine import RelationshipEngine
from hiver.profile_store.local import LocalProfileStore
from hiver.ranking.suggestions import SuggestionRanker, normalize_interests, rank_suggestions
from hiver.relationship_store.local import LocalRelationshipStore
from tests.fakes import UnavailableProfileStore, UnavailableRelationshipStore


def test_normalize_interests_ignores_case_and_whitespace() -> None:
    assert normalize_interests([" Music", "music ", "ART", ""]) == {"music": "Music", "art": "ART"}


def test_rank_orders_by_shared_interests_then_id(test_profiles: list[Profile]) -> None:
    viewer = test_profiles[0]

    suggestions = rank_suggestions(viewer, test_profiles, excluded=set(), limit=10)

    assert [s.user_id for s in suggestions] == ["erin", "bob", "carol", "dave"]
    assert [s.shared_interest_count for s in suggestions] == [3, 2, 1, 0]
    assert suggestions[1].shared_interests == ["Music", "Art"]


def test_rank_breaks_ties_by_id() -> None:
    viewer = Profile(id="v", name="V", interests=["chess"])
    candidates = [
        Profile(id="zed", name="Zed", interests=["Chess"]),
        Profile(id="amy", name="Amy", interests=["chess"]),
    ]

    suggestions = rank_suggestions(viewer, candidates, excluded=set(), limit=10)

    assert [s.user_id for s in suggestions] == ["amy", "zed"]


def test_rank_respects_limit(test_profiles: list[Profile]) -> None:
    suggestions = rank_suggestions(test_profiles[0], test_profiles, excluded=set(), limit=2)

    assert [s.user_id for s in suggestions] == ["erin", "bob"]
    assert rank_suggestions(test_profiles[0], test_profiles, excluded=set(), limit=0) == []


async def test_suggest_excludes_self_and_every_edge(
    engine: RelationshipEngine,
    relationship_store: LocalRelationshipStore,
    profile_store: LocalProfileStore,
) -> None:
    """Connected, pending sent and pending received candidates are all left out."""
    connected = await engine.request_connection("alice", "erin")
    await engine.accept_connection(connected.id, "erin")
    await engine.request_connection("alice", "bob")
    await engine.request_connection("carol", "alice")

    ranker = SuggestionRanker(relationship_store, profile_store)
    suggestions = await ranker.suggest("alice")

    assert [s.user_id for s in suggestions] == ["dave"]


async def test_following_does_not_exclude(
    engine: RelationshipEngine,
    relationship_store: LocalRelationshipStore,
    profile_store: LocalProfileStore,
) -> None:
    await engine.follow("alice", "erin")

    suggestions = await SuggestionRanker(relationship_store, profile_store).suggest("alice")

    assert suggestions[0].user_id == "erin"


async def test_suggest_uses_candidate_pool(
    relationship_store: LocalRelationshipStore, profile_store: LocalProfileStore
) -> None:
    pool = [Profile(id="newbie", name="Newbie", interests=["hiking"])]

    suggestions = await SuggestionRanker(relationship_store, profile_store).suggest(
        "alice", candidate_pool=pool
    )

    assert [(s.user_id, s.shared_interests) for s in suggestions] == [("newbie", ["Hiking"])]


async def test_suggest_for_unknown_viewer_has_no_overlap(
    relationship_store: LocalRelationshipStore, profile_store: LocalProfileStore
) -> None:
    suggestions = await SuggestionRanker(relationship_store, profile_store).suggest("stranger")

    assert [s.user_id for s in suggestions] == ["alice", "bob", "carol", "dave", "erin"]
    assert all(s.shared_interest_count == 0 for s in suggestions)


async def test_suggest_is_recomputed_each_call(
    engine: RelationshipEngine,
    relationship_store: LocalRelationshipStore,
    profile_store: LocalProfileStore,
) -> None:
    ranker = SuggestionRanker(relationship_store, profile_store)
    assert "erin" in [s.user_id for s in await ranker.suggest("alice")]

    await engine.request_connection("alice", "erin")

    assert "erin" not in [s.user_id for s in await ranker.suggest("alice")]


async def test_suggest_fails_open(profile_store: LocalProfileStore) -> None:
    """A store outage yields an empty list rather than an error."""
    relationships_down = SuggestionRanker(UnavailableRelationshipStore(), profile_store)
    profiles_down = SuggestionRanker(LocalRelationshipStore(), UnavailableProfileStore())

    assert await relationships_down.suggest("alice") == []
    assert await profiles_down.suggest("alice") == []
