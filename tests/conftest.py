from datetime import date, datetime, time, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from hiver.api import create_app
from hiver.domain.hive import Hive, HiveCategory, Rsvp
from hiver.domain.post import Post, PostLike
from hiver.domain.profile import Profile, UserLevel, UserType
from hiver.engine import RelationshipEngine
from hiver.hive_store.local import LocalHiveStore
from hiver.post_store.local import LocalPostStore
from hiver.profile_store.local import LocalProfileStore
from hiver.relationship_store.local import LocalRelationshipStore
from tests.fakes import FakeLLMChat


@pytest.fixture
def today() -> date:
    return date.today()


@pytest.fixture
def test_profiles() -> list[Profile]:
    return [
        Profile(
            id="alice",
            name="Alice",
            interests=["Music", "Art", "Hiking"],
            location="Austin",
            level=UserLevel.EXPLORER,
            xp=120,
        ),
        Profile(id="bob", name="Bob", interests=["music", " art "]),
        Profile(id="carol", name="Carol", interests=["music"]),
        Profile(id="dave", name="Dave"),
        Profile(
            id="erin",
            name="Erin",
            user_type=UserType.ARTIST,
            interests=["music", "art", "hiking"],
        ),
    ]


@pytest.fixture
def test_hives(today: date) -> list[Hive]:
    return [
        Hive(
            id="hive-tomorrow",
            host_id="erin",
            title="Rooftop Jam",
            category=HiveCategory.MUSIC,
            event_date=today + timedelta(days=1),
            event_time=time(20, 0),
            location="Austin",
        ),
        Hive(
            id="hive-next-week",
            host_id="bob",
            title="Sketch Walk",
            category=HiveCategory.ARTS,
            event_date=today + timedelta(days=7),
            event_time=time(10, 0),
            location="Austin",
        ),
        Hive(
            id="hive-next-month",
            host_id="carol",
            title="Trail Run",
            category=HiveCategory.OUTDOORS,
            event_date=today + timedelta(days=30),
            event_time=time(7, 30),
            location="Round Rock",
        ),
        Hive(
            id="hive-yesterday",
            host_id="erin",
            title="Open Mic",
            category=HiveCategory.MUSIC,
            event_date=today - timedelta(days=1),
            event_time=time(19, 0),
            location="Austin",
        ),
    ]


@pytest.fixture
def test_rsvps() -> list[Rsvp]:
    return [
        Rsvp(hive_id="hive-next-week", user_id="bob"),
        Rsvp(hive_id="hive-next-week", user_id="carol"),
        Rsvp(hive_id="hive-next-week", user_id="dave"),
        Rsvp(hive_id="hive-yesterday", user_id="alice"),
    ]


@pytest.fixture
def test_posts() -> list[Post]:
    return [
        Post(
            id="post-single",
            author_id="erin",
            content="New single out Friday",
            created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        ),
        Post(
            id="post-tour",
            author_id="erin",
            content="Tour dates announced",
            created_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
        ),
        Post(
            id="post-sketches",
            author_id="bob",
            content="Sketches from the walk",
            created_at=datetime(2025, 2, 1, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def test_likes() -> list[PostLike]:
    return [
        PostLike(post_id="post-single", user_id="bob"),
        PostLike(post_id="post-single", user_id="carol"),
    ]


@pytest.fixture
def relationship_store() -> LocalRelationshipStore:
    return LocalRelationshipStore()


@pytest.fixture
def hive_store(test_hives: list[Hive], test_rsvps: list[Rsvp]) -> LocalHiveStore:
    return LocalHiveStore.from_data(hives=test_hives, rsvps=test_rsvps)


@pytest.fixture
def profile_store(test_profiles: list[Profile]) -> LocalProfileStore:
    return LocalProfileStore.from_data(profiles=test_profiles)


@pytest.fixture
def post_store(test_posts: list[Post], test_likes: list[PostLike]) -> LocalPostStore:
    return LocalPostStore.from_data(posts=test_posts, likes=test_likes)


@pytest.fixture
def engine(relationship_store: LocalRelationshipStore) -> RelationshipEngine:
    return RelationshipEngine(relationship_store)


@pytest.fixture
def fake_chat() -> FakeLLMChat:
    return FakeLLMChat(hive_ids=["hive-next-month", "hive-tomorrow"])


@pytest.fixture(autouse=True)
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Override settings for testing."""
    monkeypatch.setattr("hiver.config.settings.auth_password", "password")


@pytest.fixture
def test_client(
    relationship_store: LocalRelationshipStore,
    hive_store: LocalHiveStore,
    profile_store: LocalProfileStore,
    post_store: LocalPostStore,
    fake_chat: FakeLLMChat,
) -> TestClient:
    """Create test client with in-memory stores and a fake LLM."""
    app = create_app(
        relationship_store=relationship_store,
        hive_store=hive_store,
        profile_store=profile_store,
        post_store=post_store,
        chatbot=fake_chat,
    )
    return TestClient(app)
