"""Tests for trending hive ranking."""

from datetime import date, time, timedelta

import numpy as np
import pytest

from hiver.domain.hive import Hive, Rsvp
from hiver.hive_store.local import LocalHiveStore
from hiver.ranking.trending import TrendingRanker, rank_trending, trending_scores
from tests.fakes import UnavailableHiveStore


def _hive(hive_id: str, event_date: date) -> Hive:
    return Hive(
        id=hive_id,
        host_id="host",
        title=hive_id,
        event_date=event_date,
        event_time=time(18, 0),
        location="Austin",
    )


def test_scores_reward_attendance_and_proximity() -> None:
    scores = trending_scores(
        np.array([0.0, 5.0, 0.0]), np.array([1.0, 1.0, 10.0]), gravity=1.5
    )

    assert scores[1] > scores[0] > scores[2]


async def test_trending_excludes_past_and_orders_by_score(
    hive_store: LocalHiveStore, today: date
) -> None:
    trending = await TrendingRanker(hive_store).trending(today=today)

    assert [t.hive.id for t in trending] == ["hive-tomorrow", "hive-next-week", "hive-next-month"]
    assert [t.rsvp_count for t in trending] == [0, 3, 0]
    assert trending[0].trending_score == pytest.approx(1 / 3**1.5)


async def test_trending_respects_limit(hive_store: LocalHiveStore, today: date) -> None:
    trending = await TrendingRanker(hive_store).trending(limit=1, today=today)

    assert [t.hive.id for t in trending] == ["hive-tomorrow"]


async def test_rsvps_can_move_a_hive_up(hive_store: LocalHiveStore, today: date) -> None:
    for user_id in ["alice", "erin"]:
        await hive_store.add_rsvp(Rsvp(hive_id="hive-next-week", user_id=user_id))

    trending = await TrendingRanker(hive_store).trending(today=today)

    assert trending[0].hive.id == "hive-next-week"
    assert trending[0].rsvp_count == 5


async def test_ranker_uses_injected_clock(hive_store: LocalHiveStore, today: date) -> None:
    ranker = TrendingRanker(hive_store, today=lambda: today + timedelta(days=10))

    trending = await ranker.trending()

    assert [t.hive.id for t in trending] == ["hive-next-month"]


def test_equal_scores_prefer_earliest_date() -> None:
    """With gravity 1, one RSVP two days out scores the same as none today."""
    today = date(2025, 6, 1)
    later = _hive("a-later", today + timedelta(days=2))
    sooner = _hive("b-sooner", today)

    trending = rank_trending([later, sooner], {"a-later": 1}, today, limit=5, gravity=1.0)

    assert trending[0].trending_score == trending[1].trending_score
    assert [t.hive.id for t in trending] == ["b-sooner", "a-later"]


def test_equal_scores_and_dates_order_by_id() -> None:
    today = date(2025, 6, 1)
    hives = [_hive("zulu", today), _hive("alpha", today)]

    trending = rank_trending(hives, {}, today, limit=5)

    assert [t.hive.id for t in trending] == ["alpha", "zulu"]


def test_rank_trending_empty() -> None:
    today = date(2025, 6, 1)

    assert rank_trending([], {}, today, limit=5) == []
    assert rank_trending([_hive("past", today - timedelta(days=1))], {}, today, limit=5) == []
    assert rank_trending([_hive("a", today)], {}, today, limit=0) == []


async def test_trending_fails_open() -> None:
    assert await TrendingRanker(UnavailableHiveStore()).trending() == []
