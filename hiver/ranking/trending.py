from datetime import date
from typing import Callable, Dict, List

import numpy as np
from loguru import logger

from hiver.domain.hive import Hive, TrendingHive
from hiver.errors import StoreUnavailable
from hiver.hive_store.base import HiveStore


def trending_scores(
    rsvp_counts: np.ndarray, days_until: np.ndarray, gravity: float
) -> np.ndarray:
    """Score hives so that higher attendance and sooner dates rank higher."""
    return (rsvp_counts + 1.0) / np.power(days_until + 2.0, gravity)


def rank_trending(
    hives: List[Hive],
    rsvp_counts: Dict[str, int],
    today: date,
    limit: int,
    gravity: float = 1.5,
) -> List[TrendingHive]:
    """Order upcoming hives by trending score, ties by earliest date then ID."""
    upcoming = sorted((h for h in hives if h.event_date >= today), key=lambda h: h.id)
    if not upcoming or limit <= 0:
        return []

    counts = np.array([rsvp_counts.get(h.id, 0) for h in upcoming], dtype=np.float64)
    days = np.array([(h.event_date - today).days for h in upcoming], dtype=np.float64)
    scores = trending_scores(counts, days, gravity)

    # np.lexsort sorts by the last key first.
    order = np.lexsort((np.arange(len(upcoming)), days, -scores))
    return [
        TrendingHive(
            hive=upcoming[i],
            rsvp_count=int(counts[i]),
            trending_score=float(scores[i]),
        )
        for i in order[:limit]
    ]


class TrendingRanker:
    """Ranks upcoming hives by attendance and recency."""

    def __init__(
        self,
        hive_store: HiveStore,
        gravity: float = 1.5,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.hive_store = hive_store
        self.gravity = gravity
        self._today = today

    async def trending(self, limit: int = 5, today: date | None = None) -> List[TrendingHive]:
        """Top upcoming hives. Returns an empty list when the store is unavailable."""
        today = today or self._today()
        try:
            hives = await self.hive_store.list_upcoming_hives(today)
            counts = await self.hive_store.rsvp_counts([h.id for h in hives])
        except StoreUnavailable as e:
            logger.warning(f"Trending hives unavailable: {e}")
            return []
        return rank_trending(hives, counts, today, limit, self.gravity)
