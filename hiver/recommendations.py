"""LLM-backed hive recommendations with a trending fallback."""

from datetime import date
from typing import Callable

from loguru import logger
from starlette.concurrency import run_in_threadpool

from hiver.domain.hive import Recommendations
from hiver.errors import NotFound, Unauthenticated
from hiver.hive_store.base import HiveStore
from hiver.llms.base import LLMChat
from hiver.llms.schemas import LLMMessage
from hiver.profile_store.base import ProfileStore
from hiver.prompt import get_prompt
from hiver.ranking.trending import TrendingRanker


class HiveRecommender:
    """Recommends upcoming hives to a viewer.

    The LLM picks and orders hive IDs from the upcoming list. Whenever it fails
    or returns nothing usable, the trending ranking is served instead.
    """

    def __init__(
        self,
        *,
        profile_store: ProfileStore,
        hive_store: HiveStore,
        chatbot: LLMChat,
        trending_ranker: TrendingRanker,
        system_message: str,
        candidate_hives: int = 50,
        history: int = 10,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.profile_store = profile_store
        self.hive_store = hive_store
        self.chatbot = chatbot
        self.trending_ranker = trending_ranker
        self.system_message = system_message
        self.candidate_hives = candidate_hives
        self.history = history
        self._today = today

    async def recommend(self, viewer: str | None, limit: int = 5) -> Recommendations:
        if not viewer:
            raise Unauthenticated("Please sign in to get recommendations")
        profile = await self.profile_store.get_profile(viewer)
        if profile is None:
            raise NotFound(f"Profile {viewer} not found")

        today = self._today()
        past_hives = await self.hive_store.list_rsvped_hives(viewer, limit=self.history)
        upcoming = await self.hive_store.list_upcoming_hives(today, limit=self.candidate_hives)
        if not upcoming:
            return Recommendations(source="trending", hives=[])

        messages = [
            LLMMessage(role="system", content=self.system_message),
            LLMMessage(
                role="user",
                content=get_prompt(
                    profile=profile,
                    past_hives=past_hives,
                    upcoming_hives=upcoming,
                    limit=limit,
                ),
            ),
        ]

        logger.info(f"Generating recommendations for user: {viewer}")
        try:
            recommendation = await run_in_threadpool(self.chatbot.recommend, messages)
        except Exception as e:
            logger.error(f"AI recommendation failed, falling back to trending: {str(e)}")
            return await self._trending(limit, today)

        by_id = {hive.id: hive for hive in upcoming}
        hive_ids = list(dict.fromkeys(recommendation.hive_ids))
        hives = [by_id[hive_id] for hive_id in hive_ids if hive_id in by_id]

        if not hives:
            logger.warning(f"AI returned no known hive IDs for {viewer}, falling back to trending")
            return await self._trending(limit, today)
        return Recommendations(source="ai", hives=hives[:limit])

    async def _trending(self, limit: int, today: date) -> Recommendations:
        trending = await self.trending_ranker.trending(limit=limit, today=today)
        return Recommendations(source="trending", hives=[t.hive for t in trending])
