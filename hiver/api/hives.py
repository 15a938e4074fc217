"""Endpoints for hives, RSVPs, trending and recommended hives."""

from fastapi import APIRouter, Depends, Query, status

from hiver.api.auth import get_viewer, verify_session
from hiver.config import settings
from hiver.domain.hive import HiveDraft
from hiver.hives import HiveService
from hiver.ranking.trending import TrendingRanker
from hiver.recommendations import HiveRecommender


def _create_trending_endpoint(ranker: TrendingRanker):
    async def trending(limit: int = Query(settings.trending_limit, ge=1, le=50)):
        return await ranker.trending(limit=limit)

    return trending


def _create_recommended_endpoint(recommender: HiveRecommender):
    async def recommended(viewer: str = Depends(verify_session)):
        return await recommender.recommend(viewer, limit=settings.recommendation_limit)

    return recommended


def _create_hive_endpoints(service: HiveService):
    async def create_hive(draft: HiveDraft, viewer: str = Depends(verify_session)):
        return await service.create_hive(viewer, draft)

    async def get_hive(hive_id: str):
        return await service.get_hive(hive_id)

    async def rsvp_status(hive_id: str, viewer: str | None = Depends(get_viewer)):
        return {
            "hive_id": hive_id,
            "attending": await service.has_rsvp(viewer, hive_id),
            "rsvp_count": await service.attendance(hive_id),
        }

    async def rsvp(hive_id: str, viewer: str = Depends(verify_session)):
        await service.rsvp(viewer, hive_id)
        return {
            "hive_id": hive_id,
            "attending": True,
            "rsvp_count": await service.attendance(hive_id),
        }

    async def cancel_rsvp(hive_id: str, viewer: str = Depends(verify_session)):
        await service.cancel_rsvp(viewer, hive_id)
        return {
            "hive_id": hive_id,
            "attending": False,
            "rsvp_count": await service.attendance(hive_id),
        }

    return create_hive, get_hive, rsvp_status, rsvp, cancel_rsvp


def get_hives_router(
    *,
    hive_service: HiveService,
    trending_ranker: TrendingRanker,
    recommender: HiveRecommender,
) -> APIRouter:
    router = APIRouter(prefix="/api/hives")

    create_hive, get_hive, rsvp_status, rsvp, cancel_rsvp = _create_hive_endpoints(hive_service)

    router.post("", status_code=status.HTTP_201_CREATED)(create_hive)
    router.get("/trending")(_create_trending_endpoint(trending_ranker))
    router.get("/recommended")(_create_recommended_endpoint(recommender))
    router.get("/{hive_id}")(get_hive)
    router.get("/{hive_id}/rsvp")(rsvp_status)
    router.post("/{hive_id}/rsvp")(rsvp)
    router.delete("/{hive_id}/rsvp")(cancel_rsvp)

    return router
