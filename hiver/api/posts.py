"""Endpoints for artist posts, likes, the followed-artists feed and the artist dashboard."""

from fastapi import APIRouter, Depends, Query, status

from hiver.api.auth import get_viewer, verify_session
from hiver.config import settings
from hiver.domain.post import PostDraft
from hiver.posts import PostService


def _create_feed_endpoint(service: PostService):
    async def feed(
        limit: int = Query(settings.feed_limit, ge=1, le=100),
        viewer: str = Depends(verify_session),
    ):
        return await service.feed(viewer, limit=limit)

    return feed


def _create_post_endpoints(service: PostService):
    async def create_post(draft: PostDraft, viewer: str = Depends(verify_session)):
        return await service.create_post(viewer, draft)

    async def author_posts(author_id: str, viewer: str | None = Depends(get_viewer)):
        return await service.list_author_posts(author_id, viewer)

    async def delete_post(post_id: str, viewer: str = Depends(verify_session)):
        await service.delete_post(viewer, post_id)
        return {"post_id": post_id, "deleted": True}

    async def toggle_like(post_id: str, viewer: str = Depends(verify_session)):
        liked = await service.toggle_like(viewer, post_id)
        return {
            "post_id": post_id,
            "liked": liked,
            "like_count": await service.like_count(post_id),
        }

    async def dashboard(viewer: str = Depends(verify_session)):
        return await service.dashboard(viewer)

    return create_post, author_posts, delete_post, toggle_like, dashboard


def get_posts_router(*, post_service: PostService) -> APIRouter:
    router = APIRouter()

    create_post, author_posts, delete_post, toggle_like, dashboard = _create_post_endpoints(
        post_service
    )

    router.get("/api/feed")(_create_feed_endpoint(post_service))
    router.get("/api/dashboard")(dashboard)
    router.post("/api/posts", status_code=status.HTTP_201_CREATED)(create_post)
    router.delete("/api/posts/{post_id}")(delete_post)
    router.post("/api/posts/{post_id}/like")(toggle_like)
    router.get("/api/artists/{author_id}/posts")(author_posts)

    return router
