"""Artist posts, likes and the followed-artists feed."""

from typing import List

from loguru import logger

from hiver.domain.post import ArtistDashboard, FeedItem, Post, PostDraft, PostLike
from hiver.domain.profile import UserType
from hiver.errors import Conflict, Forbidden, NotFound, Unauthenticated
from hiver.post_store.base import PostStore
from hiver.profile_store.base import ProfileStore
from hiver.relationship_store.base import RelationshipStore


def _require_viewer(viewer: str | None) -> str:
    if not viewer:
        raise Unauthenticated("Please sign in to continue")
    return viewer


class PostService:
    """Posts are written by artists and read by the people who follow them."""

    def __init__(
        self,
        post_store: PostStore,
        relationship_store: RelationshipStore,
        profile_store: ProfileStore,
    ) -> None:
        self.post_store = post_store
        self.relationship_store = relationship_store
        self.profile_store = profile_store

    async def _require_artist(self, viewer: str | None) -> str:
        viewer = _require_viewer(viewer)
        profile = await self.profile_store.get_profile(viewer)
        if profile is None or profile.user_type != UserType.ARTIST:
            raise Forbidden("Only artists can post updates")
        return viewer

    async def create_post(self, viewer: str | None, draft: PostDraft) -> Post:
        viewer = await self._require_artist(viewer)
        post = await self.post_store.add_post(Post(author_id=viewer, **draft.model_dump()))
        logger.info(f"{viewer} posted {post.id}")
        return post

    async def get_post(self, post_id: str) -> Post:
        post = await self.post_store.get_post(post_id)
        if post is None:
            raise NotFound(f"Post {post_id} not found")
        return post

    async def delete_post(self, viewer: str | None, post_id: str) -> None:
        viewer = _require_viewer(viewer)
        post = await self.get_post(post_id)
        if post.author_id != viewer:
            raise Forbidden("Only the author can delete this post")
        await self.post_store.delete_post(post_id)
        logger.info(f"{viewer} deleted post {post_id}")

    async def feed(self, viewer: str | None, limit: int = 50) -> List[FeedItem]:
        """Posts by everyone the viewer follows, newest first."""
        viewer = _require_viewer(viewer)
        following = await self.relationship_store.list_following(viewer)
        if not following:
            return []
        posts = await self.post_store.list_posts(
            [edge.followee for edge in following], limit=limit
        )
        return await self._feed_items(posts, viewer)

    async def list_author_posts(self, author_id: str, viewer: str | None = None) -> List[FeedItem]:
        posts = await self.post_store.list_posts([author_id])
        return await self._feed_items(posts, viewer)

    async def _feed_items(self, posts: List[Post], viewer: str | None) -> List[FeedItem]:
        post_ids = [post.id for post in posts]
        counts = await self.post_store.like_counts(post_ids)
        liked = await self.post_store.liked_post_ids(viewer, post_ids) if viewer else set()

        names: dict[str, str] = {}
        for author_id in {post.author_id for post in posts}:
            profile = await self.profile_store.get_profile(author_id)
            names[author_id] = profile.name if profile else ""

        return [
            FeedItem(
                post=post,
                author_name=names[post.author_id],
                like_count=counts.get(post.id, 0),
                liked=post.id in liked,
            )
            for post in posts
        ]

    async def toggle_like(self, viewer: str | None, post_id: str) -> bool:
        """Like the post, or unlike it if the viewer already does. Returns the new state."""
        viewer = _require_viewer(viewer)
        await self.get_post(post_id)

        if await self.post_store.get_like(post_id, viewer):
            await self.post_store.delete_like(post_id, viewer)
            return False
        try:
            await self.post_store.add_like(PostLike(post_id=post_id, user_id=viewer))
        except Conflict:
            if not await self.post_store.get_like(post_id, viewer):
                raise
        logger.info(f"{viewer} liked post {post_id}")
        return True

    async def like_count(self, post_id: str) -> int:
        counts = await self.post_store.like_counts([post_id])
        return counts[post_id]

    async def dashboard(self, viewer: str | None) -> ArtistDashboard:
        viewer = await self._require_artist(viewer)
        posts = await self.list_author_posts(viewer, viewer)
        return ArtistDashboard(
            followers=await self.relationship_store.count_followers(viewer),
            total_likes=sum(item.like_count for item in posts),
            total_posts=len(posts),
            posts=posts,
        )
