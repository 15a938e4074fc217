import asyncio
from pathlib import Path
from typing import Any, Dict, List, Tuple

from hiver.domain.post import Post, PostLike
from hiver.errors import Conflict, NotFound
from hiver.json_file import dump_json, load_store, write_json
from hiver.post_store.base import PostStore

Posts = Dict[str, Post]
Likes = Dict[Tuple[str, str], PostLike]


class LocalPostStore(PostStore):
    """Local post store that keeps artist posts and their likes in a JSON file."""

    def __init__(self, filepath: str | Path | None = None) -> None:
        """Initialize LocalPostStore.

        Args:
            filepath: Path to the store file. If provided and exists, will auto-load.
                     If provided, every mutation is written back to this path.
                     If not provided, the store lives in memory only.
        """
        self._filepath = str(filepath) if filepath else None
        self._lock = asyncio.Lock()
        self._posts: Posts = {}
        self._likes: Likes = {}

        state = load_store(self._filepath, self._parse)
        if state is not None:
            self._posts, self._likes = state

    @classmethod
    def from_data(
        cls, posts: List[Post] | None = None, likes: List[PostLike] | None = None
    ) -> "LocalPostStore":
        """Create an in-memory store from provided data (useful for testing)."""
        instance = cls(filepath=None)
        instance._posts = {post.id: post for post in posts or []}
        instance._likes = {(like.post_id, like.user_id): like for like in likes or []}
        return instance

    @staticmethod
    def _parse(data: dict[str, Any]) -> tuple[Posts, Likes]:
        posts = {
            post_id: Post(**post_data) for post_id, post_data in data.get("posts", {}).items()
        }
        likes: Likes = {}
        for like_data in data.get("likes", []):
            like = PostLike(**like_data)
            likes[(like.post_id, like.user_id)] = like
        return posts, likes

    @staticmethod
    def _serialize(posts: Posts, likes: Likes) -> dict[str, Any]:
        return {
            "posts": {post_id: post.model_dump(mode="json") for post_id, post in posts.items()},
            "likes": [like.model_dump(mode="json") for like in likes.values()],
        }

    async def _commit(self, posts: Posts, likes: Likes) -> None:
        if self._filepath:
            await write_json(self._filepath, self._serialize(posts, likes))
        self._posts, self._likes = posts, likes

    async def add_post(self, post: Post) -> Post:
        async with self._lock:
            if post.id in self._posts:
                raise Conflict(f"Post {post.id} already exists")
            await self._commit({**self._posts, post.id: post}, self._likes)
        return post

    async def get_post(self, post_id: str) -> Post | None:
        return self._posts.get(post_id)

    async def delete_post(self, post_id: str) -> None:
        async with self._lock:
            if post_id not in self._posts:
                return
            posts = {pid: post for pid, post in self._posts.items() if pid != post_id}
            likes = {key: like for key, like in self._likes.items() if key[0] != post_id}
            await self._commit(posts, likes)

    async def list_posts(self, author_ids: List[str], limit: int | None = None) -> List[Post]:
        authors = set(author_ids)
        posts = sorted(
            (post for post in self._posts.values() if post.author_id in authors),
            key=lambda p: p.created_at,
            reverse=True,
        )
        return posts[:limit] if limit is not None else posts

    async def get_like(self, post_id: str, user_id: str) -> PostLike | None:
        return self._likes.get((post_id, user_id))

    async def add_like(self, like: PostLike) -> PostLike:
        async with self._lock:
            if like.post_id not in self._posts:
                raise NotFound(f"Post {like.post_id} not found")
            key = (like.post_id, like.user_id)
            if key in self._likes:
                raise Conflict(f"{like.user_id} already liked {like.post_id}")
            await self._commit(self._posts, {**self._likes, key: like})
        return like

    async def delete_like(self, post_id: str, user_id: str) -> None:
        async with self._lock:
            key = (post_id, user_id)
            if key not in self._likes:
                return
            likes = dict(self._likes)
            del likes[key]
            await self._commit(self._posts, likes)

    async def like_counts(self, post_ids: List[str]) -> Dict[str, int]:
        counts = {post_id: 0 for post_id in post_ids}
        for post_id, _ in self._likes:
            if post_id in counts:
                counts[post_id] += 1
        return counts

    async def liked_post_ids(self, user_id: str, post_ids: List[str]) -> set[str]:
        return {post_id for post_id in post_ids if (post_id, user_id) in self._likes}

    def save(self, filepath: str | None = None) -> None:
        """Save the post store to a JSON file.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        dump_json(str(save_path), self._serialize(self._posts, self._likes))
