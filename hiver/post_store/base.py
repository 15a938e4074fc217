from typing import Dict, List, Protocol

from hiver.domain.post import Post, PostLike


class PostStore(Protocol):
    """Protocol for artist post and like storage implementations."""

    async def add_post(self, post: Post) -> Post:
        """Add a new post. Raises Conflict if the ID is taken."""
        ...

    async def get_post(self, post_id: str) -> Post | None:
        ...

    async def delete_post(self, post_id: str) -> None:
        """Delete a post and its likes. Missing posts are ignored."""
        ...

    async def list_posts(self, author_ids: List[str], limit: int | None = None) -> List[Post]:
        """Posts by any of the given authors, newest first."""
        ...

    async def get_like(self, post_id: str, user_id: str) -> PostLike | None:
        ...

    async def add_like(self, like: PostLike) -> PostLike:
        """Record a like. Raises NotFound for an unknown post and Conflict for a repeat."""
        ...

    async def delete_like(self, post_id: str, user_id: str) -> None:
        """Remove a like. Missing likes are ignored."""
        ...

    async def like_counts(self, post_ids: List[str]) -> Dict[str, int]:
        """Number of likes per post, zero for posts nobody liked."""
        ...

    async def liked_post_ids(self, user_id: str, post_ids: List[str]) -> set[str]:
        """The subset of post_ids the user has liked."""
        ...

    def save(self, filepath: str | None = None) -> None:
        """Save the post store to disk."""
        ...
