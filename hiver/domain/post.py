"""Artist post domain models."""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from hiver.domain.relationships import utcnow


class PostDraft(BaseModel):
    """Fields supplied by an artist when posting an update."""

    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., min_length=1)
    image_url: str | None = None


class Post(PostDraft):
    """An update an artist shares with their followers."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    author_id: str
    created_at: datetime = Field(default_factory=utcnow)


class PostLike(BaseModel):
    post_id: str
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)


class FeedItem(BaseModel):
    """A post as shown to a viewer, with its like count and the viewer's own like."""

    post: Post
    author_name: str = ""
    like_count: int = 0
    liked: bool = False


class ArtistDashboard(BaseModel):
    followers: int
    total_likes: int
    total_posts: int
    posts: list[FeedItem] = []
