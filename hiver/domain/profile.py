"""Profile domain models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from hiver.domain.relationships import utcnow


class UserType(str, Enum):
    FAN = "fan"
    ARTIST = "artist"
    VENUE = "venue"


class UserLevel(str, Enum):
    NEWBIE = "newbie"
    EXPLORER = "explorer"
    CONNECTOR = "connector"
    INFLUENCER = "influencer"
    LEGEND = "legend"


class Profile(BaseModel):
    """Public profile data for a user account."""

    id: str
    name: str
    user_type: UserType = UserType.FAN
    interests: list[str] = []
    location: str | None = None
    level: UserLevel = UserLevel.NEWBIE
    xp: int = 0
    avatar_url: str | None = None
    bio: str | None = None


class Suggestion(BaseModel):
    """A ranked "people you may know" candidate."""

    user_id: str
    name: str
    avatar_url: str | None = None
    shared_interests: list[str] = []
    shared_interest_count: int


class NotificationPreferences(BaseModel):
    user_id: str
    email_new_post: bool = True
    email_new_event: bool = True
    email_event_reminder: bool = True
    email_new_follower: bool = True
    updated_at: datetime = Field(default_factory=utcnow)


class NotificationPreferencesUpdate(BaseModel):
    """Partial update; unset flags keep their stored value."""

    email_new_post: bool | None = None
    email_new_event: bool | None = None
    email_event_reminder: bool | None = None
    email_new_follower: bool | None = None
