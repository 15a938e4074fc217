"""Hive (event) domain models."""

from datetime import date, datetime, time
from enum import Enum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

from hiver.domain.relationships import utcnow


class HiveCategory(str, Enum):
    SOCIAL = "social"
    SPORTS = "sports"
    ARTS = "arts"
    FOOD = "food"
    MUSIC = "music"
    GAMING = "gaming"
    STUDY = "study"
    OUTDOORS = "outdoors"
    OTHER = "other"


class HiveDraft(BaseModel):
    """Fields supplied by a host when creating a hive."""

    title: str = Field(..., min_length=1)
    description: str = ""
    category: HiveCategory = HiveCategory.OTHER
    event_date: date
    event_time: time
    location: str
    max_attendees: int | None = Field(default=None, ge=1)


class Hive(HiveDraft):
    """Represents a user-created local event."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    host_id: str
    created_at: datetime = Field(default_factory=utcnow)


class Rsvp(BaseModel):
    """A user's recorded intent to attend a hive."""

    hive_id: str
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)


class TrendingHive(BaseModel):
    hive: Hive
    rsvp_count: int
    trending_score: float


class Recommendations(BaseModel):
    """Hives recommended to a viewer and where the ranking came from."""

    source: Literal["ai", "trending"]
    hives: list[Hive] = []
