"""Relationship domain models."""

from datetime import datetime, timezone
from enum import Enum
from typing import assert_never
from uuid import uuid4

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def pair_key(first: str, second: str) -> str:
    """Order-independent key for the unordered pair {first, second}."""
    low, high = sorted((first, second))
    return f"{low}:{high}"


class ConnectionStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    # Never written: rejection deletes the edge.
    REJECTED = "rejected"


class RelationshipStatus(str, Enum):
    """Connection state between two identities, as seen by the viewer."""

    NONE = "none"
    PENDING_SENT = "pending_sent"
    PENDING_RECEIVED = "pending_received"
    CONNECTED = "connected"


class ConnectionAction(str, Enum):
    REQUEST = "request"
    ACCEPT = "accept"
    REJECT = "reject"
    CANCEL = "cancel"
    REMOVE = "remove"


class FollowEdge(BaseModel):
    """A directed follow from a fan to an artist. Existence means an active follow."""

    follower: str
    followee: str
    created_at: datetime = Field(default_factory=utcnow)


class ConnectionEdge(BaseModel):
    """A connection between two identities.

    Attributes:
        id: Unique edge identifier
        initiator: Identity that sent the request
        recipient: Identity that received the request
        status: Current lifecycle status
        created_at: When the request was sent
        updated_at: When the status last changed
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    initiator: str
    recipient: str
    status: ConnectionStatus = ConnectionStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def pair_key(self) -> str:
        return pair_key(self.initiator, self.recipient)

    def involves(self, identity: str) -> bool:
        return identity in (self.initiator, self.recipient)

    def other_party(self, identity: str) -> str:
        return self.recipient if identity == self.initiator else self.initiator

    def status_for(self, viewer: str) -> RelationshipStatus:
        if self.status == ConnectionStatus.ACCEPTED:
            return RelationshipStatus.CONNECTED
        if self.status == ConnectionStatus.REJECTED:
            return RelationshipStatus.NONE
        if self.initiator == viewer:
            return RelationshipStatus.PENDING_SENT
        return RelationshipStatus.PENDING_RECEIVED


class ConnectionList(BaseModel):
    """A viewer's connections partitioned into the connected/requests/sent tabs."""

    connected: list[ConnectionEdge] = []
    requests: list[ConnectionEdge] = []
    sent: list[ConnectionEdge] = []


def next_action(status: RelationshipStatus) -> ConnectionAction:
    """Action a connect control performs for the given status."""
    if status is RelationshipStatus.NONE:
        return ConnectionAction.REQUEST
    elif status is RelationshipStatus.PENDING_SENT:
        return ConnectionAction.CANCEL
    elif status is RelationshipStatus.PENDING_RECEIVED:
        return ConnectionAction.ACCEPT
    elif status is RelationshipStatus.CONNECTED:
        return ConnectionAction.REMOVE
    else:
        assert_never(status)
