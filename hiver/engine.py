"""Follow and connection rules between two identities."""

from typing import List

from loguru import logger

from hiver.domain.relationships import (
    ConnectionAction,
    ConnectionEdge,
    ConnectionList,
    ConnectionStatus,
    FollowEdge,
    RelationshipStatus,
    pair_key,
)
from hiver.errors import Conflict, Forbidden, NotFound, SelfReferenceError, Unauthenticated
from hiver.relationship_store.base import RelationshipStore

# Status an edge must be in, and who may act on it, for each terminating action.
_TERMINATION_RULES = {
    ConnectionAction.REJECT: (ConnectionStatus.PENDING, "recipient"),
    ConnectionAction.CANCEL: (ConnectionStatus.PENDING, "initiator"),
    ConnectionAction.REMOVE: (ConnectionStatus.ACCEPTED, "either"),
}


def _require_viewer(viewer: str | None) -> str:
    if not viewer:
        raise Unauthenticated("Please sign in to continue")
    return viewer


def _require_other(viewer: str, subject: str) -> None:
    if viewer == subject:
        raise SelfReferenceError("You cannot follow or connect with yourself")


class RelationshipEngine:
    """Validates follow and connection transitions and writes them to the store.

    The viewer is passed into every call. Errors propagate to the caller
    unchanged and nothing is retried.
    """

    def __init__(self, store: RelationshipStore) -> None:
        self.store = store

    async def get_follow_status(self, viewer: str | None, subject: str) -> bool:
        if not viewer:
            return False
        return await self.store.get_follow(viewer, subject) is not None

    async def follow(self, viewer: str | None, subject: str) -> FollowEdge:
        """Follow subject. Following twice returns the existing edge."""
        viewer = _require_viewer(viewer)
        _require_other(viewer, subject)

        existing = await self.store.get_follow(viewer, subject)
        if existing:
            return existing

        try:
            edge = await self.store.insert_follow(FollowEdge(follower=viewer, followee=subject))
        except Conflict:
            existing = await self.store.get_follow(viewer, subject)
            if existing:
                return existing
            raise

        logger.info(f"{viewer} followed {subject}")
        return edge

    async def unfollow(self, viewer: str | None, subject: str) -> None:
        viewer = _require_viewer(viewer)
        await self.store.delete_follow(viewer, subject)
        logger.info(f"{viewer} unfollowed {subject}")

    async def count_followers(self, subject: str) -> int:
        return await self.store.count_followers(subject)

    async def list_following(self, viewer: str | None) -> List[FollowEdge]:
        return await self.store.list_following(_require_viewer(viewer))

    async def get_connection_status(self, viewer: str | None, subject: str) -> RelationshipStatus:
        if not viewer or viewer == subject:
            return RelationshipStatus.NONE
        edge = await self.store.find_connection(pair_key(viewer, subject))
        if edge is None:
            return RelationshipStatus.NONE
        return edge.status_for(viewer)

    async def request_connection(self, viewer: str | None, subject: str) -> ConnectionEdge:
        viewer = _require_viewer(viewer)
        _require_other(viewer, subject)

        existing = await self.store.find_connection(pair_key(viewer, subject))
        if existing is not None:
            if existing.status != ConnectionStatus.REJECTED:
                raise Conflict(
                    f"A connection with {subject} already exists ({existing.status.value})"
                )
            await self.store.delete_connection(existing.id)

        # The store re-checks the pair atomically, so a concurrent request loses here.
        edge = await self.store.insert_connection(
            ConnectionEdge(initiator=viewer, recipient=subject)
        )
        logger.info(f"{viewer} requested a connection with {subject} ({edge.id})")
        return edge

    async def _get_edge(self, edge_id: str) -> ConnectionEdge:
        edge = await self.store.get_connection(edge_id)
        if edge is None:
            raise NotFound(f"Connection {edge_id} not found")
        return edge

    async def accept_connection(self, edge_id: str, viewer: str | None) -> ConnectionEdge:
        viewer = _require_viewer(viewer)
        edge = await self._get_edge(edge_id)
        if edge.recipient != viewer or edge.status != ConnectionStatus.PENDING:
            raise Forbidden("Only the recipient can accept a pending request")

        accepted = await self.store.update_connection_status(edge_id, ConnectionStatus.ACCEPTED)
        logger.info(f"{viewer} accepted connection {edge_id} from {edge.initiator}")
        return accepted

    async def terminate_connection(
        self,
        edge_id: str,
        viewer: str | None,
        action: ConnectionAction | None = None,
    ) -> None:
        """Delete a connection edge.

        Without an action, either party may delete the edge in any status.
        With one, the edge status and the viewer's role must match it:
        reject (pending, recipient), cancel (pending, initiator) or
        remove (accepted, either party).
        """
        viewer = _require_viewer(viewer)
        edge = await self._get_edge(edge_id)
        if not edge.involves(viewer):
            raise Forbidden("You are not a party to this connection")

        if action is not None:
            if action not in _TERMINATION_RULES:
                raise Forbidden(f"{action.value} does not terminate a connection")
            required_status, role = _TERMINATION_RULES[action]
            if edge.status != required_status:
                raise Forbidden(f"Cannot {action.value} a {edge.status.value} connection")
            if role != "either" and getattr(edge, role) != viewer:
                raise Forbidden(f"Only the {role} can {action.value} this request")

        await self.store.delete_connection(edge_id)
        verb = action.value if action else "delete"
        logger.info(f"{viewer} terminated connection {edge_id} ({verb})")

    async def reject_connection(self, edge_id: str, viewer: str | None) -> None:
        await self.terminate_connection(edge_id, viewer, ConnectionAction.REJECT)

    async def cancel_connection(self, edge_id: str, viewer: str | None) -> None:
        await self.terminate_connection(edge_id, viewer, ConnectionAction.CANCEL)

    async def remove_connection(self, edge_id: str, viewer: str | None) -> None:
        await self.terminate_connection(edge_id, viewer, ConnectionAction.REMOVE)

    async def list_connections(self, viewer: str | None) -> ConnectionList:
        """Partition the viewer's edges into connected, received requests and sent requests."""
        viewer = _require_viewer(viewer)
        connections = ConnectionList()
        for edge in await self.store.list_connections(viewer):
            status = edge.status_for(viewer)
            if status is RelationshipStatus.CONNECTED:
                connections.connected.append(edge)
            elif status is RelationshipStatus.PENDING_RECEIVED:
                connections.requests.append(edge)
            elif status is RelationshipStatus.PENDING_SENT:
                connections.sent.append(edge)
        return connections
