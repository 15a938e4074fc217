import asyncio
from pathlib import Path
from typing import Any, Dict, List, Tuple

from hiver.domain.relationships import (
    ConnectionEdge,
    ConnectionStatus,
    FollowEdge,
    utcnow,
)
from hiver.errors import Conflict, NotFound
from hiver.json_file import dump_json, load_store, write_json
from hiver.relationship_store.base import RelationshipStore

Follows = Dict[Tuple[str, str], FollowEdge]
Connections = Dict[str, ConnectionEdge]


class LocalRelationshipStore(RelationshipStore):
    """Local relationship store that keeps follows and connections in a JSON file.

    Connections are indexed by their normalized pair key, so at most one edge
    exists per unordered pair. Every check-then-mutate sequence runs under a
    single asyncio lock. A mutation builds the new state, writes it out and
    only then replaces the in-memory state, so a failed write changes nothing.
    """

    def __init__(self, filepath: str | Path | None = None) -> None:
        """Initialize LocalRelationshipStore.

        Args:
            filepath: Path to the store file. If provided and exists, will auto-load.
                     If provided, every mutation is written back to this path.
                     If not provided, the store lives in memory only.
        """
        self._filepath = str(filepath) if filepath else None
        self._lock = asyncio.Lock()
        self._set_state({}, {})

        state = load_store(self._filepath, self._parse)
        if state is not None:
            self._set_state(*state)

    @classmethod
    def from_data(
        cls,
        follows: List[FollowEdge] | None = None,
        connections: List[ConnectionEdge] | None = None,
    ) -> "LocalRelationshipStore":
        """Create an in-memory store from provided edges (useful for testing)."""
        instance = cls(filepath=None)
        instance._set_state(
            {(edge.follower, edge.followee): edge for edge in follows or []},
            {edge.id: edge for edge in connections or []},
        )
        return instance

    @staticmethod
    def _parse(data: dict[str, Any]) -> tuple[Follows, Connections]:
        follows: Follows = {}
        for follow_data in data.get("follows", []):
            edge = FollowEdge(**follow_data)
            follows[(edge.follower, edge.followee)] = edge
        connections: Connections = {}
        for connection_data in data.get("connections", []):
            connection = ConnectionEdge(**connection_data)
            connections[connection.id] = connection
        return follows, connections

    @staticmethod
    def _serialize(follows: Follows, connections: Connections) -> dict[str, Any]:
        return {
            "follows": [edge.model_dump(mode="json") for edge in follows.values()],
            "connections": [edge.model_dump(mode="json") for edge in connections.values()],
        }

    def _set_state(self, follows: Follows, connections: Connections) -> None:
        self._follows = follows
        self._connections = connections
        self._pairs = {edge.pair_key: edge.id for edge in connections.values()}

    async def _commit(self, follows: Follows, connections: Connections) -> None:
        if self._filepath:
            await write_json(self._filepath, self._serialize(follows, connections))
        self._set_state(follows, connections)

    async def get_follow(self, follower: str, followee: str) -> FollowEdge | None:
        return self._follows.get((follower, followee))

    async def insert_follow(self, edge: FollowEdge) -> FollowEdge:
        async with self._lock:
            key = (edge.follower, edge.followee)
            if key in self._follows:
                raise Conflict(f"{edge.follower} already follows {edge.followee}")
            await self._commit({**self._follows, key: edge}, self._connections)
        return edge

    async def delete_follow(self, follower: str, followee: str) -> None:
        async with self._lock:
            key = (follower, followee)
            if key not in self._follows:
                return
            follows = dict(self._follows)
            del follows[key]
            await self._commit(follows, self._connections)

    async def count_followers(self, followee: str) -> int:
        return sum(1 for edge in self._follows.values() if edge.followee == followee)

    async def list_following(self, follower: str) -> List[FollowEdge]:
        edges = [edge for edge in self._follows.values() if edge.follower == follower]
        return sorted(edges, key=lambda e: e.created_at, reverse=True)

    async def find_connection(self, pair_key: str) -> ConnectionEdge | None:
        edge_id = self._pairs.get(pair_key)
        if edge_id is None:
            return None
        return self._connections.get(edge_id)

    async def get_connection(self, edge_id: str) -> ConnectionEdge | None:
        return self._connections.get(edge_id)

    async def insert_connection(self, edge: ConnectionEdge) -> ConnectionEdge:
        async with self._lock:
            if edge.pair_key in self._pairs:
                raise Conflict(
                    f"A connection already exists between {edge.initiator} and {edge.recipient}"
                )
            await self._commit(self._follows, {**self._connections, edge.id: edge})
        return edge

    async def update_connection_status(
        self, edge_id: str, status: ConnectionStatus
    ) -> ConnectionEdge:
        async with self._lock:
            edge = self._connections.get(edge_id)
            if edge is None:
                raise NotFound(f"Connection {edge_id} not found")
            updated = edge.model_copy(update={"status": status, "updated_at": utcnow()})
            await self._commit(self._follows, {**self._connections, edge_id: updated})
        return updated

    async def delete_connection(self, edge_id: str) -> None:
        async with self._lock:
            if edge_id not in self._connections:
                return
            connections = dict(self._connections)
            del connections[edge_id]
            await self._commit(self._follows, connections)

    async def list_connections(self, identity: str) -> List[ConnectionEdge]:
        edges = [edge for edge in self._connections.values() if edge.involves(identity)]
        return sorted(edges, key=lambda e: e.created_at, reverse=True)

    def save(self, filepath: str | None = None) -> None:
        """Save the relationship store to a JSON file.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        dump_json(str(save_path), self._serialize(self._follows, self._connections))
