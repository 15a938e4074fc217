from typing import List, Protocol

from hiver.domain.relationships import ConnectionEdge, ConnectionStatus, FollowEdge


class RelationshipStore(Protocol):
    """Protocol for follow and connection storage implementations."""

    async def get_follow(self, follower: str, followee: str) -> FollowEdge | None:
        """Get the follow edge follower -> followee, if any."""
        ...

    async def insert_follow(self, edge: FollowEdge) -> FollowEdge:
        """Insert a follow edge. Raises Conflict if the pair is already stored."""
        ...

    async def delete_follow(self, follower: str, followee: str) -> None:
        """Delete the follow edge follower -> followee. Missing edges are ignored."""
        ...

    async def count_followers(self, followee: str) -> int:
        """Count the identities following followee."""
        ...

    async def list_following(self, follower: str) -> List[FollowEdge]:
        """List the follow edges created by follower."""
        ...

    async def find_connection(self, pair_key: str) -> ConnectionEdge | None:
        """Find the connection edge stored for a normalized pair key."""
        ...

    async def get_connection(self, edge_id: str) -> ConnectionEdge | None:
        """Get a connection edge by its ID."""
        ...

    async def insert_connection(self, edge: ConnectionEdge) -> ConnectionEdge:
        """Insert a connection edge.

        Atomic with respect to the pair: raises Conflict when an edge already
        exists for the same unordered pair of identities.
        """
        ...

    async def update_connection_status(
        self, edge_id: str, status: ConnectionStatus
    ) -> ConnectionEdge:
        """Set the status of an edge and bump updated_at. Raises NotFound."""
        ...

    async def delete_connection(self, edge_id: str) -> None:
        """Delete a connection edge. Missing edges are ignored."""
        ...

    async def list_connections(self, identity: str) -> List[ConnectionEdge]:
        """List every connection edge the identity is a party to."""
        ...

    def save(self, filepath: str | None = None) -> None:
        """Save the store to disk."""
        ...
