from datetime import date
from typing import Dict, List, Protocol

from hiver.domain.hive import Hive, Rsvp


class HiveStore(Protocol):
    """Protocol for hive and RSVP storage implementations."""

    async def add_hive(self, hive: Hive) -> Hive:
        """Add a new hive."""
        ...

    async def get_hive(self, hive_id: str) -> Hive | None:
        """Get a hive by its ID."""
        ...

    async def list_upcoming_hives(self, today: date, limit: int | None = None) -> List[Hive]:
        """List hives with event_date >= today, earliest first."""
        ...

    async def get_rsvp(self, hive_id: str, user_id: str) -> Rsvp | None:
        ...

    async def add_rsvp(self, rsvp: Rsvp) -> Rsvp:
        """Record an RSVP. Raises NotFound for unknown hives, Conflict for duplicates."""
        ...

    async def delete_rsvp(self, hive_id: str, user_id: str) -> None:
        """Remove an RSVP. Missing RSVPs are ignored."""
        ...

    async def count_rsvps(self, hive_id: str) -> int:
        ...

    async def rsvp_counts(self, hive_ids: List[str]) -> Dict[str, int]:
        """Get RSVP counts for several hives at once, zero for hives without RSVPs."""
        ...

    async def list_rsvped_hives(self, user_id: str, limit: int | None = None) -> List[Hive]:
        """List hives the user has RSVP'd to, most recent RSVP first."""
        ...

    def save(self, filepath: str | None = None) -> None:
        """Save the hive store to disk."""
        ...
