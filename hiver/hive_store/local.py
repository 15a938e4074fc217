import asyncio
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Tuple

from hiver.domain.hive import Hive, Rsvp
from hiver.errors import Conflict, NotFound
from hiver.hive_store.base import HiveStore
from hiver.json_file import dump_json, load_store, write_json

Hives = Dict[str, Hive]
Rsvps = Dict[Tuple[str, str], Rsvp]


class LocalHiveStore(HiveStore):
    """Local hive store that keeps hives and RSVPs in a JSON file."""

    def __init__(self, filepath: str | Path | None = None) -> None:
        """Initialize LocalHiveStore.

        Args:
            filepath: Path to the store file. If provided and exists, will auto-load.
                     If provided, every mutation is written back to this path.
                     If not provided, the store lives in memory only.
        """
        self._filepath = str(filepath) if filepath else None
        self._lock = asyncio.Lock()
        self._hives: Hives = {}
        self._rsvps: Rsvps = {}

        state = load_store(self._filepath, self._parse)
        if state is not None:
            self._hives, self._rsvps = state

    @classmethod
    def from_data(
        cls, hives: List[Hive] | None = None, rsvps: List[Rsvp] | None = None
    ) -> "LocalHiveStore":
        """Create an in-memory store from provided data (useful for testing)."""
        instance = cls(filepath=None)
        instance._hives = {hive.id: hive for hive in hives or []}
        instance._rsvps = {(rsvp.hive_id, rsvp.user_id): rsvp for rsvp in rsvps or []}
        return instance

    @staticmethod
    def _parse(data: dict[str, Any]) -> tuple[Hives, Rsvps]:
        hives = {
            hive_id: Hive(**hive_data) for hive_id, hive_data in data.get("hives", {}).items()
        }
        rsvps: Rsvps = {}
        for rsvp_data in data.get("rsvps", []):
            rsvp = Rsvp(**rsvp_data)
            rsvps[(rsvp.hive_id, rsvp.user_id)] = rsvp
        return hives, rsvps

    @staticmethod
    def _serialize(hives: Hives, rsvps: Rsvps) -> dict[str, Any]:
        return {
            "hives": {hive_id: hive.model_dump(mode="json") for hive_id, hive in hives.items()},
            "rsvps": [rsvp.model_dump(mode="json") for rsvp in rsvps.values()],
        }

    async def _commit(self, hives: Hives, rsvps: Rsvps) -> None:
        """Write the new state, then make it visible. A failed write leaves memory untouched."""
        if self._filepath:
            await write_json(self._filepath, self._serialize(hives, rsvps))
        self._hives, self._rsvps = hives, rsvps

    async def add_hive(self, hive: Hive) -> Hive:
        async with self._lock:
            if hive.id in self._hives:
                raise Conflict(f"Hive {hive.id} already exists")
            await self._commit({**self._hives, hive.id: hive}, self._rsvps)
        return hive

    async def get_hive(self, hive_id: str) -> Hive | None:
        return self._hives.get(hive_id)

    async def list_upcoming_hives(self, today: date, limit: int | None = None) -> List[Hive]:
        upcoming = sorted(
            (hive for hive in self._hives.values() if hive.event_date >= today),
            key=lambda h: (h.event_date, h.event_time, h.id),
        )
        return upcoming[:limit] if limit is not None else upcoming

    async def get_rsvp(self, hive_id: str, user_id: str) -> Rsvp | None:
        return self._rsvps.get((hive_id, user_id))

    async def add_rsvp(self, rsvp: Rsvp) -> Rsvp:
        async with self._lock:
            if rsvp.hive_id not in self._hives:
                raise NotFound(f"Hive {rsvp.hive_id} not found")
            key = (rsvp.hive_id, rsvp.user_id)
            if key in self._rsvps:
                raise Conflict(f"{rsvp.user_id} already RSVP'd to {rsvp.hive_id}")
            await self._commit(self._hives, {**self._rsvps, key: rsvp})
        return rsvp

    async def delete_rsvp(self, hive_id: str, user_id: str) -> None:
        async with self._lock:
            key = (hive_id, user_id)
            if key not in self._rsvps:
                return
            rsvps = dict(self._rsvps)
            del rsvps[key]
            await self._commit(self._hives, rsvps)

    async def count_rsvps(self, hive_id: str) -> int:
        return sum(1 for hid, _ in self._rsvps if hid == hive_id)

    async def rsvp_counts(self, hive_ids: List[str]) -> Dict[str, int]:
        counts = {hive_id: 0 for hive_id in hive_ids}
        for hive_id, _ in self._rsvps:
            if hive_id in counts:
                counts[hive_id] += 1
        return counts

    async def list_rsvped_hives(self, user_id: str, limit: int | None = None) -> List[Hive]:
        rsvps = sorted(
            (rsvp for rsvp in self._rsvps.values() if rsvp.user_id == user_id),
            key=lambda r: r.created_at,
            reverse=True,
        )
        hives = [self._hives[rsvp.hive_id] for rsvp in rsvps if rsvp.hive_id in self._hives]
        return hives[:limit] if limit is not None else hives

    def save(self, filepath: str | None = None) -> None:
        """Save the hive store to a JSON file.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        dump_json(str(save_path), self._serialize(self._hives, self._rsvps))
