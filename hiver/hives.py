"""Hive creation and RSVP management."""

from loguru import logger

from hiver.domain.hive import Hive, HiveDraft, Rsvp
from hiver.errors import Conflict, NotFound, Unauthenticated
from hiver.hive_store.base import HiveStore


class HiveService:
    def __init__(self, hive_store: HiveStore) -> None:
        self.hive_store = hive_store

    async def create_hive(self, viewer: str | None, draft: HiveDraft) -> Hive:
        if not viewer:
            raise Unauthenticated("Please sign in to create a hive")
        hive = await self.hive_store.add_hive(Hive(host_id=viewer, **draft.model_dump()))
        logger.info(f"{viewer} created hive {hive.id} ({hive.title})")
        return hive

    async def get_hive(self, hive_id: str) -> Hive:
        hive = await self.hive_store.get_hive(hive_id)
        if hive is None:
            raise NotFound(f"Hive {hive_id} not found")
        return hive

    async def has_rsvp(self, viewer: str | None, hive_id: str) -> bool:
        if not viewer:
            return False
        return await self.hive_store.get_rsvp(hive_id, viewer) is not None

    async def rsvp(self, viewer: str | None, hive_id: str) -> Rsvp:
        """RSVP to a hive. RSVPing twice returns the existing RSVP."""
        if not viewer:
            raise Unauthenticated("Please sign in to RSVP")
        await self.get_hive(hive_id)

        existing = await self.hive_store.get_rsvp(hive_id, viewer)
        if existing:
            return existing
        try:
            rsvp = await self.hive_store.add_rsvp(Rsvp(hive_id=hive_id, user_id=viewer))
        except Conflict:
            existing = await self.hive_store.get_rsvp(hive_id, viewer)
            if existing:
                return existing
            raise

        logger.info(f"{viewer} RSVP'd to hive {hive_id}")
        return rsvp

    async def cancel_rsvp(self, viewer: str | None, hive_id: str) -> None:
        if not viewer:
            raise Unauthenticated("Please sign in to RSVP")
        await self.get_hive(hive_id)
        await self.hive_store.delete_rsvp(hive_id, viewer)
        logger.info(f"{viewer} removed RSVP for hive {hive_id}")

    async def attendance(self, hive_id: str) -> int:
        await self.get_hive(hive_id)
        return await self.hive_store.count_rsvps(hive_id)
