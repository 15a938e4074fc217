import asyncio
from pathlib import Path
from typing import Any, Dict, List

from hiver.domain.profile import NotificationPreferences, Profile
from hiver.json_file import dump_json, load_store, write_json
from hiver.profile_store.base import ProfileStore

Profiles = Dict[str, Profile]
Preferences = Dict[str, NotificationPreferences]


class LocalProfileStore(ProfileStore):
    """Local profile store that saves profiles and notification preferences to a JSON file."""

    def __init__(self, filepath: str | Path | None = None) -> None:
        self._filepath = str(filepath) if filepath else None
        self._lock = asyncio.Lock()
        self._profiles: Profiles = {}
        self._preferences: Preferences = {}

        state = load_store(self._filepath, self._parse)
        if state is not None:
            self._profiles, self._preferences = state

    @classmethod
    def from_data(cls, profiles: List[Profile] | None = None) -> "LocalProfileStore":
        """Create an in-memory store from provided profiles (useful for testing)."""
        instance = cls(filepath=None)
        instance._profiles = {profile.id: profile for profile in profiles or []}
        return instance

    @staticmethod
    def _parse(data: dict[str, Any]) -> tuple[Profiles, Preferences]:
        profiles = {
            user_id: Profile(**profile_data)
            for user_id, profile_data in data.get("profiles", {}).items()
        }
        preferences = {
            user_id: NotificationPreferences(**prefs_data)
            for user_id, prefs_data in data.get("notification_preferences", {}).items()
        }
        return profiles, preferences

    @staticmethod
    def _serialize(profiles: Profiles, preferences: Preferences) -> dict[str, Any]:
        return {
            "profiles": {
                user_id: profile.model_dump(mode="json") for user_id, profile in profiles.items()
            },
            "notification_preferences": {
                user_id: prefs.model_dump(mode="json") for user_id, prefs in preferences.items()
            },
        }

    async def _commit(self, profiles: Profiles, preferences: Preferences) -> None:
        if self._filepath:
            await write_json(self._filepath, self._serialize(profiles, preferences))
        self._profiles, self._preferences = profiles, preferences

    async def get_profile(self, user_id: str) -> Profile | None:
        return self._profiles.get(user_id)

    async def list_profiles(self) -> List[Profile]:
        return list(self._profiles.values())

    async def add_profile(self, profile: Profile) -> None:
        async with self._lock:
            await self._commit({**self._profiles, profile.id: profile}, self._preferences)

    async def get_notification_preferences(self, user_id: str) -> NotificationPreferences | None:
        return self._preferences.get(user_id)

    async def upsert_notification_preferences(
        self, preferences: NotificationPreferences
    ) -> NotificationPreferences:
        async with self._lock:
            await self._commit(
                self._profiles, {**self._preferences, preferences.user_id: preferences}
            )
        return preferences

    def save(self, filepath: str | None = None) -> None:
        """Save the profile store to a JSON file.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        dump_json(str(save_path), self._serialize(self._profiles, self._preferences))
