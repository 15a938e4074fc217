from typing import List, Protocol

from hiver.domain.profile import NotificationPreferences, Profile


class ProfileStore(Protocol):
    """Protocol for profile storage implementations."""

    async def get_profile(self, user_id: str) -> Profile | None:
        """Get a profile by user ID."""
        ...

    async def list_profiles(self) -> List[Profile]:
        """Get all public profiles."""
        ...

    async def add_profile(self, profile: Profile) -> None:
        """Add a new profile or replace an existing one."""
        ...

    async def get_notification_preferences(self, user_id: str) -> NotificationPreferences | None:
        ...

    async def upsert_notification_preferences(
        self, preferences: NotificationPreferences
    ) -> NotificationPreferences:
        """Insert the user's preferences or replace the stored record."""
        ...

    def save(self, filepath: str | None = None) -> None:
        """Save the profile store to disk."""
        ...
