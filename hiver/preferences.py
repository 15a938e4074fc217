from hiver.domain.profile import NotificationPreferences, NotificationPreferencesUpdate
from hiver.domain.relationships import utcnow
from hiver.errors import Unauthenticated
from hiver.profile_store.base import ProfileStore


async def get_notification_preferences(
    profile_store: ProfileStore, viewer: str | None
) -> NotificationPreferences:
    """Stored preferences, or the all-enabled defaults when none were saved."""
    if not viewer:
        raise Unauthenticated("Please sign in to manage notifications")
    stored = await profile_store.get_notification_preferences(viewer)
    return stored or NotificationPreferences(user_id=viewer)


async def update_notification_preferences(
    profile_store: ProfileStore, viewer: str | None, changes: NotificationPreferencesUpdate
) -> NotificationPreferences:
    current = await get_notification_preferences(profile_store, viewer)
    updated = current.model_copy(
        update={**changes.model_dump(exclude_none=True), "updated_at": utcnow()}
    )
    return await profile_store.upsert_notification_preferences(updated)
