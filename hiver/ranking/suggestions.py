from typing import Iterable, List

from loguru import logger

from hiver.domain.profile import Profile, Suggestion
from hiver.errors import StoreUnavailable
from hiver.profile_store.base import ProfileStore
from hiver.relationship_store.base import RelationshipStore


def normalize_interests(interests: Iterable[str]) -> dict[str, str]:
    """Map casefolded, trimmed interests to their first spelling."""
    normalized: dict[str, str] = {}
    for interest in interests:
        key = interest.strip().casefold()
        if key and key not in normalized:
            normalized[key] = interest.strip()
    return normalized


def rank_suggestions(
    viewer: Profile,
    candidates: Iterable[Profile],
    excluded: set[str],
    limit: int,
) -> List[Suggestion]:
    """Rank candidates by descending shared-interest count, then by identity."""
    viewer_interests = normalize_interests(viewer.interests)

    suggestions = []
    for candidate in candidates:
        if candidate.id == viewer.id or candidate.id in excluded:
            continue
        shared = [
            viewer_interests[key]
            for key in normalize_interests(candidate.interests)
            if key in viewer_interests
        ]
        suggestions.append(
            Suggestion(
                user_id=candidate.id,
                name=candidate.name,
                avatar_url=candidate.avatar_url,
                shared_interests=shared,
                shared_interest_count=len(shared),
            )
        )

    suggestions.sort(key=lambda s: (-s.shared_interest_count, s.user_id))
    return suggestions[: max(limit, 0)]


class SuggestionRanker:
    """Builds the "people you may know" list for a viewer."""

    def __init__(self, relationship_store: RelationshipStore, profile_store: ProfileStore) -> None:
        self.relationship_store = relationship_store
        self.profile_store = profile_store

    async def suggest(
        self,
        viewer: str,
        candidate_pool: List[Profile] | None = None,
        limit: int = 6,
    ) -> List[Suggestion]:
        """Suggest people the viewer has no connection edge with.

        Recomputed on every call. Returns an empty list when a store is unavailable.
        """
        try:
            profile = await self.profile_store.get_profile(viewer)
            if profile is None:
                profile = Profile(id=viewer, name="")
            if candidate_pool is None:
                candidate_pool = await self.profile_store.list_profiles()
            edges = await self.relationship_store.list_connections(viewer)
        except StoreUnavailable as e:
            logger.warning(f"Suggestions unavailable for {viewer}: {e}")
            return []

        excluded = {edge.other_party(viewer) for edge in edges}
        return rank_suggestions(profile, candidate_pool, excluded, limit)
