from typing import List

from hiver.domain.hive import Hive
from hiver.domain.profile import Profile

PROMPT_TEMPLATE = """User Profile:
- Name: {name}
- Interests: {interests}
- Location: {location}
- Level: {level} ({xp} XP)

Past Events Attended:
{past_events}

Available Upcoming Hives:
{upcoming}

Recommend up to {limit} hives from the list above."""


def get_past_events(hives: List[Hive]) -> str:
    if not hives:
        return "No past events"
    return "\n".join(f"- {hive.title} ({hive.category.value})" for hive in hives)


def get_upcoming(hives: List[Hive]) -> str:
    lines = []
    for i, hive in enumerate(hives, start=1):
        lines.append(
            f"{i}. [{hive.id}] {hive.title} - {hive.category.value} - "
            f"{hive.location} - {hive.event_date.isoformat()}"
        )
    return "\n".join(lines)


def get_prompt(
    *,
    profile: Profile,
    past_hives: List[Hive],
    upcoming_hives: List[Hive],
    limit: int,
) -> str:
    return PROMPT_TEMPLATE.format(
        name=profile.name,
        interests=", ".join(profile.interests) or "none specified",
        location=profile.location or "not specified",
        level=profile.level.value,
        xp=profile.xp,
        past_events=get_past_events(past_hives),
        upcoming=get_upcoming(upcoming_hives),
        limit=limit,
    )
