from typing import List, Literal

from pydantic import BaseModel, Field


class LLMMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class HiveRecommendation(BaseModel):
    """Structured recommendation returned by the assistant"""

    hive_ids: List[str] = Field(
        ...,
        description=(
            "IDs of the recommended upcoming hives, most relevant first. "
            "Only use IDs from the list of available upcoming hives."
        ),
    )
    reasoning: str = Field(
        default="", description="One or two sentences on why these hives fit the user."
    )
