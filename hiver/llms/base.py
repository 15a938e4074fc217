from typing import List, Protocol

from hiver.llms.schemas import HiveRecommendation, LLMMessage


class LLMChat(Protocol):
    def recommend(self, messages: List[LLMMessage]) -> HiveRecommendation:
        """Ask the model for an ordered list of hive IDs."""
        ...
