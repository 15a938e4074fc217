from typing import List

from hiver.llms.base import LLMChat
from hiver.llms.schemas import HiveRecommendation, LLMMessage


class FakeLLMChat(LLMChat):
    """Fake LLM chat that returns predefined hive IDs, or raises a predefined error."""

    def __init__(self, hive_ids: List[str] | None = None, error: Exception | None = None) -> None:
        self.hive_ids = hive_ids or []
        self.error = error
        self.calls: List[List[LLMMessage]] = []

    def recommend(self, messages: List[LLMMessage]) -> HiveRecommendation:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return HiveRecommendation(hive_ids=self.hive_ids, reasoning="Matches your interests")
