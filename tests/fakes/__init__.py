from tests.fakes.fake_llm import FakeLLMChat
from tests.fakes.fake_unavailable_stores import (
    UnavailableHiveStore,
    UnavailableProfileStore,
    UnavailableRelationshipStore,
)

__all__ = [
    "FakeLLMChat",
    "UnavailableHiveStore",
    "UnavailableProfileStore",
    "UnavailableRelationshipStore",
]
