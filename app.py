import sys

import instructor
from anthropic import Anthropic
from loguru import logger

from hiver.api import create_app
from hiver.config import settings
from hiver.hive_store.local import LocalHiveStore
from hiver.llms.instructor_llm_chat import InstructorLLMChat
from hiver.post_store.local import LocalPostStore
from hiver.profile_store.local import LocalProfileStore
from hiver.relationship_store.local import LocalRelationshipStore

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

logger.info("Initializing Hiver with local stores and Claude recommendations via Instructor")
# Create instructor client with Anthropic Claude
anthropic_client = Anthropic(api_key=settings.anthropic_api_key)
instructor_client = instructor.from_anthropic(
    anthropic_client, mode=instructor.Mode.ANTHROPIC_TOOLS
)

relationship_store = LocalRelationshipStore(settings.local_relationship_store_path)
hive_store = LocalHiveStore(settings.local_hive_store_path)
profile_store = LocalProfileStore(settings.local_profile_store_path)
post_store = LocalPostStore(settings.local_post_store_path)
chatbot = InstructorLLMChat(instructor_client, model=settings.llm_model)
app = create_app(
    relationship_store=relationship_store,
    hive_store=hive_store,
    profile_store=profile_store,
    post_store=post_store,
    chatbot=chatbot,
)
