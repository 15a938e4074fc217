from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Auth settings
    auth_password: str = ""

    # Session settings
    session_secret: str = "your-super-secret-session-key-change-in-production"

    # Store settings
    local_relationship_store_path: str = "data/relationships.json"
    local_hive_store_path: str = "data/hives.json"
    local_profile_store_path: str = "data/profiles.json"
    local_post_store_path: str = "data/posts.json"

    # LLM settings
    anthropic_api_key: str = ""
    llm_model: str = "claude-3-5-sonnet-20241022"
    recommendation_system_message: str = """You are a smart event recommendation assistant. Analyze the user's profile and suggest the most relevant upcoming events from the list.

Consider their interests, location, past event preferences, and experience level.
Only use hive IDs that appear in the list of available upcoming hives, ordered from most to least relevant.
"""

    # Ranking settings
    suggestion_limit: int = 6
    trending_limit: int = 5
    trending_gravity: float = 1.5
    recommendation_limit: int = 5
    recommendation_candidate_hives: int = 50
    recommendation_history: int = 10
    feed_limit: int = 50

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()  # type: ignore
