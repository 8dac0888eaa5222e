from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when a required setting is missing before a run starts."""


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "blogs"
    db_username: str = "blogs"
    db_password: str = "secret"
    db_pool_timeout_seconds: float = 30.0

    search_provider: str = "serpapi"
    serp_api_key: str = ""
    serp_api_url: str = "https://serpapi.com/search.json"
    serp_api_engine: str = "google"
    search_result_count: int = Field(default=5, ge=1)
    search_timeout_seconds: int = 30

    generation_provider: str = "openai"
    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini-2024-07-18"
    openai_base_url: str | None = None
    openai_timeout_seconds: int = 60
    openai_max_tokens: int = 4000
    enhance_temperature: float = 0.7
    format_temperature: float = 0.3

    scrape_timeout_seconds: float = 15.0
    target_references: int = Field(default=2, ge=1)
    quality_score: int = Field(default=85, ge=0, le=100)

    item_delay_seconds: float = 1.0
    attempt_delay_seconds: float = 0.5
    format_delay_seconds: float = 0.5
    max_workers: int = Field(default=1, ge=1)

    seed_listing_url: str = "https://beyondchats.com/blogs/"
    seed_post_count: int = Field(default=5, ge=1)


def require_credentials(settings: Settings, *, search: bool, generation: bool) -> None:
    """Fail fast when a credential needed by the requested run is empty.

    Raises:
        ConfigurationError: naming every missing environment variable.
    """
    missing: list[str] = []
    if generation and settings.generation_provider.lower() != "example":
        if not settings.openai_api_key:
            missing.append("OPENAI_API_KEY")
    if search and settings.search_provider.lower() == "serpapi":
        if not settings.serp_api_key:
            missing.append("SERP_API_KEY")
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")
