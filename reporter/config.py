"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""

    pass


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # CORS (every origin is allowed; only the header list is configurable)
    cors_allow_headers: list[str] = [
        "authorization",
        "x-client-info",
        "apikey",
        "content-type",
    ]

    # AI gateway (OpenAI-compatible chat completions)
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1"
    ai_gateway_api_key: str = ""
    ai_model: str = "google/gemini-2.5-flash"
    ai_gateway_timeout: float = 30.0  # seconds

    # Report submission (client side)
    submit_max_attempts: int = 3
    submit_backoff_seconds: float = 1.0
    submit_retry_policy: str = "always"  # always | transient

    # Reporter API, as seen by the client
    reporter_api_url: str = "http://localhost:8000"
    client_timeout: float = 35.0  # longer than the gateway timeout

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()


def require_gateway_key(settings: Settings | None = None) -> str:
    """Return the AI gateway key, raising ConfigurationError when unset."""
    settings = settings or get_settings()
    if not settings.ai_gateway_api_key:
        raise ConfigurationError("AI_GATEWAY_API_KEY is not configured")
    return settings.ai_gateway_api_key
