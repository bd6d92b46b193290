"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitHub settings. Authentication normally comes from the gh CLI; an
    # explicit token takes precedence when set.
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_TOKEN: str | None = None
    ORG_TEMPLATE_REPO: str = "PROLE-ISLAND/.github"

    # v0 UI generation API settings
    V0_API_KEY: str | None = None
    V0_API_URL: str = "https://api.v0.dev/v1"


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()
