from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import github_client


class Settings(BaseSettings):
    """
    Configuration via environment variables.

    GITHUB_TOKEN is optional: without it the service still answers, but
    comments and the pull request author are not fetched.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # GitHub configuration
    GITHUB_TOKEN: str | None = Field(default=None, description="GitHub PAT used for enrichment")
    GITHUB_API_URL: str = Field(
        default=github_client.GITHUB_API_URL,
        description="Base URL of the GitHub REST API"
    )
    GITHUB_TIMEOUT: float = Field(
        default=github_client.DEFAULT_TIMEOUT, gt=0, description="Timeout in seconds per GitHub call"
    )

    # Comment pagination
    COMMENTS_PER_PAGE: int = Field(
        default=github_client.DEFAULT_PER_PAGE, ge=1, le=100, description="Comments requested per page"
    )
    COMMENTS_MAX_PAGES: int = Field(
        default=github_client.DEFAULT_MAX_PAGES,
        ge=1,
        description="Upper bound on comment pages fetched for one pull request"
    )

    # Server
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    PORT: int = Field(default=8000, description="HTTP server port")

    @field_validator("GITHUB_API_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")
        return v_upper


def get_settings() -> Settings:
    """Factory function to get settings instance.

    This allows for lazy initialization and easier testing.
    """
    return Settings()
