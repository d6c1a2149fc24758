"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars that don't match field names
    )

    # Application
    app_name: str = "OWNERS Auditor"
    app_version: str = "0.1.0"

    # GitHub
    github_token: SecretStr = Field(default=SecretStr(""))
    github_org: str = "openshift"
    github_api_url: str = "https://api.github.com"
    github_timeout: float = 30.0
    github_members_per_page: int = Field(default=100, ge=1, le=100)
    github_repos_per_page: int = Field(default=100, ge=1, le=100)
    github_repo_type: Literal["all", "public", "private", "forks", "sources", "member"] = "sources"

    # Files to audit
    owners_file: str = "OWNERS"
    owners_aliases_file: str = "OWNERS_ALIASES"

    # Audit
    audit_concurrency: int = Field(default=8, ge=1)

    # Observability
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
