"""Application settings using Pydantic Settings."""

import re
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPO_SYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # General
    log_level: str = "INFO"

    # --- Version control ---
    git_executable: str = "git"
    primary_remote: str = "origin"
    # Offered as the new remote when the checkout has none
    upstream_url: str | None = None

    # Checked in order, first hit on the remote wins
    branch_priority: list[str] = ["main", "master", "develop"]

    # --- Runtime environment ---
    venv_dir: str = "venv"
    manifest_file: str = "requirements.txt"
    required_python: str = "3.12"  # "major.minor"
    fast_installer: str = "uv"

    @field_validator("branch_priority")
    @classmethod
    def _check_branch_priority(cls, value: list[str]) -> list[str]:
        names = [name.strip() for name in value]
        if len(names) != 3 or len(set(names)) != 3 or not all(names):
            raise ValueError("branch_priority needs three distinct branch names")
        return names

    @field_validator("required_python")
    @classmethod
    def _check_required_python(cls, value: str) -> str:
        if not re.fullmatch(r"\d+\.\d+", value.strip()):
            raise ValueError(f"required_python must look like '3.12', got {value!r}")
        return value.strip()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
