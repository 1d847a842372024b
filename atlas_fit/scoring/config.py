"""Configuration settings for driver fit scoring."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringConfig(BaseSettings):
    """Fit scoring configuration settings.

    The point values of the scorer itself are fixed; these settings cover
    where profiles come from and how rankings are cut. All can be
    overridden via environment variables with `FIT_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Profile settings
    profile_path: Path = Field(
        default=Path("profiles/driver.yaml"),
        description="Path to the default driver preference profile (YAML/JSON)",
    )

    # Ranking settings
    rank_min_score: Annotated[int, Field(ge=0, le=100)] = Field(
        default=0,
        description="Drop ranked drivers scoring below this value",
    )
    rank_limit: Annotated[int, Field(gt=0)] | None = Field(
        default=10,
        description="Maximum drivers returned by a ranking (None = all)",
    )


# Singleton instance for easy import
_scoring_config: ScoringConfig | None = None


def get_scoring_config() -> ScoringConfig:
    """Get the scoring configuration singleton."""
    global _scoring_config
    if _scoring_config is None:
        _scoring_config = ScoringConfig()
    return _scoring_config


def reset_scoring_config() -> None:
    """Reset the scoring configuration singleton (useful for testing)."""
    global _scoring_config
    _scoring_config = None
