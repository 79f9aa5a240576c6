"""
Central application configuration using pydantic-settings.

Typed, environment-based configuration for the session driver and the
simulation CLI. Rules constants (starting rubbies, win thresholds) live in
`ratopoly.game.config.GameConfig`.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RatopolySettings(BaseSettings):
    """
    Runtime configuration.

    Environment variables (prefix: RATOPOLY_):
        RATOPOLY_LOG_LEVEL     - Python logging level (default: INFO)
        RATOPOLY_CPU_DELAY_MS  - Pause before each CPU action in the CLI (default: 450)
        RATOPOLY_SEED          - Seed for dice and CPU choices (default: random)
        RATOPOLY_LOG_DIR       - Directory for JSONL game logs (default: logs)
        RATOPOLY_MAX_STEPS     - Safety cap on transitions per game (default: 5000)
        RATOPOLY_PLAYERS       - Default participant names, comma separated
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="RATOPOLY_",
    )

    log_level: str = Field(default="INFO", description="Python logging level name.")
    cpu_delay_ms: int = Field(
        default=450,
        ge=0,
        description="Pacing delay before each automated action; no effect on outcomes.",
    )
    seed: Optional[int] = Field(default=None, description="Seed for dice and CPU choices.")
    log_dir: Path = Field(default=Path("logs"), description="Where JSONL game logs are written.")
    max_steps: int = Field(default=5000, gt=0, description="Transition cap per simulated game.")
    players: str = Field(
        default="Rizzo,Scabbers,Nibble",
        description="Default participant names, comma separated.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept any case and reject names `logging` does not know."""
        level = str(value).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def player_names(self) -> List[str]:
        return [name.strip() for name in self.players.split(",") if name.strip()]


@lru_cache
def get_settings() -> RatopolySettings:
    """Return cached settings instance."""
    return RatopolySettings()
