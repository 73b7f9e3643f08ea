# src/config/settings.py — v1
"""Settings read from the environment and .env (pydantic-settings).

Single source of truth for deployment-specific settings: remote API
credentials, storage location, cache TTL, local detector choice and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Remote inference ===
    openai_api_key: str = ""
    remote_base_url: str = "https://api.openai.com/v1"
    remote_model: str = "gpt-4o"
    remote_max_tokens: int = 1500
    remote_timeout_s: float = 60.0

    # === Storage / cache ===
    cache_backend: Literal["sqlite", "memory"] = "sqlite"
    database_path: Path = Path("~/.facetier/facetier.db")
    cache_ttl_days: int = 30

    # === Local heuristic tier ===
    face_detector: Literal["haar", "yunet", "none"] = "haar"
    face_detector_model: Path | None = None
    face_min_size: float = 0.1

    # === Simulated tier ===
    simulated_seed: int | None = None

    # === History ===
    history_enabled: bool = True

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("cache_ttl_days")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError("cache_ttl_days must be > 0")
        return v

    @field_validator("face_min_size")
    @classmethod
    def validate_face_min_size(cls, v: float) -> float:  # noqa: N805
        if not 0.0 < v < 1.0:
            raise ValueError("face_min_size must be within (0, 1)")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.face_detector == "yunet" and self.face_detector_model is None:
            errors.append("FACE_DETECTOR=yunet requires FACE_DETECTOR_MODEL")

        if self.remote_max_tokens <= 0:
            errors.append("REMOTE_MAX_TOKENS must be > 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def resolved_database_path(self) -> Path:
        """Database path with ``~`` expanded."""
        return self.database_path.expanduser()


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
