"""
Library configuration using Pydantic settings.

All configurable values are loaded from environment variables (prefixed with
RECIPEKIT_) with sensible defaults. The hashing defaults live here so that
every producer of recipe hashes in one deployment agrees on them.
"""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

# Get the directory containing this config file (recipekit/)
_PACKAGE_DIR = Path(__file__).parent.resolve()


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    # App metadata
    app_name: str = "recipekit"
    app_version: str = "0.1.0"
    debug: bool = False

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Similarity hashing
    hash_num_buckets: int = 256  # Histogram size used by Recipe.cook()
    hash_max_bucket_delta: int = 16  # Per-bucket swing used to normalize distances

    # QR payload export
    qr_payload_encoding: str = "utf-8"

    @field_validator("hash_num_buckets", "hash_max_bucket_delta")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Hash settings must be positive integers")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    model_config = SettingsConfigDict(
        env_prefix="RECIPEKIT_",
        env_file=_PACKAGE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


def get_settings(**overrides) -> Settings:
    """
    Factory function to create Settings instance.

    Useful for testing where you need to override specific values
    without modifying environment variables.

    Args:
        **overrides: Key-value pairs to override default settings

    Returns:
        Settings instance with overrides applied

    Example:
        test_settings = get_settings(hash_num_buckets=64)
    """
    return Settings(**overrides)


# Global settings instance
settings = get_settings()
