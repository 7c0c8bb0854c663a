"""Library settings loaded from environment variables."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from compact_jwt.crypto.registry import SUPPORTED_ALGORITHMS

DEFAULT_ALGORITHM = "HS256"
MAX_TOKEN_LENGTH_DEFAULT = 65_536


class TokenSettings(BaseSettings):
    """Defaults applied by the encoder and decoder."""

    model_config = SettingsConfigDict(env_prefix="COMPACT_JWT_")

    default_algorithm: str = DEFAULT_ALGORITHM
    max_token_length: int = MAX_TOKEN_LENGTH_DEFAULT

    @field_validator("default_algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        if value not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"unsupported default algorithm: {value}")
        return value

    @field_validator("max_token_length")
    @classmethod
    def _positive_length(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("max_token_length must be positive")
        return value


@lru_cache(maxsize=1)
def get_settings() -> TokenSettings:
    """Return the process-wide settings instance."""
    return TokenSettings()
