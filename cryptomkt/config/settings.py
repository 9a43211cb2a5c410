from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration object loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    api_key: str = Field(..., alias="CRYPTOMKT_API_KEY", repr=False)
    secret_key: str = Field(..., alias="CRYPTOMKT_SECRET_KEY", repr=False)

    domain: str = Field("https://api.cryptomkt.com/", alias="CRYPTOMKT_DOMAIN")
    api_version: str = Field("v1", alias="CRYPTOMKT_API_VERSION")
    timeout: float = Field(10.0, alias="CRYPTOMKT_TIMEOUT")  # seconds, per request

    @field_validator("api_version")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        value = value.strip("/")
        if not value:
            raise ValueError("api_version must not be empty")
        return value

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value


def load_settings(env_path: str | Path | None = None) -> Settings:
    """Build :class:`Settings`, first exporting the entries of ``env_path`` if given.

    Variables already set in the process environment win over the file. Without
    ``env_path`` only a ``.env`` in the working directory is consulted.
    """
    if env_path is not None:
        path = Path(env_path)
        if not path.is_file():
            raise FileNotFoundError(f"No env file at {path}")
        load_dotenv(path)
    return Settings()
