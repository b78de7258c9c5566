"""Runtime configuration for the typing leaderboard service."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from environment variables."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", populate_by_name=True
    )

    table_name: str = Field(default="typing-game-results", alias="GAME_RESULTS_TABLE")
    region: str = Field(default="us-east-1", alias="AWS_DEFAULT_REGION")
    anonymous_owner_id: str = Field(default="ANON", alias="ANONYMOUS_OWNER_ID")
    default_top: int = Field(default=10, ge=1, alias="LEADERBOARD_DEFAULT_TOP")
    max_top: int = Field(default=100, ge=1, alias="LEADERBOARD_MAX_TOP")
    store_connect_timeout: float = Field(default=2.0, gt=0, alias="STORE_CONNECT_TIMEOUT")
    store_read_timeout: float = Field(default=5.0, gt=0, alias="STORE_READ_TIMEOUT")
    store_max_attempts: int = Field(default=2, ge=1, alias="STORE_MAX_ATTEMPTS")


@lru_cache
def get_settings() -> Settings:
    return Settings()
