"""Data models for the typing leaderboard service."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model exchanged with clients in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GameResultSubmission(ApiModel):
    """Model for game result submission requests.

    Only types are checked here; value ranges are checked by the scoring
    engine. Identity and composite score fields are overwritten server-side.
    """

    net_wpm: float = Field(..., description="Net words per minute")
    gross_wpm: float = Field(default=0.0, description="Gross words per minute")
    accuracy: float = Field(..., description="Correct characters, percent")
    problem_keys: dict[str, Annotated[int, Field(ge=0)]] = Field(
        default_factory=dict, description="Miss count per key"
    )
    owner_id: str = ""
    display_name: str = ""
    composite_score: float | None = None

    @field_validator("problem_keys", mode="before")
    @classmethod
    def validate_problem_keys(cls, v: object) -> object:
        """Treat a null problem key map as empty."""
        return {} if v is None else v


class GameResult(ApiModel):
    """Model for stored game results."""

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    display_name: str
    net_wpm: float
    gross_wpm: float
    accuracy: float
    composite_score: float
    problem_keys: dict[str, int] = Field(default_factory=dict)
    recorded_at: datetime


class LeaderboardEntry(ApiModel):
    """Model for leaderboard entries in responses."""

    rank: int = Field(..., ge=1, description="Rank position")
    username: str
    net_wpm: float
    gross_wpm: float
    accuracy: float
    composite_score: float
    timestamp: datetime


class SubmissionReceipt(ApiModel):
    """Acknowledgement returned after a result is stored."""

    message: str = "Score submitted successfully"
    game_id: str
    timestamp: datetime


class PracticeText(ApiModel):
    """Passage handed out for a new typing game."""

    text: str
    timestamp: datetime


class ProblemKeyCount(ApiModel):
    """Total misses recorded for one key across an owner's results."""

    key: str
    misses: int = Field(..., ge=0)
