"""Business logic service for typing game results."""

from collections import Counter
from datetime import datetime, UTC

from aws_lambda_powertools import Logger

from .config import Settings, get_settings
from .database import GameResultDatabase, ResultStore
from .exceptions import InvalidMetricError, StorageUnavailableError
from .models import (
    GameResult,
    GameResultSubmission,
    LeaderboardEntry,
    PracticeText,
    ProblemKeyCount,
)
from .ranking import rank
from .scoring import compute_composite, validate
from .text import PassageTextSource, TextSource

MAX_PROBLEM_KEYS = 50


class GameResultService:
    """Service layer containing the business logic for game results.

    Holds no mutable state between calls; all persistence goes through the
    injected result store.
    """

    def __init__(
        self,
        database: ResultStore | None = None,
        text_source: TextSource | None = None,
        logger: Logger | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize service with its collaborators."""
        self.settings = settings or get_settings()
        self.logger = logger or Logger(child=True)
        self.db = database or GameResultDatabase(
            settings=self.settings, logger=self.logger
        )
        self.text_source = text_source or PassageTextSource()

    def health_check(self) -> dict[str, str]:
        """Perform health check."""
        return {"status": "healthy", "service": "typing-leaderboard"}

    def submit(
        self, submission: GameResultSubmission, owner_id: str, display_name: str
    ) -> GameResult:
        """Validate, score and store a game result.

        Args:
            submission: Parsed result from the request body
            owner_id: Identity the result is attributed to
            display_name: Label shown on the leaderboard

        Returns:
            The persisted GameResult, including store-assigned id and timestamp

        Raises:
            InvalidMetricError: If a metric or the identity is invalid; nothing
                is written in that case
            StorageUnavailableError: If the store write fails
        """
        candidate = submission.model_copy(
            update={"owner_id": owner_id, "display_name": display_name}
        )

        try:
            validate(candidate)
        except InvalidMetricError as e:
            self.logger.warning(
                "Rejected game result",
                extra={"field": e.field, "value": e.value, "owner_id": owner_id},
            )
            raise

        scored = candidate.model_copy(
            update={
                "composite_score": compute_composite(
                    candidate.net_wpm, candidate.accuracy
                )
            }
        )

        try:
            result = self.db.append(scored)
        except StorageUnavailableError:
            self.logger.exception(
                "Failed to submit game result", extra={"owner_id": owner_id}
            )
            raise

        self.logger.info(
            "Game result submitted successfully",
            extra={"owner_id": owner_id, "game_id": result.id},
        )
        return result

    def get_user_stats(self, owner_id: str) -> list[GameResult]:
        """Get every stored result for an owner.

        Returns an empty list when the owner has no results.

        Raises:
            InvalidMetricError: If owner_id is empty
            StorageUnavailableError: If the store query fails
        """
        if not owner_id:
            raise InvalidMetricError("owner_id", owner_id, "Owner ID cannot be empty")

        try:
            return self.db.query_by_owner(owner_id)
        except StorageUnavailableError:
            self.logger.exception(
                "Failed to retrieve user stats", extra={"owner_id": owner_id}
            )
            raise

    def get_leaderboard(self, top_count: int = 10) -> list[LeaderboardEntry]:
        """Get the ranked leaderboard.

        Args:
            top_count: Maximum number of entries to return, 1 to 100

        Returns:
            Ranked entries, possibly fewer than top_count

        Raises:
            InvalidMetricError: If top_count is out of range
            StorageUnavailableError: If the store query fails
        """
        if not 1 <= top_count <= self.settings.max_top:
            raise InvalidMetricError(
                "top_count",
                top_count,
                f"Top count must be between 1 and {self.settings.max_top}",
            )

        try:
            top_results = self.db.query_top(top_count)
        except StorageUnavailableError:
            self.logger.exception("Failed to retrieve leaderboard")
            raise

        return rank(top_results)

    def get_problem_keys(
        self, owner_id: str, count: int = 10
    ) -> list[ProblemKeyCount]:
        """Get the keys an owner misses most, summed over all their results.

        Args:
            owner_id: Owner whose results are summarized
            count: Maximum number of keys to return, 1 to 50

        Returns:
            Keys with at least one miss, most missed first, ties by key

        Raises:
            InvalidMetricError: If owner_id is empty or count is out of range
            StorageUnavailableError: If the store query fails
        """
        if not 1 <= count <= MAX_PROBLEM_KEYS:
            raise InvalidMetricError(
                "count", count, f"Count must be between 1 and {MAX_PROBLEM_KEYS}"
            )

        misses: Counter[str] = Counter()
        for result in self.get_user_stats(owner_id):
            misses.update(result.problem_keys)

        ranked = sorted(
            ((key, total) for key, total in misses.items() if total > 0),
            key=lambda pair: (-pair[1], pair[0]),
        )
        return [
            ProblemKeyCount(key=key, misses=total) for key, total in ranked[:count]
        ]

    def get_practice_text(self) -> PracticeText:
        """Get a passage for a new typing game."""
        text = self.text_source.generate()
        self.logger.info("Practice text generated", extra={"length": len(text)})
        return PracticeText(text=text, timestamp=datetime.now(UTC))
