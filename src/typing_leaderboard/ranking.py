"""Rank assignment for leaderboard results."""

from collections.abc import Sequence

from .models import GameResult, LeaderboardEntry


def rank(ordered_results: Sequence[GameResult] | None) -> list[LeaderboardEntry]:
    """Assign dense 1-based ranks by position.

    Input must already be sorted by composite score, best first. Order is
    trusted as given: equal scores keep their input order and still get
    distinct ranks.
    """
    if ordered_results is None:
        raise ValueError("Results to rank must be provided")

    return [
        LeaderboardEntry(
            rank=position,
            username=result.display_name,
            net_wpm=result.net_wpm,
            gross_wpm=result.gross_wpm,
            accuracy=result.accuracy,
            composite_score=result.composite_score,
            timestamp=result.recorded_at,
        )
        for position, result in enumerate(ordered_results, 1)
    ]
