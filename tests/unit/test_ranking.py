"""Tests for leaderboard rank assignment."""

from datetime import datetime, UTC

import pytest

from src.typing_leaderboard.models import GameResult
from src.typing_leaderboard.ranking import rank


def make_result(display_name: str, composite_score: float, day: int = 15) -> GameResult:
    return GameResult(
        id=f"key-{display_name}",
        owner_id="ANON",
        display_name=display_name,
        net_wpm=composite_score,
        gross_wpm=composite_score + 5,
        accuracy=100.0,
        composite_score=composite_score,
        recorded_at=datetime(2024, 1, day, 10, 30, 0, tzinfo=UTC),
    )


class TestRank:
    """Tests for rank."""

    def test_assigns_ranks_by_position(self) -> None:
        """Test first element is rank 1, second rank 2."""
        results = [make_result("user1", 100.0), make_result("user2", 95.0)]

        entries = rank(results)

        assert [(e.rank, e.username) for e in entries] == [(1, "user1"), (2, "user2")]

    def test_copies_result_fields(self) -> None:
        """Test entries carry the result's metrics and timestamp."""
        result = make_result("user1", 88.5, day=3)

        entry = rank([result])[0]

        assert entry.net_wpm == 88.5
        assert entry.gross_wpm == 93.5
        assert entry.accuracy == 100.0
        assert entry.composite_score == 88.5
        assert entry.timestamp == datetime(2024, 1, 3, 10, 30, 0, tzinfo=UTC)

    def test_ties_keep_input_order(self) -> None:
        """Test equal scores get distinct ranks in first-seen order."""
        results = [
            make_result("early", 70.0, day=1),
            make_result("late", 70.0, day=2),
            make_result("third", 70.0, day=3),
        ]

        entries = rank(results)

        assert [(e.rank, e.username) for e in entries] == [
            (1, "early"),
            (2, "late"),
            (3, "third"),
        ]

    def test_does_not_resort(self) -> None:
        """Test input order is trusted even when not sorted by score."""
        results = [make_result("low", 10.0), make_result("high", 90.0)]

        entries = rank(results)

        assert entries[0].username == "low"
        assert entries[0].rank == 1

    def test_empty_input(self) -> None:
        """Test an empty sequence ranks to an empty list."""
        assert rank([]) == []

    def test_none_input_rejected(self) -> None:
        """Test a missing sequence is rejected."""
        with pytest.raises(ValueError, match="must be provided"):
            rank(None)
