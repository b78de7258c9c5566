"""Validation and composite scoring for submitted game results."""

from typing import Protocol

from .exceptions import InvalidMetricError

MAX_NET_WPM = 300.0
MAX_ACCURACY = 100.0
MAX_GROSS_WPM = 1000.0


class ScoreCandidate(Protocol):
    """Unpersisted result carrying the fields that are validated."""

    owner_id: str
    display_name: str
    net_wpm: float
    gross_wpm: float
    accuracy: float


def validate(result: ScoreCandidate) -> None:
    """Check raw metrics and identity before a result is accepted.

    Checks run in a fixed order and stop at the first failure.

    Raises:
        InvalidMetricError: naming the offending field and value
    """
    # Chained comparisons also reject NaN.
    if not 0 <= result.net_wpm <= MAX_NET_WPM:
        raise InvalidMetricError(
            "net_wpm", result.net_wpm, "Net WPM must be between 0 and 300"
        )
    if not 0 <= result.accuracy <= MAX_ACCURACY:
        raise InvalidMetricError(
            "accuracy", result.accuracy, "Accuracy must be between 0 and 100"
        )
    if not result.owner_id:
        raise InvalidMetricError(
            "owner_id", result.owner_id, "Owner ID cannot be empty"
        )
    if not result.display_name:
        raise InvalidMetricError(
            "display_name", result.display_name, "Display name cannot be empty"
        )
    if not 0 <= result.gross_wpm <= MAX_GROSS_WPM:
        raise InvalidMetricError(
            "gross_wpm", result.gross_wpm, "Gross WPM must be between 0 and 1000"
        )


def compute_composite(net_wpm: float, accuracy: float) -> float:
    """Combine speed and accuracy into a single ranking score.

    Net WPM weighted by accuracy as a fraction, e.g. 60 WPM at 95% is 57.0.
    """
    return round(net_wpm * (accuracy / 100), 2)
