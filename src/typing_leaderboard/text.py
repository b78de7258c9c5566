"""Practice text for typing games."""

import random
from typing import Protocol

PASSAGES: tuple[str, ...] = (
    "The quick brown fox jumps over the lazy dog. This pangram contains every "
    "letter of the alphabet at least once, which is why it has been used for "
    "typing practice for decades. Focus on accuracy first, then speed. Regular "
    "practice with varied text builds muscle memory and typing fluency.",
    "Never underestimate the power of a good book. Reading expands your mind "
    "and introduces you to new ideas and perspectives. Make reading a regular "
    "habit and you will find yourself growing with every page you turn.",
    "The early bird catches the worm, but the second mouse gets the cheese. "
    "Sometimes being first is not the best strategy; waiting and learning from "
    "the mistakes of others can lead to greater success.",
    "Innovation is the key to progress. In a rapidly changing world, those who "
    "embrace new ideas are the ones who thrive. Every great invention started "
    "as a bold idea, and every advance was once a daring experiment.",
    "The sun always shines brightest after the rain. Challenges are part of "
    "life, but they also offer opportunities for growth and resilience. Keep "
    "your spirits high and trust that every cloud has a silver lining.",
)


class TextSource(Protocol):
    """Supplier of practice passages."""

    def generate(self) -> str:
        """Return a passage to type."""
        ...


class PassageTextSource:
    """Serve one of a fixed set of practice passages at random."""

    def __init__(
        self,
        passages: tuple[str, ...] = PASSAGES,
        rng: random.Random | None = None,
    ) -> None:
        """Use the given passages, choosing with rng when provided."""
        if not passages:
            raise ValueError("At least one passage must be provided")
        self.passages = passages
        self.rng = rng or random.Random()

    def generate(self) -> str:
        """Return a random passage without surrounding whitespace."""
        return self.rng.choice(self.passages).strip()
