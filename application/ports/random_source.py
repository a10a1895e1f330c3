"""
Random Source Interface (Port).

Workout generation and framework sampling draw all of their randomness
from an injected RandomSource so that tests can replay them exactly.
"""
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Source of uniform random values."""

    def random(self) -> float:
        """Return a uniform float in [0.0, 1.0)."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        """Return a uniformly chosen element of a non-empty sequence."""
        ...
