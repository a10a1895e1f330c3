"""
Default RandomSource adapter backed by random.Random.

A fixed seed makes generation and framework sampling replayable.
"""
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class SeededRandomSource:
    """RandomSource implementation over a private random.Random instance."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def random(self) -> float:
        return self._random.random()

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return self._random.choice(seq)
