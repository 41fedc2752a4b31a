"""Injectable source of randomness.

Every draw in the engine goes through a :class:`RandomSource` so that a
season can be replayed from a seed, or pinned completely in tests by
overriding :meth:`RandomSource.random`.
"""

import random
from typing import List, MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """Seedable wrapper around :class:`random.Random`.

    All helpers are derived from :meth:`random`, so a subclass that only
    overrides ``random()`` controls every draw the engine makes.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return self._random.random()

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.random()

    def index(self, n: int) -> int:
        """Uniform index in [0, n)."""
        if n <= 0:
            raise ValueError("Cannot draw an index from an empty range")
        return min(int(self.random() * n), n - 1)

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.index(len(seq))]

    def shuffle(self, seq: MutableSequence) -> None:
        """Fisher-Yates shuffle in place."""
        for i in range(len(seq) - 1, 0, -1):
            j = self.index(i + 1)
            seq[i], seq[j] = seq[j], seq[i]

    def shuffled(self, seq: Sequence[T]) -> List[T]:
        out = list(seq)
        self.shuffle(out)
        return out


class FixedRandomSource(RandomSource):
    """Always returns the same draw (0.5 by default, the midpoint)."""

    def __init__(self, value: float = 0.5):
        super().__init__(seed=None)
        if not 0.0 <= value < 1.0:
            raise ValueError(f"Fixed draw must be in [0, 1), got {value}")
        self.value = value

    def random(self) -> float:
        return self.value


class ScriptedRandomSource(RandomSource):
    """Replays a fixed sequence of draws, cycling when exhausted."""

    def __init__(self, draws: Sequence[float]):
        super().__init__(seed=None)
        if not draws:
            raise ValueError("ScriptedRandomSource needs at least one draw")
        self.draws = list(draws)
        self._pos = 0

    def random(self) -> float:
        value = self.draws[self._pos % len(self.draws)]
        self._pos += 1
        return value
