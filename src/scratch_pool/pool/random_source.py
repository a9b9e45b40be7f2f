import random
import time
from typing import Optional, Protocol

# rendered names stay within a signed 64 bit integer
_INT_BITS = 63


class RandomSource(Protocol):
    def next_int(self) -> int:
        """Return a non-negative integer."""
        ...


class SeededRandom:
    """Pseudo-random integers from a private `random.Random` instance.

    When no seed is given the current unix time stamp is used.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = int(time.time()) if seed is None else seed
        self._rng = random.Random(self.seed)

    def next_int(self) -> int:
        return self._rng.getrandbits(_INT_BITS)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed})"
