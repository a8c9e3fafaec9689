"""
Seeded linear congruential PRNG used by every generation stage.

This is the Park-Miller "minimal standard" generator (multiplier 16807,
modulus 2^31 - 1). Every stage draws from the same instance in a fixed
order, so a given seed and configuration always reproduce the same layout.
"""

import math
from typing import MutableSequence, TypeVar

T = TypeVar("T")

MODULUS = 2147483647  # 2^31 - 1
MULTIPLIER = 16807


class LcgPRNG:
    """
    Park-Miller LCG with the integer helpers the layout generator needs.

    One instance is owned by exactly one generation run and is never shared.
    """

    def __init__(self, seed: int):
        """Initialize with an integer seed."""
        self.call_count = 0

        seed = int(seed)
        # Truncating remainder, so negative seeds keep their sign here
        if seed >= 0:
            state = seed % MODULUS
        else:
            state = -((-seed) % MODULUS)
        if state <= 0:
            state += MODULUS - 1
        self.state = state

    def next(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        self.state = (self.state * MULTIPLIER) % MODULUS
        return (self.state - 1) / (MODULUS - 1)

    def next_int(self, min_val: float, max_val: float) -> float:
        """
        Return a random value in [min_val, max_val] inclusive.

        Bounds may be fractional; the result is then offset by min_val's
        fractional part. Returns min_val unchanged when min_val > max_val
        (no draw is consumed in that case).
        """
        if min_val > max_val:
            return min_val
        return math.floor(self.next() * (max_val - min_val + 1)) + min_val

    def shuffle(self, seq: MutableSequence[T]) -> MutableSequence[T]:
        """Shuffle seq in place (Fisher-Yates, walking down from the end) and return it."""
        current = len(seq)
        while current != 0:
            j = math.floor(self.next() * current)
            current -= 1
            seq[current], seq[j] = seq[j], seq[current]
        return seq

