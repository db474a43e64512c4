"""
String-seeded Alea PRNG.

Johannes Baagøe's Alea generator, seeded through its Mash hash so that the
same seed string yields the same sequence on every platform and process.
Python's built-in ``hash`` is salted per process and cannot be used for this.
"""

from typing import Sequence, TypeVar

T = TypeVar("T")

MASH_SEED = 0xEFC8249D
TWO_POW_32 = 0x100000000
TWO_POW_NEG_32 = 2.3283064365386963e-10


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class Mash:
    """Mash string hash used to derive the Alea state."""

    def __init__(self):
        self.n = MASH_SEED

    def __call__(self, data) -> float:
        n = self.n
        for char in str(data):
            n += ord(char)
            h = 0.02519603282416938 * n
            n = _uint32(h)
            h -= n
            h *= n
            n = _uint32(h)
            h -= n
            n += h * TWO_POW_32
        self.n = n
        return _uint32(n) * TWO_POW_NEG_32


class AleaPRNG:
    """
    Alea pseudo-random generator.

    One instance is created per generation run and handed to whatever
    consumes randomness; there is no shared module-level generator.
    """

    def __init__(self, seed: str = ""):
        self.seed = seed
        self.call_count = 0

        mash = Mash()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        self.s0 -= mash(seed)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(seed)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(seed)
        if self.s2 < 0:
            self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * TWO_POW_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def value(self) -> float:
        """Uniform float in [0, 1), used for color channels."""
        return self.random()

    def range(self, low: int, high: int) -> int:
        """Integer in [low, high). Returns ``low`` when the range is empty."""
        if high <= low:
            return low
        return low + int(self.random() * (high - low))

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.range(0, len(seq))]
