from __future__ import annotations

import math

from tradersim.config.defaults import ensure_seed

UINT32_MASK = 0xFFFFFFFF
MULBERRY_INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296.0
LOG_EPSILON = 1e-12


class Mulberry32:
    """Reproducible 32-bit PRNG; the same seed always yields the same stream."""

    __slots__ = ("seed", "state")

    def __init__(self, seed: int):
        self.seed = ensure_seed(seed)
        self.state = self.seed

    @classmethod
    def from_state(cls, seed: int, state: int) -> Mulberry32:
        rng = cls(seed)
        rng.state = ensure_seed(state)
        return rng

    def next(self) -> float:
        self.state = (self.state + MULBERRY_INCREMENT) & UINT32_MASK
        t = self.state
        r = ((t ^ (t >> 15)) * (t | 1)) & UINT32_MASK
        r ^= (r + (((r ^ (r >> 7)) * (r | 61)) & UINT32_MASK)) & UINT32_MASK
        return ((r ^ (r >> 14)) & UINT32_MASK) / TWO_POW_32

    __call__ = next


def normal(rng: Mulberry32, mean: float = 0.0, sd: float = 1.0) -> float:
    """Box-Muller sample; consumes exactly two draws, the paired value is discarded."""
    u1 = max(rng.next(), LOG_EPSILON)
    u2 = rng.next()
    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + sd * z0
