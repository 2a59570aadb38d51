# rng.py – mulberry32 PRNG for reproducible palette jitter

from __future__ import annotations

import logging
import math
import random
from typing import Callable

log = logging.getLogger(__name__)

RandomFn = Callable[[], float]

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


def _to_uint32(seed: float) -> int:
    return int(seed) & _MASK


def create_seeded_rng(seed: float) -> RandomFn:
    """Mulberry32: 32-bit state, one odd increment, two xorshift-multiply rounds."""
    state = _to_uint32(seed)

    def next_float() -> float:
        nonlocal state
        state = (state + _INCREMENT) & _MASK
        t = _imul(state ^ (state >> 15), 1 | state)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK) ^ t
        return ((t ^ (t >> 14)) & _MASK) / 4294967296.0

    return next_float


def create_random(seed: float | None = None) -> RandomFn:
    if isinstance(seed, (int, float)) and math.isfinite(seed):
        return create_seeded_rng(seed)
    log.debug("no finite seed (%r); using non-deterministic random", seed)
    return random.random


__all__ = ["RandomFn", "create_random", "create_seeded_rng"]
