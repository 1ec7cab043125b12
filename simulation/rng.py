"""
Random-number sources for the engines.

Both engines draw from a plain ``() -> float`` callable returning values in
[0, 1). ``create_rng`` hands out either a seeded Park-Miller generator, whose
stream is identical on every platform for a given seed, or the process-wide
``random.random`` when no usable seed is given.
"""
from __future__ import annotations

import math
import random
from typing import Any, Callable

from models.constants import LCG_MODULUS, LCG_MULTIPLIER
from .validation import is_finite_number

RandomFn = Callable[[], float]


class LehmerRandom:
    """Multiplicative LCG: ``state = state * 16807 % (2**31 - 1)``.

    Period divides 2**31 - 2. Each call returns ``(state - 1) / (2**31 - 2)``.
    """

    def __init__(self, seed: int) -> None:
        seed = math.floor(seed)
        # truncated remainder: negative seeds stay negative before the shift
        state = abs(seed) % LCG_MODULUS
        if seed < 0:
            state = -state
        if state <= 0:
            state += LCG_MODULUS - 1
        self.state = state

    def random(self) -> float:
        self.state = (self.state * LCG_MULTIPLIER) % LCG_MODULUS
        return (self.state - 1) / (LCG_MODULUS - 1)

    __call__ = random


def create_rng(seed: Any = None) -> RandomFn:
    """Return a seeded generator, or ``random.random`` if *seed* is not a finite number."""
    if not is_finite_number(seed):
        return random.random
    return LehmerRandom(seed)
