from __future__ import annotations

"""Deterministic random source for dungeon generation.

Every random draw made while building a dungeon goes through one
:class:`GameRNG` instance, so a seed fully determines the layout.  The
generator owns its instance; two generators never share one.
"""

import random
from typing import Any, List, MutableSequence, Optional, Sequence, Union

import numpy as np


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)

    # ------------------------------------------------------------------
    # basic random helpers
    # ------------------------------------------------------------------
    def get_int(self, a: int, b: int) -> int:
        """Uniform integer in the closed range ``[a, b]``."""
        if a > b:
            raise ValueError(f"empty range: a={a} > b={b}")
        return int(self.rng.integers(a, b + 1))

    def get_randrange(self, start: int, stop: Optional[int] = None) -> int:
        """Uniform integer in the half-open range ``[start, stop)``."""
        if stop is None:
            stop = start
            start = 0
        if stop <= start:
            raise ValueError(f"empty range: [{start}, {stop})")
        return self.get_int(start, stop - 1)

    def get_float(self, a: float = 0.0, b: float = 1.0) -> float:
        if a > b:
            raise ValueError("a <= b")
        return a + (b - a) * float(self.rng.random())

    # ------------------------------------------------------------------
    # sequence utilities
    # ------------------------------------------------------------------
    def choice(self, seq: Sequence[Any]) -> Any:
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.get_int(0, len(seq) - 1)]

    def shuffle(self, seq: MutableSequence[Any]) -> None:
        """Fisher-Yates shuffle in place, drawing every swap from this RNG."""
        for n in range(len(seq) - 1, 0, -1):
            k = self.get_int(0, n)
            seq[n], seq[k] = seq[k], seq[n]

    def coin_flip(
        self, num_flips: int = 1, heads_probability: float = 0.5
    ) -> Union[str, List[str]]:
        if not 0.0 <= heads_probability <= 1.0:
            raise ValueError("probability out of range")
        results = [
            "heads" if self.get_float() < heads_probability else "tails"
            for _ in range(num_flips)
        ]
        return results[0] if num_flips == 1 else results

    def reset(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)


__all__ = ["GameRNG"]
