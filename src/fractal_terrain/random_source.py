"""Random number sources consumed by the generator."""

import copy
from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    """Supplier of unscaled random draws.

    Implementations must not scale the values themselves; the generator
    applies corner heights and displacement scales.
    """

    def uniform(self) -> float:
        """Return a uniform float in [0, 1)."""
        ...

    def gaussian(self) -> float:
        """Return a standard-normal sample (mean 0, std 1)."""
        ...


class NumpyRandomSource:
    """RandomSource backed by a numpy Generator (PCG64)."""

    def __init__(self, seed: int | None = None):
        """Initialize source.

        Args:
            seed: Seed for reproducible draws. None draws fresh OS entropy.
        """
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def uniform(self) -> float:
        return float(self._rng.random())

    def gaussian(self) -> float:
        return float(self._rng.standard_normal())

    def clone(self) -> "NumpyRandomSource":
        """Return an independent source that continues from the same state."""
        twin = NumpyRandomSource.__new__(NumpyRandomSource)
        twin.seed = self.seed
        twin._rng = copy.deepcopy(self._rng)
        return twin
