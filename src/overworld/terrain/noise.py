"""Coherent noise for terrain height sampling.

Wraps OpenSimplex noise in fractal Brownian motion with parameters fixed
at construction, so a field is a pure function of (x, y).
"""

import numpy as np
from numpy.typing import NDArray
from opensimplex import OpenSimplex

from .config import NoiseConfig

# Upper bound for seeds drawn from a generator
_SEED_LIMIT = 2**31 - 1


class NoiseField:
    """Seeded 2D fBm height field."""

    def __init__(self, seed: int, config: NoiseConfig | None = None):
        self.seed = seed
        self.config = config or NoiseConfig()
        self._simplex = OpenSimplex(seed=seed)

        # Normalize by the sum of octave amplitudes
        amplitude = 1.0
        total = 0.0
        for _ in range(self.config.octaves):
            total += amplitude
            amplitude *= self.config.gain
        self._bounding = 1.0 / total

    @classmethod
    def from_rng(
        cls, rng: np.random.Generator, config: NoiseConfig | None = None
    ) -> "NoiseField":
        """Create a field with a seed drawn once from rng."""
        seed = int(rng.integers(0, _SEED_LIMIT))
        return cls(seed, config)

    def sample(self, x: int, y: int) -> float:
        """Sample the height at an integer cell.

        Args:
            x: Cell x coordinate.
            y: Cell y coordinate.

        Returns:
            Height roughly in range [-1, 1].
        """
        frequency = self.config.frequency
        amplitude = 1.0
        value = 0.0

        for _ in range(self.config.octaves):
            value += amplitude * self._simplex.noise2(x * frequency, y * frequency)
            frequency *= self.config.lacunarity
            amplitude *= self.config.gain

        return value * self._bounding

    def sample_grid(self, width: int, height: int) -> NDArray[np.float64]:
        """Sample every cell of a width x height region.

        Returns:
            Array of shape (height, width) indexed [y, x].
        """
        heights = np.empty((height, width), dtype=np.float64)
        for y in range(height):
            for x in range(width):
                heights[y, x] = self.sample(x, y)
        return heights
