"""Terrain classification: water, grass, forest, mountain."""

import numpy as np
from numpy.typing import NDArray

from ..terrain_types import TerrainKind
from .config import ClassificationConfig

# Ascending threshold order doubles as the uint8 storage code
_KINDS_BY_VALUE: tuple[TerrainKind, ...] = (
    TerrainKind.WATER,
    TerrainKind.GRASS,
    TerrainKind.FOREST,
    TerrainKind.MOUNTAIN,
)

_VALUES_BY_KIND: dict[TerrainKind, int] = {
    kind: value for value, kind in enumerate(_KINDS_BY_VALUE)
}

_DEFAULT_CONFIG = ClassificationConfig()


def classify(height: float, config: ClassificationConfig | None = None) -> TerrainKind:
    """Classify a height sample into a terrain kind.

    Bands are half-open on the lower side, so a height equal to a
    threshold belongs to the higher band.
    """
    config = config or _DEFAULT_CONFIG
    if height < config.grass_min:
        return TerrainKind.WATER
    if height < config.forest_min:
        return TerrainKind.GRASS
    if height < config.mountain_min:
        return TerrainKind.FOREST
    return TerrainKind.MOUNTAIN


def classify_heights(
    heights: NDArray[np.float64],
    config: ClassificationConfig | None = None,
) -> NDArray[np.uint8]:
    """Classify a whole height array.

    Args:
        heights: Height samples of any shape.
        config: Classification thresholds.

    Returns:
        Array of kind values as uint8, same shape as heights.
    """
    config = config or _DEFAULT_CONFIG
    # right=False gives bins[i-1] <= h < bins[i], matching classify()
    bins = np.asarray(config.thresholds, dtype=np.float64)
    return np.digitize(heights, bins, right=False).astype(np.uint8)


def kind_value(kind: TerrainKind) -> int:
    """Convert TerrainKind to its uint8 storage value."""
    return _VALUES_BY_KIND[kind]


def kind_value_to_type(value: int) -> TerrainKind:
    """Convert a uint8 storage value back to TerrainKind."""
    return _KINDS_BY_VALUE[value]
