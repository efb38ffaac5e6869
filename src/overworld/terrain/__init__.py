"""Procedural terrain generation package.

Samples a seeded fractal noise field per cell and classifies each height
into water, grass, forest or mountain.
"""

from .classification import classify, classify_heights, kind_value, kind_value_to_type
from .config import ClassificationConfig, MapConfig, NoiseConfig
from .grid import HeightSource, TerrainGrid
from .noise import NoiseField

__all__ = [
    "ClassificationConfig",
    "HeightSource",
    "MapConfig",
    "NoiseConfig",
    "NoiseField",
    "TerrainGrid",
    "classify",
    "classify_heights",
    "kind_value",
    "kind_value_to_type",
]
