"""Shared test fixtures for overworld tests."""

import pytest

from overworld.config import NavigationConfig
from overworld.navigation import NavigationController
from overworld.terrain.grid import TerrainGrid
from overworld.terrain_types import TerrainKind
from overworld.types import GridTransform, TileCoord

W = TerrainKind.WATER
G = TerrainKind.GRASS
F = TerrainKind.FOREST
M = TerrainKind.MOUNTAIN


class ConstantHeights:
    """Height source returning the same value everywhere except overrides."""

    def __init__(self, default: float, overrides: dict[tuple[int, int], float] | None = None):
        self.default = default
        self.overrides = overrides or {}

    def sample(self, x: int, y: int) -> float:
        return self.overrides.get((x, y), self.default)


@pytest.fixture
def grass_grid() -> TerrainGrid:
    """5x5 grid of grass."""
    return TerrainGrid.from_kinds([[G] * 5 for _ in range(5)])


@pytest.fixture
def mixed_grid() -> TerrainGrid:
    """5x5 grid with a water column at x=4 and mixed land.

    Rows (y down), columns (x right):
        G G G G W
        G F F G W
        G G G G W
        M G G G W
        W G G G W
    """
    return TerrainGrid.from_kinds([
        [G, G, G, G, W],
        [G, F, F, G, W],
        [G, G, G, G, W],
        [M, G, G, G, W],
        [W, G, G, G, W],
    ])


@pytest.fixture
def transform() -> GridTransform:
    """32-unit cells with the origin at zero."""
    return GridTransform(cell_size=32)


@pytest.fixture
def controller(grass_grid: TerrainGrid, transform: GridTransform) -> NavigationController:
    """Controller idle at (2, 2) on the grass grid, 64 units/s."""
    return NavigationController(
        grass_grid,
        TileCoord(x=2, y=2),
        transform,
        NavigationConfig(speed=64.0, arrive_epsilon=0.5),
    )


@pytest.fixture
def mixed_controller(
    mixed_grid: TerrainGrid, transform: GridTransform
) -> NavigationController:
    """Controller idle at (2, 2) on the mixed grid, 64 units/s."""
    return NavigationController(
        mixed_grid,
        TileCoord(x=2, y=2),
        transform,
        NavigationConfig(speed=64.0, arrive_epsilon=0.5),
    )


@pytest.fixture
def constant_heights() -> type[ConstantHeights]:
    """Height source class with fixed samples, for forcing terrain kinds."""
    return ConstantHeights
