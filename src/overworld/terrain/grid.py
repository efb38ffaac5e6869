"""Generated terrain grid and walkability queries."""

from typing import Iterator, Protocol

import numpy as np
import structlog
from numpy.typing import NDArray

from ..exceptions import TileOutOfBoundsError
from ..terrain_types import TerrainKind
from ..types import TileCoord
from .classification import classify, kind_value, kind_value_to_type
from .config import ClassificationConfig

logger = structlog.get_logger()


class HeightSource(Protocol):
    """Anything that yields a height for an integer cell."""

    def sample(self, x: int, y: int) -> float: ...


class TerrainGrid:
    """
    Dense, read-only grid of terrain kinds.

    Kinds are stored as uint8 values in an array of shape (height, width),
    indexed [y, x]. Lookups by TileCoord or (x, y) tuples use x first.
    """

    def __init__(
        self,
        kinds: NDArray[np.uint8],
        heights: NDArray[np.float64] | None = None,
    ):
        if kinds.ndim != 2:
            raise ValueError(f"Kind array must be 2D, got shape {kinds.shape}")
        if heights is not None and heights.shape != kinds.shape:
            raise ValueError(
                f"Height array shape {heights.shape} doesn't match "
                f"kind array shape {kinds.shape}"
            )

        self._kinds = kinds.astype(np.uint8, copy=True)
        self._kinds.setflags(write=False)
        self._heights: NDArray[np.float64] | None = None
        if heights is not None:
            self._heights = heights.astype(np.float64, copy=True)
            self._heights.setflags(write=False)

        self.height, self.width = self._kinds.shape

    @classmethod
    def generate(
        cls,
        width: int,
        height: int,
        source: HeightSource,
        config: ClassificationConfig | None = None,
    ) -> "TerrainGrid":
        """Build a grid by sampling and classifying every cell once.

        Args:
            width: Map width in tiles.
            height: Map height in tiles.
            source: Height field, usually a NoiseField.
            config: Classification thresholds.

        Returns:
            Fully populated TerrainGrid.
        """
        heights = np.empty((height, width), dtype=np.float64)
        kinds = np.empty((height, width), dtype=np.uint8)

        for y in range(height):
            for x in range(width):
                sample = float(source.sample(x, y))
                heights[y, x] = sample
                kinds[y, x] = kind_value(classify(sample, config))

        grid = cls(kinds, heights)
        logger.info(
            "terrain_generated",
            width=width,
            height=height,
            counts={kind.value: count for kind, count in grid.counts().items()},
        )
        return grid

    @classmethod
    def from_kinds(cls, rows: list[list[TerrainKind]]) -> "TerrainGrid":
        """Build a grid from rows of kinds, rows[y][x]."""
        kinds = np.array(
            [[kind_value(kind) for kind in row] for row in rows], dtype=np.uint8
        )
        return cls(kinds)

    @property
    def kinds(self) -> NDArray[np.uint8]:
        """Read-only kind values, shape (height, width)."""
        return self._kinds

    @property
    def heights(self) -> NDArray[np.float64] | None:
        """Read-only height samples, if the grid was generated from noise."""
        return self._heights

    def in_bounds(self, tile: TileCoord) -> bool:
        """Check if tile is within grid bounds."""
        return 0 <= tile.x < self.width and 0 <= tile.y < self.height

    def kind_at(self, tile: TileCoord) -> TerrainKind:
        """Get the terrain kind at tile.

        Raises:
            TileOutOfBoundsError: If tile is outside the grid.
        """
        if not self.in_bounds(tile):
            raise TileOutOfBoundsError(
                f"Tile {tile} outside {self.width}x{self.height} grid"
            )
        return kind_value_to_type(int(self._kinds[tile.y, tile.x]))

    def __getitem__(self, key: TileCoord | tuple[int, int]) -> TerrainKind:
        if not isinstance(key, TileCoord):
            x, y = key
            key = TileCoord(x=x, y=y)
        return self.kind_at(key)

    def is_walkable(self, tile: TileCoord) -> bool:
        """Check if tile is in bounds and walkable."""
        if not self.in_bounds(tile):
            return False
        return self.kind_at(tile).walkable

    def tiles(self) -> Iterator[TileCoord]:
        """Iterate over every tile coordinate, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield TileCoord(x=x, y=y)

    def center(self) -> TileCoord:
        """The map's center cell."""
        return TileCoord(x=self.width // 2, y=self.height // 2)

    def world_size(self, cell_size: int) -> tuple[int, int]:
        """Total world extent in world units."""
        return self.width * cell_size, self.height * cell_size

    def counts(self) -> dict[TerrainKind, int]:
        """Number of cells per terrain kind (every kind present as a key)."""
        values, totals = np.unique(self._kinds, return_counts=True)
        counter = dict(zip((int(v) for v in values), (int(t) for t in totals)))
        return {kind: counter.get(kind_value(kind), 0) for kind in TerrainKind}

    def nearest_walkable(self, tile: TileCoord) -> TileCoord | None:
        """Find the walkable tile closest to tile by ring search.

        Returns tile itself when walkable, None when the grid has no
        walkable tiles.
        """
        if self.is_walkable(tile):
            return tile

        max_radius = max(self.width, self.height)
        for radius in range(1, max_radius + 1):
            best: TileCoord | None = None
            best_dist = 0
            for dy in range(-radius, radius + 1):
                for dx in range(-radius, radius + 1):
                    if max(abs(dx), abs(dy)) != radius:
                        continue
                    candidate = TileCoord(x=tile.x + dx, y=tile.y + dy)
                    if not self.is_walkable(candidate):
                        continue
                    dist = dx * dx + dy * dy
                    if best is None or dist < best_dist:
                        best, best_dist = candidate, dist
            if best is not None:
                return best
        return None
