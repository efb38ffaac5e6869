"""Core types for grid coordinates and navigation."""

import math
from dataclasses import dataclass
from enum import IntEnum

from pydantic import BaseModel


class Direction(IntEnum):
    """4-direction movement enum."""

    NORTH = 1
    EAST = 2
    SOUTH = 3
    WEST = 4


# Direction deltas for movement calculation
# Coordinate system: +X is East, +Y is South
DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


class TileCoord(BaseModel, frozen=True):
    """Immutable 2D tile coordinate."""

    x: int
    y: int

    def __add__(self, other: "TileCoord") -> "TileCoord":
        return TileCoord(x=self.x + other.x, y=self.y + other.y)

    def offset(self, direction: Direction) -> "TileCoord":
        """Return new coordinate offset by direction."""
        dx, dy = DIRECTION_DELTAS[direction]
        return TileCoord(x=self.x + dx, y=self.y + dy)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"TileCoord(x={self.x}, y={self.y})"


@dataclass(frozen=True)
class WorldPoint:
    """Continuous 2D point in world space."""

    x: float
    y: float

    def distance_to(self, other: "WorldPoint") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def move_toward(self, target: "WorldPoint", max_step: float) -> "WorldPoint":
        """Return a point at most max_step along the straight line to target."""
        distance = self.distance_to(target)
        if distance <= max_step or distance == 0.0:
            return target
        t = max_step / distance
        return WorldPoint(
            x=self.x + (target.x - self.x) * t,
            y=self.y + (target.y - self.y) * t,
        )


class GridTransform(BaseModel, frozen=True):
    """Converts between tile coordinates and world-space points.

    A tile maps to the center of its square cell, offset by the origin.
    """

    cell_size: int = 32
    origin_x: float = 0.0
    origin_y: float = 0.0

    def tile_to_world(self, tile: TileCoord) -> WorldPoint:
        half = self.cell_size / 2
        return WorldPoint(
            x=self.origin_x + tile.x * self.cell_size + half,
            y=self.origin_y + tile.y * self.cell_size + half,
        )

    def world_to_tile(self, point: WorldPoint) -> TileCoord:
        return TileCoord(
            x=math.floor((point.x - self.origin_x) / self.cell_size),
            y=math.floor((point.y - self.origin_y) / self.cell_size),
        )
