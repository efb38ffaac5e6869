"""Terrain kinds and their display properties."""

from dataclasses import dataclass
from enum import Enum

Color = tuple[float, float, float]


class TerrainKind(str, Enum):
    """Terrain kinds, declared in ascending classification threshold order."""

    WATER = "water"
    GRASS = "grass"
    FOREST = "forest"
    MOUNTAIN = "mountain"

    @property
    def walkable(self) -> bool:
        """Whether the actor may occupy this terrain."""
        return self in _WALKABLE_KINDS

    @property
    def style(self) -> "TerrainStyle":
        """Display properties for this kind."""
        return TERRAIN_STYLES[self]


@dataclass(frozen=True)
class TerrainStyle:
    """Display properties of a terrain kind.

    Colors use normalized 0-1 channels.
    """

    name: str
    base_color: Color
    variant_count: int


_WALKABLE_KINDS = frozenset({
    TerrainKind.GRASS,
    TerrainKind.FOREST,
    TerrainKind.MOUNTAIN,
})

TERRAIN_STYLES: dict[TerrainKind, TerrainStyle] = {
    TerrainKind.WATER: TerrainStyle(
        name="Water", base_color=(0.20, 0.45, 0.85), variant_count=3
    ),
    TerrainKind.GRASS: TerrainStyle(
        name="Grass", base_color=(0.35, 0.68, 0.27), variant_count=4
    ),
    TerrainKind.FOREST: TerrainStyle(
        name="Forest", base_color=(0.16, 0.48, 0.18), variant_count=3
    ),
    TerrainKind.MOUNTAIN: TerrainStyle(
        name="Mountain", base_color=(0.52, 0.47, 0.42), variant_count=3
    ),
}
