"""Tile-based overworld generation and grid navigation."""

from .atlas import AtlasHandle, CellDescriptor, TileAtlasRegistry
from .config import NavigationConfig, OverworldConfig, TextureConfig, load_config
from .exceptions import (
    InvalidVariantError,
    MissingAtlasVariantError,
    OverworldError,
    SessionNotInitializedError,
    TileOutOfBoundsError,
    UnknownAtlasHandleError,
)
from .navigation import (
    InputSnapshot,
    NavigationController,
    NavigationState,
    PointerButton,
)
from .session import OverworldSession
from .terrain import NoiseField, TerrainGrid, classify
from .terrain_types import TERRAIN_STYLES, TerrainKind, TerrainStyle
from .textures import TileTextureSynthesizer, synthesize_actor_marker, to_image
from .types import (
    DIRECTION_DELTAS,
    Direction,
    GridTransform,
    TileCoord,
    WorldPoint,
)

__all__ = [
    # Types
    "Direction",
    "DIRECTION_DELTAS",
    "TileCoord",
    "WorldPoint",
    "GridTransform",
    # Terrain
    "TerrainKind",
    "TerrainStyle",
    "TERRAIN_STYLES",
    "NoiseField",
    "TerrainGrid",
    "classify",
    # Textures and atlas
    "TileTextureSynthesizer",
    "synthesize_actor_marker",
    "to_image",
    "AtlasHandle",
    "CellDescriptor",
    "TileAtlasRegistry",
    # Navigation
    "InputSnapshot",
    "NavigationController",
    "NavigationState",
    "PointerButton",
    # Session and config
    "OverworldSession",
    "OverworldConfig",
    "NavigationConfig",
    "TextureConfig",
    "load_config",
    # Exceptions
    "OverworldError",
    "TileOutOfBoundsError",
    "MissingAtlasVariantError",
    "UnknownAtlasHandleError",
    "InvalidVariantError",
    "SessionNotInitializedError",
]
