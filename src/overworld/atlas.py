"""Tile atlas registry: synthesized textures and their handles."""

from dataclasses import dataclass

import numpy as np
import structlog

from .exceptions import (
    InvalidVariantError,
    MissingAtlasVariantError,
    UnknownAtlasHandleError,
)
from .terrain.grid import TerrainGrid
from .terrain_types import TERRAIN_STYLES, TerrainKind
from .textures import PixelBuffer, TileTextureSynthesizer
from .types import TileCoord

logger = structlog.get_logger()


@dataclass(frozen=True)
class AtlasHandle:
    """Opaque, stable identifier of one registered texture."""

    kind: TerrainKind
    variant: int

    @property
    def frame_name(self) -> str:
        """Stable name used as the frame key in exported atlases."""
        return f"{self.kind.value}-{self.variant}"


@dataclass(frozen=True)
class CellDescriptor:
    """Render instruction for one grid cell."""

    tile: TileCoord
    handle: AtlasHandle


class TileAtlasRegistry:
    """
    Maps each terrain kind to an ordered sequence of texture handles.

    Textures are registered once and never replaced. Placement-time
    variant picks take their own generator, separate from any randomness
    used to synthesize the textures.
    """

    def __init__(self) -> None:
        self._variants: dict[TerrainKind, list[AtlasHandle]] = {
            kind: [] for kind in TerrainKind
        }
        self._textures: dict[AtlasHandle, PixelBuffer] = {}

    @classmethod
    def build(
        cls, synthesizer: TileTextureSynthesizer, size: int
    ) -> "TileAtlasRegistry":
        """Synthesize and register every variant of every terrain kind."""
        registry = cls()
        for kind, style in TERRAIN_STYLES.items():
            for variant in range(style.variant_count):
                registry.register(kind, variant, synthesizer.synthesize(kind, variant, size))
        registry.ensure_complete()
        logger.info(
            "atlas_built",
            textures=len(registry),
            size=size,
            seed=synthesizer.seed,
        )
        return registry

    def register(
        self, kind: TerrainKind, variant: int, texture: PixelBuffer
    ) -> AtlasHandle:
        """Register a texture for (kind, variant) and return its handle.

        Raises:
            InvalidVariantError: If variant is negative or already registered.
        """
        if variant < 0:
            raise InvalidVariantError(f"Variant must be non-negative, got {variant}")
        handle = AtlasHandle(kind=kind, variant=variant)
        if handle in self._textures:
            raise InvalidVariantError(f"Variant {handle.frame_name} already registered")

        self._textures[handle] = texture
        self._variants[kind].append(handle)
        return handle

    def variants_for(self, kind: TerrainKind) -> tuple[AtlasHandle, ...]:
        """Handles registered for kind, in registration order."""
        return tuple(self._variants[kind])

    def pick_random_variant(
        self, kind: TerrainKind, rng: np.random.Generator
    ) -> AtlasHandle:
        """Pick one of kind's variants uniformly.

        Raises:
            MissingAtlasVariantError: If kind has no registered variants.
        """
        handles = self._variants[kind]
        if not handles:
            raise MissingAtlasVariantError(f"No variants registered for {kind.value}")
        return handles[int(rng.integers(0, len(handles)))]

    def texture(self, handle: AtlasHandle) -> PixelBuffer:
        """Get the texture for a handle.

        Raises:
            UnknownAtlasHandleError: If handle was never registered.
        """
        if handle not in self._textures:
            raise UnknownAtlasHandleError(f"Unknown atlas handle {handle.frame_name}")
        return self._textures[handle]

    def handles(self) -> list[AtlasHandle]:
        """All handles, grouped by kind in declaration order."""
        return [handle for kind in TerrainKind for handle in self._variants[kind]]

    def ensure_complete(self) -> None:
        """Check every terrain kind has at least one variant.

        Raises:
            MissingAtlasVariantError: Naming the kinds without variants.
        """
        missing = [kind.value for kind in TerrainKind if not self._variants[kind]]
        if missing:
            raise MissingAtlasVariantError(
                f"No variants registered for: {', '.join(missing)}"
            )

    def render_descriptors(
        self, grid: TerrainGrid, rng: np.random.Generator
    ) -> list[CellDescriptor]:
        """Choose a texture variant for every grid cell.

        Args:
            grid: Generated terrain grid.
            rng: Placement generator.

        Returns:
            One descriptor per cell, row by row.
        """
        self.ensure_complete()
        return [
            CellDescriptor(tile=tile, handle=self.pick_random_variant(grid.kind_at(tile), rng))
            for tile in grid.tiles()
        ]

    def __len__(self) -> int:
        return len(self._textures)
