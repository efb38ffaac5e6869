"""Overworld session: wires generation, atlas and navigation for a host."""

import numpy as np
import structlog

from .atlas import CellDescriptor, TileAtlasRegistry
from .config import OverworldConfig
from .exceptions import SessionNotInitializedError
from .navigation import InputSnapshot, NavigationController, PointerButton
from .terrain.grid import HeightSource, TerrainGrid
from .terrain.noise import NoiseField
from .textures import PixelBuffer, TileTextureSynthesizer, synthesize_actor_marker
from .types import GridTransform, TileCoord, WorldPoint

logger = structlog.get_logger()

_SEED_LIMIT = 2**31 - 1


class OverworldSession:
    """
    One generated overworld with a single controllable actor.

    Usage:
        session = OverworldSession(OverworldConfig())
        session.initialize()

        # Every frame, from host glue:
        session.tick(elapsed, InputSnapshot(left=True))
        draw_actor_at(session.actor_position)
    """

    def __init__(
        self,
        config: OverworldConfig | None = None,
        height_source: HeightSource | None = None,
    ):
        self.config = config or OverworldConfig()
        self._height_source = height_source

        self.seed: int | None = None
        self.grid: TerrainGrid | None = None
        self.atlas: TileAtlasRegistry | None = None
        self.descriptors: list[CellDescriptor] = []
        self.actor_marker: PixelBuffer | None = None
        self.navigation: NavigationController | None = None
        self.transform = GridTransform(cell_size=self.config.map.cell_size)

    def initialize(self) -> None:
        """Generate the grid, build the atlas and place the actor.

        A master seed is drawn once when the config leaves it unset; it is
        stored on the session so the map can be regenerated.
        """
        map_config = self.config.map
        seed = map_config.seed
        if seed is None:
            seed = int(np.random.default_rng().integers(0, _SEED_LIMIT))
        self.seed = seed

        # Independent streams: noise seed, texture seed, placement picks
        noise_ss, texture_ss, placement_ss = np.random.SeedSequence(seed).spawn(3)

        source = self._height_source
        if source is None:
            source = NoiseField.from_rng(np.random.default_rng(noise_ss), self.config.noise)

        self.grid = TerrainGrid.generate(
            map_config.width, map_config.height, source, self.config.classification
        )

        texture_seed = int(texture_ss.generate_state(1)[0])
        synthesizer = TileTextureSynthesizer(seed=texture_seed)
        self.atlas = TileAtlasRegistry.build(synthesizer, self.config.textures.tile_size)
        self.descriptors = self.atlas.render_descriptors(
            self.grid, np.random.default_rng(placement_ss)
        )
        self.actor_marker = synthesize_actor_marker(self.config.textures.marker_size)

        start = self.grid.nearest_walkable(self.grid.center())
        if start is None:
            start = self.grid.center()
            logger.warning("no_walkable_tiles", spawn=str(start))
        self.navigation = NavigationController(
            self.grid, start, self.transform, self.config.navigation
        )

        logger.info(
            "session_initialized",
            seed=seed,
            width=map_config.width,
            height=map_config.height,
            start=str(start),
        )

    def tick(self, elapsed: float, snapshot: InputSnapshot | None = None) -> None:
        """Advance one frame."""
        self._require_navigation().tick(elapsed, snapshot)

    def on_pointer_press(self, tile: TileCoord) -> bool:
        """Left-button press edge on tile. Returns True if the actor re-targeted."""
        return self._require_navigation().request_tile(tile)

    def on_pointer_event(
        self, button: PointerButton, pressed: bool, tile: TileCoord
    ) -> bool:
        """Raw pointer button event; only a left press edge re-targets."""
        return self._require_navigation().handle_pointer(button, pressed, tile)

    @property
    def actor_position(self) -> WorldPoint:
        return self._require_navigation().position

    @property
    def world_size(self) -> tuple[int, int]:
        """World extent in world units, for camera bounds."""
        if self.grid is None:
            raise SessionNotInitializedError("Session not initialized")
        return self.grid.world_size(self.config.map.cell_size)

    def _require_navigation(self) -> NavigationController:
        if self.navigation is None:
            raise SessionNotInitializedError("Session not initialized")
        return self.navigation
