"""Grid navigation: input arbitration and interpolated tile movement."""

from dataclasses import dataclass
from enum import IntEnum

import structlog

from .config import NavigationConfig
from .terrain.grid import TerrainGrid
from .types import Direction, GridTransform, TileCoord, WorldPoint

logger = structlog.get_logger()


class PointerButton(IntEnum):
    """Pointer buttons the host may report."""

    LEFT = 1
    RIGHT = 2
    MIDDLE = 3


@dataclass(frozen=True)
class InputSnapshot:
    """Directional inputs that became pressed this tick.

    Each flag is edge-triggered by the host: it is set once per press.
    """

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False

    def direction(self) -> Direction | None:
        """Winning direction: left, then right, then up, then down."""
        for pressed, direction in (
            (self.left, Direction.WEST),
            (self.right, Direction.EAST),
            (self.up, Direction.NORTH),
            (self.down, Direction.SOUTH),
        ):
            if pressed:
                return direction
        return None


@dataclass
class NavigationState:
    """Actor position state.

    current_tile is the last tile fully reached; target_tile is where the
    actor is heading (equal to current_tile when idle).
    """

    current_tile: TileCoord
    target_tile: TileCoord
    position: WorldPoint


class NavigationController:
    """
    Moves a single actor between grid tiles.

    Requests that would leave the map or enter unwalkable terrain are
    dropped without changing state. Only one target is held at a time;
    a new valid request replaces it, even mid-transit.
    """

    def __init__(
        self,
        grid: TerrainGrid,
        start: TileCoord,
        transform: GridTransform | None = None,
        config: NavigationConfig | None = None,
    ):
        self.grid = grid
        self.transform = transform or GridTransform()
        self.config = config or NavigationConfig()
        self.state = NavigationState(
            current_tile=start,
            target_tile=start,
            position=self.transform.tile_to_world(start),
        )
        self._pointer_held = False

    @property
    def is_idle(self) -> bool:
        """True when resting exactly on the center of the current tile."""
        return (
            self.state.current_tile == self.state.target_tile
            and self.state.position == self.transform.tile_to_world(self.state.target_tile)
        )

    @property
    def position(self) -> WorldPoint:
        """Actor position in world space, read by the renderer every frame."""
        return self.state.position

    # --- Requests ---

    def request_direction(self, direction: Direction) -> bool:
        """Target the neighbour of the current tile in direction.

        Returns True if the request was accepted.
        """
        return self.request_tile(self.state.current_tile.offset(direction))

    def request_tile(self, tile: TileCoord) -> bool:
        """Target tile directly.

        Returns True if the request was accepted.
        """
        if not self.grid.in_bounds(tile):
            logger.debug("move_rejected_oob", to_tile=str(tile))
            return False

        if not self.grid.is_walkable(tile):
            logger.debug(
                "move_rejected_not_walkable",
                to_tile=str(tile),
                kind=self.grid.kind_at(tile).value,
            )
            return False

        if tile != self.state.target_tile:
            logger.debug(
                "target_set",
                from_tile=str(self.state.current_tile),
                to_tile=str(tile),
            )
        self.state.target_tile = tile
        return True

    def handle_input(self, snapshot: InputSnapshot) -> bool:
        """Apply the highest-priority directional input, if any."""
        direction = snapshot.direction()
        if direction is None:
            return False
        return self.request_direction(direction)

    def handle_pointer(self, button: PointerButton, pressed: bool, tile: TileCoord) -> bool:
        """Handle a pointer button event carrying the tile under the pointer.

        Only the press edge of the left button issues a request; holding
        the button and dragging does not re-target until it is released.
        """
        if button != PointerButton.LEFT:
            return False
        if not pressed:
            self._pointer_held = False
            return False
        if self._pointer_held:
            return False
        self._pointer_held = True
        return self.request_tile(tile)

    # --- Simulation ---

    def advance(self, elapsed: float) -> None:
        """Move toward the target center by at most speed * elapsed."""
        if self.is_idle:
            return

        target = self.transform.tile_to_world(self.state.target_tile)
        max_step = self.config.speed * max(elapsed, 0.0)
        position = self.state.position.move_toward(target, max_step)

        if position.distance_to(target) < self.config.arrive_epsilon:
            self.state.position = target
            if self.state.current_tile != self.state.target_tile:
                logger.debug("tile_reached", tile=str(self.state.target_tile))
            self.state.current_tile = self.state.target_tile
        else:
            self.state.position = position

    def tick(self, elapsed: float, snapshot: InputSnapshot | None = None) -> None:
        """Run one frame: input arbitration first, then integration."""
        if snapshot is not None:
            self.handle_input(snapshot)
        self.advance(elapsed)
