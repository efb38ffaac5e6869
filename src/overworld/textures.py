"""Procedural tile texture synthesis.

Each terrain kind has its own painting procedure. Buffers are float32
RGBA arrays of shape (size, size, 4), indexed [y, x], channels in [0, 1].
Coordinates that fall outside the buffer after an offset are skipped.
"""

import numpy as np
import structlog
from numpy.typing import NDArray
from PIL import Image

from .terrain_types import Color, TerrainKind

logger = structlog.get_logger()

PixelBuffer = NDArray[np.float32]

TRUNK_COLOR: Color = (0.40, 0.26, 0.13)

WATER_STRIPE_PERIOD = 6
WATER_DOT_SPACING = 8
MOUNTAIN_SHADOW_MIX = 0.6


def darkened(color: Color, amount: float) -> Color:
    """Scale color toward black by amount."""
    return tuple(c * (1.0 - amount) for c in color)  # type: ignore[return-value]


def lightened(color: Color, amount: float) -> Color:
    """Move color toward white by amount."""
    return tuple(c + (1.0 - c) * amount for c in color)  # type: ignore[return-value]


def blend(a: Color, b: Color, t: float) -> Color:
    """Linear interpolation from a to b."""
    return tuple(ca + (cb - ca) * t for ca, cb in zip(a, b))  # type: ignore[return-value]


def _blank(size: int) -> PixelBuffer:
    buffer = np.zeros((size, size, 4), dtype=np.float32)
    buffer[:, :, 3] = 1.0
    return buffer


def _put(buffer: PixelBuffer, x: int, y: int, color: Color) -> None:
    """Write an opaque pixel, ignoring coordinates outside the buffer."""
    size = buffer.shape[0]
    if 0 <= x < size and 0 <= y < size:
        buffer[y, x, :3] = color
        buffer[y, x, 3] = 1.0


class TileTextureSynthesizer:
    """Paints terrain tile textures.

    Water, forest and mountain tiles are a pure function of
    (kind, variant, size). Grass uses random draws from a stream derived
    from (seed, kind, variant), so it is reproducible for a fixed seed
    and independent of call order.
    """

    def __init__(self, seed: int = 0):
        self.seed = seed

    def synthesize(self, kind: TerrainKind, variant: int, size: int) -> PixelBuffer:
        """Paint one tile texture.

        Args:
            kind: Terrain kind to paint.
            variant: Variant index (>= 0).
            size: Edge length in pixels.

        Returns:
            RGBA buffer of shape (size, size, 4).
        """
        if size <= 0:
            raise ValueError(f"Texture size must be positive, got {size}")
        if variant < 0:
            raise ValueError(f"Variant must be non-negative, got {variant}")

        base = kind.style.base_color
        if kind is TerrainKind.WATER:
            buffer = paint_water(base, variant, size)
        elif kind is TerrainKind.GRASS:
            buffer = paint_grass(base, variant, size, self._variant_rng(kind, variant))
        elif kind is TerrainKind.FOREST:
            buffer = paint_forest(base, variant, size)
        else:
            buffer = paint_mountain(base, variant, size)

        buffer.setflags(write=False)
        logger.debug("texture_synthesized", kind=kind.value, variant=variant, size=size)
        return buffer

    def _variant_rng(self, kind: TerrainKind, variant: int) -> np.random.Generator:
        kind_index = list(TerrainKind).index(kind)
        return np.random.default_rng([self.seed, kind_index, variant])


def paint_water(base: Color, variant: int, size: int) -> PixelBuffer:
    """Gradient, diagonal highlight stripes and a sparse dot grid."""
    buffer = _blank(size)
    top = darkened(base, 0.3)

    # Vertical gradient: darkened at the top, base at the bottom
    for y in range(size):
        t = y / (size - 1) if size > 1 else 1.0
        buffer[y, :, :3] = blend(top, base, t)

    # Diagonal stripes, shifted per variant
    offset = variant * 2
    for y in range(size):
        for x in range(size):
            if (x + y + offset) % WATER_STRIPE_PERIOD == 0:
                buffer[y, x, :3] = lightened(tuple(buffer[y, x, :3]), 0.18)

    dot = darkened(base, 0.45)
    start = WATER_DOT_SPACING // 2
    for y in range(start, size, WATER_DOT_SPACING):
        for x in range(start, size, WATER_DOT_SPACING):
            _put(buffer, x, y, dot)

    return buffer


def paint_grass(
    base: Color, variant: int, size: int, rng: np.random.Generator
) -> PixelBuffer:
    """Random per-pixel tint, upward tufts and a dashed bottom shadow."""
    buffer = _blank(size)
    shadow = darkened(base, 0.25)

    # Per-pixel tint between base and shadow
    tint = rng.random((size, size)).astype(np.float32)
    for channel in range(3):
        buffer[:, :, channel] = base[channel] + (shadow[channel] - base[channel]) * tint

    # Tufts: short vertical strokes growing upward from a random root
    tuft = lightened(base, 0.3)
    tuft_count = 4 + variant * 3
    tuft_length = max(2, size // 10)
    for _ in range(tuft_count):
        x = int(rng.integers(0, size))
        y = int(rng.integers(0, size))
        for k in range(tuft_length):
            _put(buffer, x, y - k, tuft)

    # Dashed shadow along the bottom edge
    edge = darkened(shadow, 0.2)
    phase = variant * 2
    for x in range(size):
        if ((x + phase) // 3) % 2 == 0:
            _put(buffer, x, size - 1, edge)

    return buffer


def _canopy_centers(variant: int, size: int) -> list[tuple[int, int]]:
    count = 2 + variant % 2
    centers = []
    for i in range(count):
        cx = (size * (i + 1)) // (count + 1) + (variant % 3) - 1
        cy = size // 3 + ((i + variant) % 2) * (size // 6)
        centers.append((cx, cy))
    return centers


def paint_forest(base: Color, variant: int, size: int) -> PixelBuffer:
    """Dark floor with radially shaded canopy blobs over short trunks."""
    buffer = _blank(size)
    buffer[:, :, :3] = darkened(base, 0.45)

    radius = max(2, int(size * (0.18 + 0.03 * variant)))
    trunk_length = max(1, radius // 2 + 1)
    centers = _canopy_centers(variant, size)

    # Trunks first so canopies overlap their tops
    for cx, cy in centers:
        for dy in range(radius - 1, radius - 1 + trunk_length + 1):
            _put(buffer, cx, cy + dy, TRUNK_COLOR)
            _put(buffer, cx - 1, cy + dy, TRUNK_COLOR)

    center_color = lightened(base, 0.2)
    edge_color = darkened(base, 0.3)
    r2 = radius * radius
    for cx, cy in centers:
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                d2 = dx * dx + dy * dy
                if d2 > r2:
                    continue
                _put(buffer, cx + dx, cy + dy, blend(center_color, edge_color, d2 / r2))

    return buffer


def paint_mountain(base: Color, variant: int, size: int) -> PixelBuffer:
    """Wedge-shaped peak with a shadowed lower-right quadrant."""
    buffer = _blank(size)
    buffer[:, :, :3] = lightened(base, 0.25)

    apex_x = size // 2 + (variant % 3 - 1) * max(1, size // 8)
    peak = lightened(base, 0.4)
    slope = darkened(base, 0.3)
    for y in range(size):
        half_width = int((y / size) * (size / 2))
        t = y / (size - 1) if size > 1 else 1.0
        color = blend(peak, slope, t)
        for x in range(apex_x - half_width, apex_x + half_width + 1):
            _put(buffer, x, y, color)

    # Shadow overlay on whatever already occupies the lower-right quadrant
    shadow = np.asarray(darkened(base, 0.5), dtype=np.float32)
    half = size // 2
    quadrant = buffer[half:, half:, :3]
    buffer[half:, half:, :3] = quadrant + (shadow - quadrant) * MOUNTAIN_SHADOW_MIX

    return buffer


def synthesize_actor_marker(
    size: int, color: Color = (0.95, 0.85, 0.2)
) -> PixelBuffer:
    """Paint the actor marker: a filled disc with a darker rim.

    Pixels outside the disc are fully transparent.
    """
    buffer = np.zeros((size, size, 4), dtype=np.float32)
    center = (size - 1) / 2
    radius = size * 0.4
    rim = darkened(color, 0.4)

    for y in range(size):
        for x in range(size):
            distance = ((x - center) ** 2 + (y - center) ** 2) ** 0.5
            if distance > radius:
                continue
            buffer[y, x, :3] = rim if distance > radius - 1.5 else color
            buffer[y, x, 3] = 1.0

    buffer.setflags(write=False)
    return buffer


def to_image(buffer: PixelBuffer) -> Image.Image:
    """Convert a pixel buffer to a Pillow RGBA image."""
    data = np.clip(np.rint(buffer * 255.0), 0, 255).astype(np.uint8)
    return Image.fromarray(data)
