"""Tileset export and map previews.

Writes the synthesized tiles as a single sprite sheet with a
Phaser-compatible atlas JSON, and renders whole-map preview images.
"""

import json
from pathlib import Path

import numpy as np
import structlog
from PIL import Image

from .atlas import AtlasHandle, CellDescriptor, TileAtlasRegistry
from .terrain.classification import kind_value
from .terrain.grid import TerrainGrid
from .terrain_types import TERRAIN_STYLES, TerrainKind
from .textures import to_image

logger = structlog.get_logger()


def frame_layout(registry: TileAtlasRegistry) -> dict[AtlasHandle, tuple[int, int]]:
    """Sheet cell (col, row) of each handle: one row per kind, variants left to right."""
    layout = {}
    for row, kind in enumerate(TerrainKind):
        for col, handle in enumerate(registry.variants_for(kind)):
            layout[handle] = (col, row)
    return layout


def build_sheet(registry: TileAtlasRegistry, tile_size: int) -> Image.Image:
    """Paste every registered texture into one RGBA sprite sheet."""
    layout = frame_layout(registry)
    cols = max((col for col, _ in layout.values()), default=0) + 1
    rows = len(TerrainKind)

    sheet = Image.new("RGBA", (cols * tile_size, rows * tile_size), (0, 0, 0, 0))
    for handle, (col, row) in layout.items():
        sheet.paste(to_image(registry.texture(handle)), (col * tile_size, row * tile_size))
    return sheet


def generate_atlas(
    registry: TileAtlasRegistry,
    tile_size: int,
    sheet_size: tuple[int, int],
    image_name: str,
) -> dict:
    """Generate a Phaser atlas JSON for the sprite sheet.

    Args:
        registry: Registry holding the textures.
        tile_size: Edge length of each tile in pixels.
        sheet_size: (width, height) of the sheet image.
        image_name: File name of the sheet image.

    Returns:
        The atlas dictionary
    """
    frames = {}
    for handle, (col, row) in frame_layout(registry).items():
        frames[handle.frame_name] = {
            "frame": {
                "x": col * tile_size,
                "y": row * tile_size,
                "w": tile_size,
                "h": tile_size,
            },
            "rotated": False,
            "trimmed": False,
            "spriteSourceSize": {"x": 0, "y": 0, "w": tile_size, "h": tile_size},
            "sourceSize": {"w": tile_size, "h": tile_size},
        }

    width, height = sheet_size
    return {
        "frames": frames,
        "meta": {
            "app": "overworld-tileset-exporter",
            "version": "1.0",
            "image": image_name,
            "format": "RGBA8888",
            "size": {"w": width, "h": height},
            "scale": 1,
        },
    }


def save_tileset(
    registry: TileAtlasRegistry,
    output_dir: Path,
    tile_size: int,
    name: str = "tiles",
) -> tuple[Path, Path]:
    """Write the sprite sheet PNG and its atlas JSON.

    Returns:
        Paths of the (image, atlas) files written.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    sheet = build_sheet(registry, tile_size)

    image_path = output_dir / f"{name}.png"
    sheet.save(image_path)

    atlas = generate_atlas(registry, tile_size, sheet.size, image_path.name)
    atlas_path = output_dir / f"{name}.json"
    with open(atlas_path, "w") as f:
        json.dump(atlas, f, indent=2)

    logger.info("tileset_saved", image=str(image_path), frames=len(atlas["frames"]))
    return image_path, atlas_path


def render_minimap(grid: TerrainGrid) -> Image.Image:
    """Generate a 1-pixel-per-tile image of the terrain in base colors."""
    palette = np.zeros((len(TerrainKind), 3), dtype=np.uint8)
    for kind, style in TERRAIN_STYLES.items():
        palette[kind_value(kind)] = [round(c * 255) for c in style.base_color]
    return Image.fromarray(palette[grid.kinds])


def render_map(
    grid: TerrainGrid,
    descriptors: list[CellDescriptor],
    registry: TileAtlasRegistry,
    tile_size: int,
) -> Image.Image:
    """Composite the full-resolution map from per-cell descriptors."""
    tiles = {handle: to_image(registry.texture(handle)) for handle in registry.handles()}
    image = Image.new("RGBA", (grid.width * tile_size, grid.height * tile_size))
    for descriptor in descriptors:
        image.paste(
            tiles[descriptor.handle],
            (descriptor.tile.x * tile_size, descriptor.tile.y * tile_size),
        )
    return image


def compute_terrain_stats(grid: TerrainGrid) -> dict:
    """Compute statistics about terrain kinds.

    Returns:
        Dict with terrain kind counts and percentages.
    """
    total = grid.width * grid.height
    counts = grid.counts()

    stats: dict = {
        "dimensions": {"width": grid.width, "height": grid.height, "total_tiles": total},
        "terrain": {},
    }
    for kind, count in counts.items():
        stats["terrain"][kind.style.name] = {
            "count": count,
            "percentage": round(100 * count / total, 2),
        }

    walkable = sum(count for kind, count in counts.items() if kind.walkable)
    stats["summary"] = {
        "walkable_tiles": walkable,
        "blocked_tiles": total - walkable,
        "walkable_percentage": round(100 * walkable / total, 2),
    }
    return stats


def format_stats(stats: dict, seed: int | None = None) -> str:
    """Render terrain statistics as a printable report."""
    dims = stats["dimensions"]
    summary = stats["summary"]
    lines = [
        "=" * 60,
        "OVERWORLD STATISTICS",
        "=" * 60,
    ]
    if seed is not None:
        lines.append(f"Seed: {seed}")
    lines.append(
        f"Size: {dims['width']} x {dims['height']} ({dims['total_tiles']:,} tiles)"
    )
    lines.append(
        f"Walkable: {summary['walkable_tiles']:,} tiles "
        f"({summary['walkable_percentage']:.1f}%)"
    )
    lines.append("")
    lines.append("Terrain Breakdown:")
    for name, data in stats["terrain"].items():
        lines.append(f"  {name:10} {data['count']:>10,} tiles ({data['percentage']:>5.1f}%)")
    lines.append("=" * 60)
    return "\n".join(lines)
