"""Overworld configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from .terrain.config import ClassificationConfig, MapConfig, NoiseConfig


class TextureConfig(BaseModel):
    """Tile texture synthesis parameters."""

    tile_size: int = Field(default=32, gt=0, description="Tile texture edge in pixels")
    marker_size: int = Field(default=24, gt=0, description="Actor marker edge in pixels")


class NavigationConfig(BaseModel):
    """Actor movement parameters."""

    speed: float = Field(default=128.0, gt=0, description="World units per second")
    arrive_epsilon: float = Field(
        default=0.5, gt=0, description="Distance below which the actor snaps"
    )


class OverworldConfig(BaseModel):
    """Complete configuration for an overworld session."""

    map: MapConfig = Field(default_factory=MapConfig)
    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    textures: TextureConfig = Field(default_factory=TextureConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)


def load_config(config_path: Path) -> OverworldConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed OverworldConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return OverworldConfig.model_validate(data)


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. configs/{name}.toml
    3. configs/{name}

    Args:
        name: Config name or path.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = _configs_dir()

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"
