"""Terrain generation configuration models."""

from pydantic import BaseModel, Field, model_validator


class NoiseConfig(BaseModel):
    """Fractal noise parameters for the height field."""

    octaves: int = Field(default=4, ge=1, description="Number of octaves for fBm")
    lacunarity: float = Field(default=2.0, description="Frequency multiplier per octave")
    gain: float = Field(default=0.5, description="Amplitude multiplier per octave")
    frequency: float = Field(default=0.01, description="Base sampling frequency")


class ClassificationConfig(BaseModel):
    """Height thresholds separating terrain bands.

    Each band is half-open on the lower side: a height equal to a threshold
    belongs to the higher band.
    """

    grass_min: float = Field(default=-0.25, description="Heights below this are water")
    forest_min: float = Field(default=0.20, description="Lowest forest height")
    mountain_min: float = Field(default=0.45, description="Lowest mountain height")

    @model_validator(mode="after")
    def _check_ascending(self) -> "ClassificationConfig":
        if not (self.grass_min < self.forest_min < self.mountain_min):
            raise ValueError(
                "Thresholds must be strictly ascending: "
                f"{self.grass_min}, {self.forest_min}, {self.mountain_min}"
            )
        return self

    @property
    def thresholds(self) -> tuple[float, float, float]:
        return (self.grass_min, self.forest_min, self.mountain_min)


class MapConfig(BaseModel):
    """Map extent and seeding."""

    width: int = Field(default=64, gt=0, description="Map width in tiles")
    height: int = Field(default=64, gt=0, description="Map height in tiles")
    cell_size: int = Field(default=32, gt=0, description="World units per tile")
    seed: int | None = Field(
        default=None, description="Master seed (None = draw one at startup)"
    )

