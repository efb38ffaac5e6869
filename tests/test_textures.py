"""Tests for tile texture synthesis."""

import numpy as np
import pytest

from overworld.terrain_types import TerrainKind
from overworld.textures import (
    TRUNK_COLOR,
    TileTextureSynthesizer,
    blend,
    darkened,
    lightened,
    paint_forest,
    paint_mountain,
    paint_water,
    synthesize_actor_marker,
    to_image,
)

SIZE = 32


@pytest.fixture
def synthesizer() -> TileTextureSynthesizer:
    return TileTextureSynthesizer(seed=1234)


class TestColorHelpers:
    """Tests for color arithmetic."""

    def test_darkened(self) -> None:
        assert darkened((1.0, 0.5, 0.0), 0.5) == pytest.approx((0.5, 0.25, 0.0))

    def test_lightened(self) -> None:
        assert lightened((0.0, 0.5, 1.0), 0.5) == pytest.approx((0.5, 0.75, 1.0))

    def test_blend_endpoints(self) -> None:
        a, b = (0.0, 0.2, 0.4), (1.0, 0.6, 0.0)
        assert blend(a, b, 0.0) == pytest.approx(a)
        assert blend(a, b, 1.0) == pytest.approx(b)
        assert blend(a, b, 0.5) == pytest.approx((0.5, 0.4, 0.2))


class TestSynthesize:
    """Tests common to every terrain kind."""

    @pytest.mark.parametrize("kind", list(TerrainKind))
    def test_shape_and_range(self, synthesizer: TileTextureSynthesizer, kind: TerrainKind) -> None:
        """Buffers are opaque RGBA with channels in [0, 1]."""
        buffer = synthesizer.synthesize(kind, 0, SIZE)
        assert buffer.shape == (SIZE, SIZE, 4)
        assert buffer.dtype == np.float32
        assert buffer.min() >= 0.0
        assert buffer.max() <= 1.0
        np.testing.assert_array_equal(buffer[:, :, 3], 1.0)

    @pytest.mark.parametrize("kind", list(TerrainKind))
    def test_reproducible(self, kind: TerrainKind) -> None:
        """Same (seed, kind, variant, size) gives a bit-identical buffer."""
        a = TileTextureSynthesizer(seed=5).synthesize(kind, 1, SIZE)
        b = TileTextureSynthesizer(seed=5).synthesize(kind, 1, SIZE)
        np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize("kind", list(TerrainKind))
    def test_variants_differ(self, synthesizer: TileTextureSynthesizer, kind: TerrainKind) -> None:
        """Different variants of a kind look different."""
        a = synthesizer.synthesize(kind, 0, SIZE)
        b = synthesizer.synthesize(kind, 1, SIZE)
        assert not np.array_equal(a, b)

    @pytest.mark.parametrize("kind", list(TerrainKind))
    def test_buffers_read_only(self, synthesizer: TileTextureSynthesizer, kind: TerrainKind) -> None:
        buffer = synthesizer.synthesize(kind, 0, SIZE)
        with pytest.raises(ValueError):
            buffer[0, 0, 0] = 0.0

    @pytest.mark.parametrize("size", [1, 2, 5, 8])
    @pytest.mark.parametrize("kind", list(TerrainKind))
    def test_tiny_sizes_skip_out_of_range_pixels(
        self, synthesizer: TileTextureSynthesizer, kind: TerrainKind, size: int
    ) -> None:
        """Offsets that leave the buffer are skipped, not wrapped or raised."""
        buffer = synthesizer.synthesize(kind, 2, size)
        assert buffer.shape == (size, size, 4)

    def test_rejects_bad_arguments(self, synthesizer: TileTextureSynthesizer) -> None:
        with pytest.raises(ValueError):
            synthesizer.synthesize(TerrainKind.GRASS, 0, 0)
        with pytest.raises(ValueError):
            synthesizer.synthesize(TerrainKind.GRASS, -1, SIZE)


class TestWater:
    """Tests for the water painting rules."""

    def test_gradient_darker_at_top(self) -> None:
        base = TerrainKind.WATER.style.base_color
        buffer = paint_water(base, 0, SIZE)
        # Column 1 row 0 and last row avoid stripes (x + y + 0) % 6 == 0
        assert buffer[0, 1, :3] == pytest.approx(darkened(base, 0.3), abs=1e-6)
        assert buffer[SIZE - 1, 2, :3] == pytest.approx(base, abs=1e-6)

    def test_stripes_follow_diagonal_period(self) -> None:
        base = TerrainKind.WATER.style.base_color
        buffer = paint_water(base, 0, SIZE)
        # (0, 6) is a stripe pixel, (0, 5) is not; same row, same gradient
        assert buffer[0, 6, 0] > buffer[0, 5, 0]

    def test_stripe_offset_depends_on_variant(self) -> None:
        base = TerrainKind.WATER.style.base_color
        a = paint_water(base, 0, SIZE)
        b = paint_water(base, 1, SIZE)
        # Variant 1 shifts stripes by 2: x + 2 == 6 puts a stripe at x = 4
        assert b[0, 4, 0] > b[0, 3, 0]
        assert not a[0, 4, 0] > a[0, 3, 0]

    def test_dot_grid_every_eight_pixels(self) -> None:
        base = TerrainKind.WATER.style.base_color
        buffer = paint_water(base, 0, SIZE)
        dot = darkened(base, 0.45)
        for y in range(4, SIZE, 8):
            for x in range(4, SIZE, 8):
                assert buffer[y, x, :3] == pytest.approx(dot, abs=1e-6)


class TestGrass:
    """Tests for the grass painting rules."""

    def test_tint_between_base_and_shadow(self, synthesizer: TileTextureSynthesizer) -> None:
        base = TerrainKind.GRASS.style.base_color
        shadow = darkened(base, 0.25)
        buffer = synthesizer.synthesize(TerrainKind.GRASS, 0, SIZE)
        # Green channel of the interior stays within the tint range or the tuft color
        tuft = lightened(base, 0.3)
        green = buffer[:-1, :, 1]
        in_tint = (green >= shadow[1] - 1e-6) & (green <= base[1] + 1e-6)
        is_tuft = np.isclose(green, tuft[1], atol=1e-6)
        assert np.all(in_tint | is_tuft)

    def test_pixels_vary(self, synthesizer: TileTextureSynthesizer) -> None:
        buffer = synthesizer.synthesize(TerrainKind.GRASS, 0, SIZE)
        assert np.unique(buffer[:, :, 1]).size > 50

    def test_more_tufts_for_higher_variants(self, synthesizer: TileTextureSynthesizer) -> None:
        tuft = lightened(TerrainKind.GRASS.style.base_color, 0.3)

        def tuft_pixels(variant: int) -> int:
            buffer = synthesizer.synthesize(TerrainKind.GRASS, variant, SIZE)
            return int(np.sum(np.all(np.isclose(buffer[:, :, :3], tuft, atol=1e-6), axis=2)))

        assert tuft_pixels(3) > tuft_pixels(0)

    def test_dashed_bottom_edge(self, synthesizer: TileTextureSynthesizer) -> None:
        base = TerrainKind.GRASS.style.base_color
        edge = darkened(darkened(base, 0.25), 0.2)
        buffer = synthesizer.synthesize(TerrainKind.GRASS, 0, SIZE)
        bottom = buffer[SIZE - 1, :, :3]
        dashed = [bool(np.allclose(bottom[x], edge, atol=1e-6)) for x in range(6)]
        assert dashed == [True, True, True, False, False, False]

    def test_dash_phase_depends_on_variant(self, synthesizer: TileTextureSynthesizer) -> None:
        base = TerrainKind.GRASS.style.base_color
        edge = darkened(darkened(base, 0.25), 0.2)
        buffer = synthesizer.synthesize(TerrainKind.GRASS, 1, SIZE)
        bottom = buffer[SIZE - 1, :, :3]
        dashed = [bool(np.allclose(bottom[x], edge, atol=1e-6)) for x in range(6)]
        assert dashed == [True, False, False, False, True, True]

    def test_seed_changes_grass(self) -> None:
        a = TileTextureSynthesizer(seed=1).synthesize(TerrainKind.GRASS, 0, SIZE)
        b = TileTextureSynthesizer(seed=2).synthesize(TerrainKind.GRASS, 0, SIZE)
        assert not np.array_equal(a, b)

    def test_independent_of_call_order(self) -> None:
        """A variant's texture does not depend on what was painted before it."""
        first = TileTextureSynthesizer(seed=9)
        second = TileTextureSynthesizer(seed=9)
        second.synthesize(TerrainKind.GRASS, 0, SIZE)
        second.synthesize(TerrainKind.GRASS, 1, SIZE)
        np.testing.assert_array_equal(
            first.synthesize(TerrainKind.GRASS, 2, SIZE),
            second.synthesize(TerrainKind.GRASS, 2, SIZE),
        )


class TestForest:
    """Tests for the forest painting rules."""

    def test_trunk_pixels_present(self) -> None:
        buffer = paint_forest(TerrainKind.FOREST.style.base_color, 0, SIZE)
        trunk = np.all(np.isclose(buffer[:, :, :3], TRUNK_COLOR, atol=1e-6), axis=2)
        assert trunk.any()

    def test_canopy_center_lighter_than_edge(self) -> None:
        base = TerrainKind.FOREST.style.base_color
        buffer = paint_forest(base, 0, SIZE)
        # Brightest pixel is the lightened canopy center color
        assert buffer[:, :, 1].max() == pytest.approx(lightened(base, 0.2)[1], abs=1e-6)

    def test_larger_radius_for_higher_variant(self) -> None:
        base = TerrainKind.FOREST.style.base_color
        floor = darkened(base, 0.45)

        def canopy_pixels(variant: int) -> int:
            buffer = paint_forest(base, variant, SIZE)
            is_floor = np.all(np.isclose(buffer[:, :, :3], floor, atol=1e-6), axis=2)
            is_trunk = np.all(np.isclose(buffer[:, :, :3], TRUNK_COLOR, atol=1e-6), axis=2)
            return int(np.sum(~is_floor & ~is_trunk))

        assert canopy_pixels(2) > canopy_pixels(0)


class TestMountain:
    """Tests for the mountain painting rules."""

    def test_apex_row_is_narrow(self) -> None:
        base = TerrainKind.MOUNTAIN.style.base_color
        buffer = paint_mountain(base, 1, SIZE)
        peak = lightened(base, 0.4)
        row0 = np.all(np.isclose(buffer[0, :, :3], peak, atol=1e-6), axis=1)
        assert int(row0.sum()) == 1
        assert row0[SIZE // 2]

    def test_apex_shifts_with_variant(self) -> None:
        base = TerrainKind.MOUNTAIN.style.base_color
        peak = lightened(base, 0.4)
        apexes = []
        for variant in range(3):
            buffer = paint_mountain(base, variant, SIZE)
            row0 = np.all(np.isclose(buffer[0, :, :3], peak, atol=1e-6), axis=1)
            apexes.append(int(np.argmax(row0)))
        assert apexes == sorted(apexes)
        assert len(set(apexes)) == 3

    def test_shadow_quadrant_darker(self) -> None:
        base = TerrainKind.MOUNTAIN.style.base_color
        plain = paint_mountain(base, 1, SIZE)
        half = SIZE // 2
        assert plain[half:, half:, :3].mean() < plain[half:, :half, :3].mean()

    def test_shadow_is_sixty_percent_mix(self) -> None:
        base = TerrainKind.MOUNTAIN.style.base_color
        buffer = paint_mountain(base, 1, SIZE)
        background = np.asarray(lightened(base, 0.25))
        shadow = np.asarray(darkened(base, 0.5))
        expected = background + (shadow - background) * 0.6
        # Right edge of the first shadowed row lies outside the wedge
        np.testing.assert_allclose(buffer[SIZE // 2, SIZE - 1, :3], expected, atol=1e-5)


class TestActorMarker:
    """Tests for the actor marker texture."""

    def test_transparent_corners(self) -> None:
        marker = synthesize_actor_marker(24)
        assert marker.shape == (24, 24, 4)
        assert marker[0, 0, 3] == 0.0
        assert marker[23, 23, 3] == 0.0

    def test_opaque_center(self) -> None:
        marker = synthesize_actor_marker(24)
        assert marker[12, 12, 3] == 1.0


class TestToImage:
    """Tests for buffer -> Pillow conversion."""

    def test_rgba_image(self, synthesizer: TileTextureSynthesizer) -> None:
        image = to_image(synthesizer.synthesize(TerrainKind.WATER, 0, SIZE))
        assert image.mode == "RGBA"
        assert image.size == (SIZE, SIZE)
        assert image.getpixel((0, 0))[3] == 255
