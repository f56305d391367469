"""
Tests for the declarative scene description.
"""

import pytest

from strata.config import DEFAULT_PALETTE, LAYER_IDS, ForestControls
from strata.presets import resolve_preset
from strata.scene import (
    CANVAS_HEIGHT,
    FLOOR_STOP,
    RAY_ORIGIN_Y,
    build_scene,
    place_sun,
    scale_color,
)


def dense_evergreen() -> ForestControls:
    return ForestControls(
        canopy_cover=90, lai=7.5, light_penetration=60, sun_angle=90, canopy_gaps=3
    )


class TestSunPlacement:
    """Tests for sun position on its arc."""

    def test_overhead(self) -> None:
        sun = place_sun(90)
        assert sun.x == pytest.approx(500.0)
        assert sun.y == pytest.approx(50.0)
        assert sun.intensity == pytest.approx(1.0)

    def test_rises_left_sets_right(self) -> None:
        sunrise = place_sun(0)
        sunset = place_sun(180)
        assert sunrise.x == pytest.approx(100.0)
        assert sunrise.y == pytest.approx(150.0)
        assert sunset.x == pytest.approx(900.0)
        assert sunrise.intensity == pytest.approx(0.0, abs=1e-12)

    def test_symmetric_heights(self) -> None:
        assert place_sun(30).y == pytest.approx(place_sun(150).y)


class TestScene:
    """Tests for build_scene()."""

    def test_bands_cover_canvas(self) -> None:
        scene = build_scene(dense_evergreen())
        assert [band.layer_id for band in scene.bands] == list(LAYER_IDS)
        assert scene.bands[0].y_top == 0.0
        assert scene.bands[-1].y_bottom == pytest.approx(CANVAS_HEIGHT)

    def test_default_palette(self) -> None:
        scene = build_scene(dense_evergreen())
        assert scene.palette == DEFAULT_PALETTE
        assert not scene.sparse

    def test_dense_forest_has_few_rays(self) -> None:
        """Dim understory: no scattered rays, no floor glow, no regrowth."""
        scene = build_scene(dense_evergreen())
        assert len(scene.rays) == 5
        assert scene.scattered_rays == []
        assert scene.glow is None
        assert len(scene.gaps) == 3
        assert not any(gap.regrowth for gap in scene.gaps)

    def test_open_forest_has_scattered_light(self) -> None:
        """Thorn forest lets light through to the lower strata."""
        preset = resolve_preset("tropical-thorn")
        scene = build_scene(preset.controls(), preset)
        assert len(scene.rays) == 8
        assert len(scene.scattered_rays) == 6
        assert scene.glow is not None
        assert len(scene.gaps) == 15
        assert all(gap.regrowth for gap in scene.gaps)
        assert scene.sparse

    def test_ray_geometry(self) -> None:
        for preset_id in ("tropical-wet-evergreen", "tropical-thorn"):
            scene = build_scene(resolve_preset(preset_id).controls())
            assert 5 <= len(scene.rays) <= 10
            for ray in scene.rays + scene.scattered_rays:
                assert ray.y1 == RAY_ORIGIN_Y
                assert RAY_ORIGIN_Y < ray.y2 <= FLOOR_STOP
                assert 0.0 < ray.opacity <= 0.8
                assert ray.width >= 1.0

    def test_band_values_from_snapshot(self) -> None:
        scene = build_scene(dense_evergreen())
        for band in scene.bands:
            assert band.opacity == scene.snapshot.visuals.opacity[band.layer_id]
            assert band.brightness == scene.snapshot.visuals.brightness[band.layer_id]


class TestScaleColor:
    """Tests for the brightness filter helper."""

    def test_full_brightness_identity(self) -> None:
        assert scale_color("#1A5F1A", 100) == "#1a5f1a"

    def test_half(self) -> None:
        assert scale_color("#804020", 50) == "#402010"

    def test_clamped(self) -> None:
        assert scale_color("#FFFFFF", 200) == "#ffffff"
