"""
Tests for light penetration and per-layer light levels.

These tests check the Beer-Lambert style light model: the automatic
penetration, the effective penetration after solar intensity and sun
angle, and the per-layer light with its clamp bands.
"""

import jax.numpy as jnp
import numpy as np
import pytest

from strata import light
from strata.config import (
    CANOPY,
    EMERGENT,
    FOREST_FLOOR,
    LAYER_IDS,
    UNDERSTORY,
    ForestControls,
    LightModelConfig,
)


def dense_evergreen() -> ForestControls:
    """Dense wet evergreen forest under an overhead sun."""
    return ForestControls(
        canopy_cover=90, lai=7.5, light_penetration=60, sun_angle=90, canopy_gaps=3
    )


class TestAutoPenetration:
    """Tests for structural light penetration."""

    def test_open_ground_is_full_light(self) -> None:
        """No canopy means full penetration."""
        controls = ForestControls(canopy_cover=0, lai=0)
        assert jnp.isclose(light.compute_auto_penetration(controls), 100.0, atol=1e-4)

    def test_dense_evergreen_value(self) -> None:
        """5 + 95 * exp(-0.8 * 0.9 * 1.75) is about 31.95."""
        expected = 5 + 95 * np.exp(-0.8 * 0.9 * 1.75)
        result = light.compute_auto_penetration(dense_evergreen())
        assert jnp.isclose(result, expected, rtol=1e-5)

    def test_bounded_five_to_hundred(self) -> None:
        """Auto penetration stays in [5, 100] across the input domain."""
        for cover in np.linspace(0, 100, 11):
            for lai in np.linspace(0, 10, 11):
                controls = ForestControls(canopy_cover=float(cover), lai=float(lai))
                value = float(light.compute_auto_penetration(controls))
                assert 5.0 <= value <= 100.0 + 1e-4

    def test_decreases_with_lai(self) -> None:
        """More leaf area means less light gets through."""
        values = [
            float(light.compute_auto_penetration(ForestControls(canopy_cover=60, lai=float(lai))))
            for lai in np.linspace(0, 10, 21)
        ]
        assert all(a > b for a, b in zip(values, values[1:]))


class TestEffectivePenetration:
    """Tests for penetration after solar intensity and sun angle."""

    def test_dense_evergreen_overhead_sun(self) -> None:
        """Overhead sun adds nothing beyond the solar intensity scale."""
        auto = 5 + 95 * np.exp(-0.8 * 0.9 * 1.75)
        result = light.compute_light_penetration(dense_evergreen())
        assert jnp.isclose(result, auto * 0.6, rtol=1e-5)
        assert 19.0 < float(result) < 19.4

    def test_strictly_decreasing_in_canopy_cover(self) -> None:
        """Denser canopy always lets less light through."""
        values = [
            float(
                light.compute_light_penetration(
                    ForestControls(
                        canopy_cover=float(cover),
                        lai=5.0,
                        light_penetration=80,
                        sun_angle=60,
                    )
                )
            )
            for cover in range(0, 101, 5)
        ]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_maximized_at_overhead_sun(self) -> None:
        """No sun angle beats 90 degrees."""
        base = ForestControls(canopy_cover=50, lai=4, light_penetration=70)
        overhead = float(light.compute_light_penetration(base._replace(sun_angle=90)))
        for angle in range(0, 181, 10):
            value = float(light.compute_light_penetration(base._replace(sun_angle=angle)))
            assert value <= overhead + 1e-5

    def test_sun_angle_symmetry(self) -> None:
        """30 and 150 degrees have the same sine, so the same penetration."""
        base = ForestControls(canopy_cover=70, lai=5.5, light_penetration=65)
        at_30 = light.compute_light_penetration(base._replace(sun_angle=30))
        at_150 = light.compute_light_penetration(base._replace(sun_angle=150))
        assert jnp.isclose(at_30, at_150, atol=1e-5)

    def test_thorn_forest_horizon_sun(self) -> None:
        """At the horizon only the 0.7 angle floor remains."""
        controls = ForestControls(
            canopy_cover=25, lai=1.5, light_penetration=95, sun_angle=0, canopy_gaps=15
        )
        auto = light.compute_auto_penetration(controls)
        result = light.compute_light_penetration(controls)
        assert jnp.isclose(light.compute_angle_factor(0.0), 0.0, atol=1e-7)
        assert jnp.isclose(result, auto * 0.95 * 0.7, rtol=1e-5)

    def test_default_sun_angle_is_45(self) -> None:
        """Omitting the sun angle behaves like passing 45 degrees."""
        omitted = ForestControls(canopy_cover=60, lai=4, light_penetration=75, canopy_gaps=2)
        explicit = omitted._replace(sun_angle=45)
        missing = omitted._replace(sun_angle=None)
        assert float(light.compute_light_penetration(omitted)) == float(
            light.compute_light_penetration(explicit)
        )
        assert float(light.compute_light_penetration(missing)) == float(
            light.compute_light_penetration(explicit)
        )

    def test_config_default_sun_angle(self) -> None:
        """A missing sun angle falls back to the config's default, not 45."""
        config = LightModelConfig(default_sun_angle=90.0)
        base = ForestControls(canopy_cover=60, lai=4, light_penetration=75, canopy_gaps=2)
        missing = base._replace(sun_angle=None)
        overhead = base._replace(sun_angle=90)
        assert float(light.compute_light_penetration(missing, config)) == float(
            light.compute_light_penetration(overhead, config)
        )
        assert float(light.compute_light_penetration(missing, config)) > float(
            light.compute_light_penetration(missing)
        )
        for layer_id in LAYER_IDS:
            assert float(light.compute_layer_light(layer_id, missing, config)) == float(
                light.compute_layer_light(layer_id, overhead, config)
            )

    def test_angle_factor_default_from_config(self) -> None:
        config = LightModelConfig(default_sun_angle=90.0)
        assert jnp.isclose(light.compute_angle_factor(None, config), 1.0)
        assert jnp.isclose(light.compute_angle_factor(None), np.sin(np.pi / 4), atol=1e-6)

    def test_zero_intensity_is_dark(self) -> None:
        """No solar intensity means no penetration."""
        controls = ForestControls(canopy_cover=10, lai=1, light_penetration=0)
        assert float(light.compute_light_penetration(controls)) == 0.0

    def test_clamped_to_hundred(self) -> None:
        """Out-of-range inputs cannot push penetration above 100."""
        controls = ForestControls(
            canopy_cover=-50, lai=-5, light_penetration=400, sun_angle=90
        )
        value = float(light.compute_light_penetration(controls))
        assert 0.0 <= value <= 100.0

    def test_idempotent(self) -> None:
        """Same inputs give bit-identical output."""
        controls = dense_evergreen()
        first = float(light.compute_light_penetration(controls))
        second = float(light.compute_light_penetration(controls))
        assert first == second


class TestLayerLight:
    """Tests for per-layer light levels."""

    def test_dense_evergreen_floor_near_minimum(self) -> None:
        """Almost no light reaches the floor of a dense evergreen forest."""
        floor = float(light.compute_layer_light(FOREST_FLOOR, dense_evergreen()))
        assert 0.5 <= floor <= 1.01

    def test_dense_evergreen_layer_values(self) -> None:
        """Layer light follows the documented formulas."""
        controls = dense_evergreen()
        p = float(light.compute_light_penetration(controls)) / 100
        d, lai = 0.9, 7.5

        emergent = max(90, 100 - lai * 0.8) * p
        canopy = (70 + 30 * np.exp(-0.5 * lai * d)) * (0.7 + 0.3 * (1 - d)) * p
        understory = 5 + 10 * np.exp(-0.5 * lai * d * 1.5) * p
        floor = 1 + 2 * np.exp(-0.5 * lai * d * 2) * p

        assert jnp.isclose(light.compute_layer_light(EMERGENT, controls), emergent, rtol=1e-5)
        assert jnp.isclose(light.compute_layer_light(CANOPY, controls), canopy, rtol=1e-5)
        assert jnp.isclose(light.compute_layer_light(UNDERSTORY, controls), understory, rtol=1e-5)
        assert jnp.isclose(light.compute_layer_light(FOREST_FLOOR, controls), floor, rtol=1e-5)

    def test_lower_layers_stay_in_bands(self) -> None:
        """Understory in [2, 15] and forest floor in [0.5, 5] for all inputs."""
        rng = np.random.default_rng(0)
        for _ in range(200):
            controls = ForestControls(
                canopy_cover=float(rng.uniform(-20, 120)),
                lai=float(rng.uniform(-5, 15)),
                light_penetration=float(rng.uniform(-20, 120)),
                sun_angle=float(rng.uniform(-30, 210)),
                canopy_gaps=int(rng.integers(-5, 999)),
            )
            understory = float(light.compute_layer_light(UNDERSTORY, controls))
            floor = float(light.compute_layer_light(FOREST_FLOOR, controls))
            assert 2.0 <= understory <= 15.0
            assert 0.5 <= floor <= 5.0

    def test_open_forest_brighter_than_dense(self) -> None:
        """Every layer gets more light in an open forest."""
        dense = dense_evergreen()
        open_forest = dense._replace(canopy_cover=20, lai=1.0)
        for layer_id in LAYER_IDS:
            assert float(light.compute_layer_light(layer_id, open_forest)) >= float(
                light.compute_layer_light(layer_id, dense)
            )

    def test_idempotent(self) -> None:
        """Repeated calls give bit-identical layer light."""
        controls = dense_evergreen()
        for layer_id in LAYER_IDS:
            first = float(light.compute_layer_light(layer_id, controls))
            second = float(light.compute_layer_light(layer_id, controls))
            assert first == second
        first_all = {k: float(v) for k, v in light.compute_all_layer_light(controls).items()}
        second_all = {k: float(v) for k, v in light.compute_all_layer_light(controls).items()}
        assert first_all == second_all

    def test_all_layers_keyed_top_to_bottom(self) -> None:
        """compute_all_layer_light returns every layer in order."""
        result = light.compute_all_layer_light(dense_evergreen())
        assert tuple(result) == LAYER_IDS

    def test_unknown_layer_raises(self) -> None:
        """Layer ids outside the four strata are rejected."""
        with pytest.raises(ValueError, match="Unknown layer"):
            light.compute_layer_light("stratosphere", dense_evergreen())

    def test_negative_lai_treated_as_zero(self) -> None:
        """Malformed LAI is clamped at the boundary."""
        base = dense_evergreen()
        negative = base._replace(lai=-5)
        zero = base._replace(lai=0)
        for layer_id in LAYER_IDS:
            assert float(light.compute_layer_light(layer_id, negative)) == float(
                light.compute_layer_light(layer_id, zero)
            )

    def test_custom_config_bands(self) -> None:
        """Clamp bands come from the model config."""
        config = LightModelConfig(floor_band=(2.0, 3.0))
        floor = float(light.compute_layer_light(FOREST_FLOOR, dense_evergreen(), config))
        assert floor == 2.0


class TestModelConfig:
    """Tests for model constant validation."""

    def test_negative_attenuation_rejected(self) -> None:
        with pytest.raises(ValueError):
            LightModelConfig(attenuation=-0.1)

    def test_inverted_band_rejected(self) -> None:
        with pytest.raises(ValueError):
            LightModelConfig(understory_band=(15.0, 2.0))
