"""
Light transmission through the forest strata.

A stylized Beer-Lambert approximation, not a radiative-transfer solver.
Light is computed in two stages:

1. Automatic penetration from canopy structure:

    base = exp(-0.8 * d * (1 + LAI/10))
    auto = 5 + 95 * base                           (always in [5, 100])

   which is then scaled by the user's solar intensity modifier and the
   sun angle to give the effective penetration:

    effective = auto * (intensity/100) * (0.7 + 0.3 * |sin(angle)|)

2. Per-layer light, attenuating the effective penetration p (as a
   fraction) with a transmission term T(depth) = exp(-k * LAI * d * depth):

    emergent     = max(90, 100 - 0.8 * LAI) * p
    canopy       = (70 + 30 * T(1)) * (0.7 + 0.3 * (1 - d)) * p
    understory   = clip(5 + 10 * T(1.5) * p, 2, 15)
    forest-floor = clip(1 + 2 * T(2) * p, 0.5, 5)

Here d is canopy cover as a fraction and k = 0.5. The lower strata are
clamped so they stay dim but never fully dark.

All functions are pure JAX and clamp their inputs first.
"""

import jax.numpy as jnp
from jax import Array

from strata.config import (
    CANOPY,
    EMERGENT,
    LAYER_IDS,
    UNDERSTORY,
    ForestControls,
    LightModelConfig,
    check_layer_id,
)

_DEFAULT_CONFIG = LightModelConfig()


def _config(config: LightModelConfig | None) -> LightModelConfig:
    return _DEFAULT_CONFIG if config is None else config


def canopy_density_factor(controls: ForestControls) -> Array:
    """Canopy cover as a fraction in [0, 1]."""
    return controls.clamped().canopy_cover / 100.0


def lai_factor(controls: ForestControls) -> Array:
    """Leaf area index normalized to [0, 1]."""
    return controls.clamped().lai / 10.0


def compute_angle_factor(
    sun_angle: float | Array | None, config: LightModelConfig | None = None
) -> Array:
    """
    Fraction of overhead sunlight delivered at a given sun angle.

    |sin(angle)|: 1 at 90 degrees (overhead), 0 at the horizon.
    A missing angle is treated as the config's default sun angle.

    Args:
        sun_angle: Solar elevation proxy in degrees [0, 180]
        config: Model constants

    Returns:
        Angle factor in [0, 1]
    """
    if sun_angle is None:
        sun_angle = _config(config).default_sun_angle
    angle = jnp.clip(sun_angle, 0.0, 180.0)
    return jnp.abs(jnp.sin(jnp.deg2rad(angle)))


def compute_auto_penetration(
    controls: ForestControls, config: LightModelConfig | None = None
) -> Array:
    """
    Structural light penetration before solar intensity and sun angle.

    Strictly decreasing in both canopy cover and LAI.

    Returns:
        Penetration percentage in [5, 100]
    """
    cfg = _config(config)
    d = canopy_density_factor(controls)
    base = jnp.exp(-cfg.extinction * d * (1.0 + lai_factor(controls)))
    return cfg.penetration_floor + base * cfg.penetration_span


def compute_light_penetration(
    controls: ForestControls, config: LightModelConfig | None = None
) -> Array:
    """
    Effective light penetration below the canopy.

    Combines the structural penetration with the solar intensity
    modifier and the sun angle. Maximized at a 90 degree sun; symmetric
    about it (30 and 150 degrees give the same value).

    Args:
        controls: Forest controls (clamped internally)
        config: Model constants (defaults to LightModelConfig())

    Returns:
        Effective penetration percentage, clamped to [0, 100]
    """
    cfg = _config(config)
    c = controls.clamped(cfg.default_sun_angle)
    auto = compute_auto_penetration(c, cfg)
    angle = compute_angle_factor(c.sun_angle, cfg)
    intensity = c.light_penetration / 100.0
    effective = auto * intensity * (cfg.angle_floor + cfg.angle_weight * angle)
    return jnp.clip(effective, 0.0, 100.0)


def canopy_transmission(
    controls: ForestControls,
    depth: float = 1.0,
    config: LightModelConfig | None = None,
) -> Array:
    """
    Beer-Lambert transmission through the foliage.

    T = exp(-k * LAI * d * depth)

    Args:
        controls: Forest controls
        depth: Relative path length (1 = canopy, 1.5 = understory, 2 = floor)
        config: Model constants

    Returns:
        Transmission fraction in (0, 1]
    """
    cfg = _config(config)
    c = controls.clamped()
    d = c.canopy_cover / 100.0
    return jnp.exp(-cfg.attenuation * c.lai * d * depth)


def compute_layer_light(
    layer_id: str,
    controls: ForestControls,
    config: LightModelConfig | None = None,
) -> Array:
    """
    Light level reaching one forest layer.

    Emergent and canopy light are left unclamped; within the valid input
    range they are bounded by the effective penetration. Understory is
    clamped to [2, 15] and forest floor to [0.5, 5].

    Args:
        layer_id: One of "emergent", "canopy", "understory", "forest-floor"
        controls: Forest controls
        config: Model constants

    Returns:
        Light level as a percentage of full sunlight

    Raises:
        ValueError: If layer_id is not a known layer
    """
    check_layer_id(layer_id)
    cfg = _config(config)
    c = controls.clamped(cfg.default_sun_angle)
    p = compute_light_penetration(c, cfg) / 100.0

    if layer_id == EMERGENT:
        return jnp.maximum(cfg.emergent_floor, 100.0 - c.lai * cfg.emergent_lai_loss) * p

    if layer_id == CANOPY:
        d = c.canopy_cover / 100.0
        attenuation = canopy_transmission(c, 1.0, cfg)
        light = (cfg.canopy_base + cfg.canopy_span * attenuation) * (0.7 + 0.3 * (1.0 - d))
        return light * p

    if layer_id == UNDERSTORY:
        transmission = canopy_transmission(c, cfg.understory_depth, cfg)
        light = cfg.understory_base + cfg.understory_span * transmission * p
        return jnp.clip(light, *cfg.understory_band)

    # FOREST_FLOOR
    transmission = canopy_transmission(c, cfg.floor_depth, cfg)
    light = cfg.floor_base + cfg.floor_span * transmission * p
    return jnp.clip(light, *cfg.floor_band)


def compute_all_layer_light(
    controls: ForestControls, config: LightModelConfig | None = None
) -> dict[str, Array]:
    """Light level for every layer, keyed by layer id (top to bottom)."""
    return {
        layer_id: compute_layer_light(layer_id, controls, config)
        for layer_id in LAYER_IDS
    }

