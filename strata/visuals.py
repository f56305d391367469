"""
Visual and physical mappings derived from the light model.

These functions turn controls and layer light levels into the values a
renderer or readout panel consumes: layer opacity and brightness, wind
resistance, tree density and a synthetic biodiversity index.

Key mappings:
- Opacity: denser canopy is more opaque; lower layers show through
  more when more light penetrates
- Brightness: linear in light level, 10-100%
- Wind resistance: structural density damps sway
- Biodiversity: rewards canopy structure and gaps (edge habitat), 20-100
"""

import math
from dataclasses import dataclass

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
from strata.light import (
    canopy_density_factor,
    compute_layer_light,
    compute_light_penetration,
    lai_factor,
)

_DEFAULT_CONFIG = LightModelConfig()


def _config(config: LightModelConfig | None) -> LightModelConfig:
    return _DEFAULT_CONFIG if config is None else config


def compute_layer_opacity(
    layer_id: str,
    controls: ForestControls,
    config: LightModelConfig | None = None,
) -> Array:
    """
    Display opacity of a layer.

    - canopy: clip(0.3 + (0.7 * d + 0.3 * LAI/10) * 0.65, 0.3, 0.95)
    - emergent: constant 0.9
    - understory, forest-floor: 0.7 + 0.3 * effective/100

    Returns:
        Opacity in [0, 1]
    """
    check_layer_id(layer_id)
    cfg = _config(config)

    if layer_id == CANOPY:
        density = canopy_density_factor(controls) * 0.7 + lai_factor(controls) * 0.3
        return jnp.clip(0.3 + density * 0.65, *cfg.canopy_opacity_band)

    if layer_id == EMERGENT:
        return jnp.asarray(cfg.emergent_opacity)

    effective = compute_light_penetration(controls, cfg) / 100.0
    return 0.7 + 0.3 * effective


def light_to_brightness(
    light_level: float | Array, config: LightModelConfig | None = None
) -> Array:
    """Map a light level (0-100%) to a display brightness (10-100%)."""
    cfg = _config(config)
    return jnp.clip(10.0 + light_level * 0.9, *cfg.brightness_band)


def compute_layer_brightness(
    layer_id: str,
    controls: ForestControls,
    config: LightModelConfig | None = None,
) -> Array:
    """Display brightness percentage of a layer, from its light level."""
    return light_to_brightness(compute_layer_light(layer_id, controls, config), config)


def compute_wind_resistance(controls: ForestControls) -> Array:
    """
    Structural wind resistance multiplier.

    wr = 1 + d * 0.5 + (LAI/10) * 0.3, in [1, 1.8]

    Animation amplitudes are divided by this and durations multiplied,
    so dense forests sway less and more slowly.
    """
    return 1.0 + canopy_density_factor(controls) * 0.5 + lai_factor(controls) * 0.3


def compute_tree_density(controls: ForestControls) -> Array:
    """
    Tree density percentage for display.

    round(d * 100 + (LAI/10) * 30), rounding halves up.
    """
    c = controls.clamped()
    raw = c.canopy_cover + c.lai * 3.0
    return jnp.floor(raw + 0.5)


def compute_biodiversity_index(
    controls: ForestControls, config: LightModelConfig | None = None
) -> Array:
    """
    Synthetic habitat-favorability score.

    structure = d * 0.4 + (LAI/10) * 0.3
    gaps = min(20, canopy_gaps) / 20
    score = clip(structure * 50 + gaps * 30 + 20, 20, 100)

    Not derived from species data. The floor of 20 means no forest
    scores as having no biodiversity.
    """
    cfg = _config(config)
    c = controls.clamped()
    structure = canopy_density_factor(c) * 0.4 + lai_factor(c) * 0.3
    gaps = jnp.minimum(cfg.max_gaps, c.canopy_gaps) / cfg.max_gaps
    score = structure * 50.0 + gaps * 30.0 + 20.0
    return jnp.clip(score, *cfg.biodiversity_band)


@dataclass
class VisualState:
    """
    Derived visual state for one evaluation of the model.

    Recomputed on every control change; never persisted.
    """

    opacity: dict[str, float]
    brightness: dict[str, float]
    wind_resistance: float
    tree_density: int
    biodiversity_index: float

    def as_dict(self) -> dict:
        return {
            "opacity": dict(self.opacity),
            "brightness": dict(self.brightness),
            "wind_resistance": self.wind_resistance,
            "tree_density": self.tree_density,
            "biodiversity_index": self.biodiversity_index,
        }


def compute_visual_state(
    controls: ForestControls, config: LightModelConfig | None = None
) -> VisualState:
    """
    Compute every derived visual value for the given controls.

    Args:
        controls: Forest controls (clamped internally)
        config: Model constants

    Returns:
        VisualState with per-layer opacity and brightness plus scalar mappings
    """
    return VisualState(
        opacity={
            layer_id: float(compute_layer_opacity(layer_id, controls, config))
            for layer_id in LAYER_IDS
        },
        brightness={
            layer_id: float(compute_layer_brightness(layer_id, controls, config))
            for layer_id in LAYER_IDS
        },
        wind_resistance=float(compute_wind_resistance(controls)),
        tree_density=int(compute_tree_density(controls)),
        biodiversity_index=float(compute_biodiversity_index(controls, config)),
    )


# =============================================================================
# WIND ANIMATION
# =============================================================================


@dataclass
class WindProfile:
    """
    Sway parameters for the animated scene.

    Forces are per swaying layer (the forest floor does not sway).
    Crown lift is the vertical stretch of tree crowns at the peak of a gust.
    """

    resistance: float
    force: dict[str, float]
    sway_duration: float
    crown_lift: dict[str, float]
    crown_duration: dict[str, float]


def compute_wind_profile(
    controls: ForestControls, config: LightModelConfig | None = None
) -> WindProfile:
    """
    Wind sway parameters, damped by structural wind resistance.

    Emergent crowns catch the most wind and the understory is sheltered.
    Denser canopies also respond more slowly (longer sway duration).
    """
    cfg = _config(config)
    wr = float(compute_wind_resistance(controls))
    d = float(canopy_density_factor(controls))
    return WindProfile(
        resistance=wr,
        force={
            EMERGENT: cfg.emergent_wind / wr,
            CANOPY: cfg.canopy_wind / wr,
            UNDERSTORY: cfg.understory_wind / wr,
        },
        sway_duration=2.0 + d * 2.0,
        crown_lift={
            EMERGENT: 0.08 / wr,
            CANOPY: 0.05 / wr,
            UNDERSTORY: 0.03 / wr,
        },
        crown_duration={
            EMERGENT: 1.5,
            CANOPY: 1.5 * wr,
            UNDERSTORY: 1.8 * wr,
        },
    )


# =============================================================================
# COLOR AND LABEL HELPERS
# =============================================================================


def adjust_color_brightness(hex_color: str, percent: float) -> str:
    """
    Lighten (positive) or darken (negative) a hex color.

    Each RGB channel shifts by round(2.55 * percent), clamped to [0, 255].
    """
    value = hex_color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got {hex_color!r}")
    num = int(value, 16)
    amount = math.floor(2.55 * percent + 0.5)
    r = min(255, max(0, (num >> 16) + amount))
    g = min(255, max(0, ((num >> 8) & 0xFF) + amount))
    b = min(255, max(0, (num & 0xFF) + amount))
    return f"#{r:02x}{g:02x}{b:02x}"


def time_of_day_label(
    sun_angle: float | None, config: LightModelConfig | None = None
) -> str:
    """Name the time of day for a sun angle (0 = sunrise, 90 = noon, 180 = sunset)."""
    angle = _config(config).default_sun_angle if sun_angle is None else float(sun_angle)
    if angle < 30:
        return "Dawn"
    if angle < 60:
        return "Morning"
    if angle < 120:
        return "Midday"
    if angle < 150:
        return "Afternoon"
    return "Dusk"
