"""
Forest Strata Light Model

A small, deterministic model of how light moves through the vertical
layers of Indian forest types, with the visual mappings used to draw
them.

Modules:
    config: Controls, presets records and model constants
    presets: The six Indian forest-type presets
    layers: Reference data for the four forest strata
    light: Light penetration and per-layer light levels
    visuals: Opacity, brightness, wind and biodiversity mappings
    model: Full evaluation snapshot and readout
    scene: Declarative scene description for renderers
    render: Matplotlib rendering of a forest cross-section
    analysis: JAX autodiff sensitivity analysis
    schema: pydantic boundary schemas
"""

from strata.analysis import (
    compute_sensitivity,
    parameter_sweep_2d,
    plot_light_profile,
    plot_sensitivity_curve,
    print_sensitivity_report,
    sensitivity_sweep,
)
from strata.config import (
    CANOPY,
    EMERGENT,
    FOREST_FLOOR,
    LAYER_IDS,
    UNDERSTORY,
    ForestCharacteristics,
    ForestControls,
    ForestPalette,
    ForestPreset,
    LightModelConfig,
)
from strata.layers import FOREST_LAYERS, LayerInfo, get_layer
from strata.light import (
    compute_all_layer_light,
    compute_auto_penetration,
    compute_layer_light,
    compute_light_penetration,
)
from strata.model import ForestSnapshot, describe_forest, evaluate_forest
from strata.presets import (
    FOREST_PRESETS,
    apply_preset,
    default_preset,
    preset_ids,
    resolve_preset,
)
from strata.render import render_forest, save_forest
from strata.scene import ForestScene, build_scene
from strata.visuals import (
    VisualState,
    WindProfile,
    adjust_color_brightness,
    compute_biodiversity_index,
    compute_layer_brightness,
    compute_layer_opacity,
    compute_tree_density,
    compute_visual_state,
    compute_wind_profile,
    compute_wind_resistance,
    time_of_day_label,
)

__all__ = [
    # Config
    "CANOPY",
    "EMERGENT",
    "FOREST_FLOOR",
    "LAYER_IDS",
    "UNDERSTORY",
    "ForestCharacteristics",
    "ForestControls",
    "ForestPalette",
    "ForestPreset",
    "LightModelConfig",
    # Presets and layers
    "FOREST_PRESETS",
    "FOREST_LAYERS",
    "LayerInfo",
    "apply_preset",
    "default_preset",
    "get_layer",
    "preset_ids",
    "resolve_preset",
    # Light model
    "compute_all_layer_light",
    "compute_auto_penetration",
    "compute_layer_light",
    "compute_light_penetration",
    # Visual mappings
    "VisualState",
    "WindProfile",
    "adjust_color_brightness",
    "compute_biodiversity_index",
    "compute_layer_brightness",
    "compute_layer_opacity",
    "compute_tree_density",
    "compute_visual_state",
    "compute_wind_profile",
    "compute_wind_resistance",
    "time_of_day_label",
    # Evaluation
    "ForestSnapshot",
    "describe_forest",
    "evaluate_forest",
    # Scene and rendering
    "ForestScene",
    "build_scene",
    "render_forest",
    "save_forest",
    # Analysis
    "compute_sensitivity",
    "parameter_sweep_2d",
    "plot_light_profile",
    "plot_sensitivity_curve",
    "print_sensitivity_report",
    "sensitivity_sweep",
]
