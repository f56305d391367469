"""
Full evaluation of the forest light model.

Runs every calculation for one set of controls, in dependency order:

1. Automatic and effective light penetration
2. Per-layer light levels
3. Derived visual state and wind profile

The result is a snapshot holding all outputs. Nothing is cached between
evaluations; a fresh snapshot is built on every control change.
"""

from dataclasses import dataclass

from strata.config import LAYER_IDS, ForestControls, ForestPreset, LightModelConfig
from strata.light import (
    compute_all_layer_light,
    compute_auto_penetration,
    compute_light_penetration,
)
from strata.visuals import (
    VisualState,
    WindProfile,
    compute_visual_state,
    compute_wind_profile,
    time_of_day_label,
)

# Readout labels, top to bottom
LAYER_LABELS = {
    "emergent": "Emergent",
    "canopy": "Canopy",
    "understory": "Understory",
    "forest-floor": "ForestFloor",
}


@dataclass
class ForestSnapshot:
    """
    Complete record of one model evaluation.

    Contains:
    - controls: The clamped controls that were evaluated
    - auto_penetration / effective_penetration: Penetration percentages
    - layer_light: Light level per layer (percent of full sun)
    - visuals: Opacity, brightness and scalar mappings
    - wind: Sway parameters for animation
    - time_of_day: Label for the sun angle
    - preset: The preset used for colors, if any
    """

    controls: ForestControls
    auto_penetration: float
    effective_penetration: float
    layer_light: dict[str, float]
    visuals: VisualState
    wind: WindProfile
    time_of_day: str
    preset: ForestPreset | None = None

    def get_scalar_summary(self) -> dict[str, float]:
        """
        Flat summary for the live readout panel.

        Keys:
        - AutoPenetration / EffectivePenetration: Percentages
        - Light<Layer>: Light level for each layer
        - WindResistance: Sway damping multiplier
        - TreeDensity: Display density percentage
        - Biodiversity: Biodiversity index (20-100)
        """
        summary: dict[str, float] = {
            "AutoPenetration": self.auto_penetration,
            "EffectivePenetration": self.effective_penetration,
        }
        for layer_id in LAYER_IDS:
            summary[f"Light{LAYER_LABELS[layer_id]}"] = self.layer_light[layer_id]
        summary["WindResistance"] = self.visuals.wind_resistance
        summary["TreeDensity"] = self.visuals.tree_density
        summary["Biodiversity"] = self.visuals.biodiversity_index
        return summary

    def print_summary(self) -> None:
        """Print a formatted readout table to stdout."""
        summary = self.get_scalar_summary()
        title = self.preset.name if self.preset is not None else "Custom Forest"
        print("\n" + "=" * 40)
        print(f"LIVE CONDITIONS - {title}")
        print(f"Time of day: {self.time_of_day}")
        print("=" * 40)
        for key, value in summary.items():
            if key == "TreeDensity":
                print(f"{key:20s}: {int(value):>10d}")
            else:
                print(f"{key:20s}: {value:>10.2f}")
        print("=" * 40)


def evaluate_forest(
    controls: ForestControls,
    preset: ForestPreset | None = None,
    config: LightModelConfig | None = None,
) -> ForestSnapshot:
    """
    Evaluate the whole model for one set of controls.

    Args:
        controls: Forest controls (clamped before evaluation)
        preset: Optional preset, carried along for colors and labels only
        config: Model constants

    Returns:
        ForestSnapshot with all computed outputs
    """
    cfg = LightModelConfig() if config is None else config
    c = controls.clamped(cfg.default_sun_angle)
    layer_light = compute_all_layer_light(c, config)
    return ForestSnapshot(
        controls=c,
        auto_penetration=float(compute_auto_penetration(c, config)),
        effective_penetration=float(compute_light_penetration(c, config)),
        layer_light={k: float(v) for k, v in layer_light.items()},
        visuals=compute_visual_state(c, config),
        wind=compute_wind_profile(c, config),
        time_of_day=time_of_day_label(float(c.sun_angle), config),
        preset=preset,
    )


def describe_forest(snapshot: ForestSnapshot) -> dict:
    """
    Plain-data description of a snapshot for downstream consumers.

    Tutor, prediction and story prompts read this instead of
    recomputing any part of the model.
    """
    preset = snapshot.preset
    return {
        "preset": None
        if preset is None
        else {
            "id": preset.id,
            "name": preset.name,
            "location": preset.location,
            "description": preset.description,
            "detailed_description": preset.detailed_description,
            "characteristics": {
                "tree_height": preset.characteristics.tree_height,
                "density": preset.characteristics.density,
                "understory": preset.characteristics.understory,
                "biodiversity": preset.characteristics.biodiversity,
            },
        },
        "controls": snapshot.controls.to_floats(),
        "time_of_day": snapshot.time_of_day,
        "auto_penetration": snapshot.auto_penetration,
        "effective_penetration": snapshot.effective_penetration,
        "layer_light": dict(snapshot.layer_light),
        "visuals": snapshot.visuals.as_dict(),
    }
