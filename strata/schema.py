# Boundary schemas for the forest light model
# Validates JSON-like input from the UI layer and returns JSON-ready output

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from strata.config import DEFAULT_SUN_ANGLE, ForestControls
from strata.model import describe_forest, evaluate_forest
from strata.presets import resolve_preset

#
# Schemata
#


class ControlsInput(BaseModel):
    """Controls as sent by the UI. Accepts camelCase or snake_case keys.

    Numbers outside their documented range are accepted and clamped by
    the model; only non-numeric values are rejected.
    """

    model_config = ConfigDict(populate_by_name=True)

    canopy_cover: float = Field(
        default=90.0, alias="canopyCover", description="Canopy cover percentage [0, 100]"
    )
    lai: float = Field(default=7.5, description="Leaf Area Index [0, 10]")
    light_penetration: float = Field(
        default=60.0,
        alias="lightPenetration",
        description="Solar intensity modifier [0, 100]",
    )
    sun_angle: float | None = Field(
        default=DEFAULT_SUN_ANGLE,
        alias="sunAngle",
        description="Sun angle in degrees [0, 180]; 90 is overhead",
    )
    canopy_gaps: float = Field(
        default=3, alias="canopyGaps", description="Number of canopy gaps [0, 20]"
    )
    preset_id: str | None = Field(
        default=None,
        alias="presetId",
        description="Forest preset; when known its defaults replace the controls",
    )

    def to_controls(self) -> ForestControls:
        preset = resolve_preset(self.preset_id)
        if preset is not None:
            return preset.controls()
        return ForestControls(
            canopy_cover=self.canopy_cover,
            lai=self.lai,
            light_penetration=self.light_penetration,
            sun_angle=self.sun_angle,
            canopy_gaps=self.canopy_gaps,
        ).clamped()


class VisualStateOutput(BaseModel):
    """Derived visual state."""

    opacity: dict[str, float] = Field(description="Opacity per layer [0, 1]")
    brightness: dict[str, float] = Field(description="Brightness per layer [10, 100]")
    wind_resistance: float = Field(description="Sway damping multiplier")
    tree_density: int = Field(description="Tree density percentage")
    biodiversity_index: float = Field(description="Biodiversity index [20, 100]")


class ForestOutput(BaseModel):
    """Full model output for one evaluation."""

    preset_id: str | None = Field(default=None, description="Preset used, if any")
    controls: dict[str, float] = Field(description="Clamped controls that were evaluated")
    time_of_day: str = Field(description="Time of day label for the sun angle")
    auto_penetration: float = Field(description="Structural penetration [5, 100]")
    effective_penetration: float = Field(description="Effective penetration [0, 100]")
    layer_light: dict[str, float] = Field(description="Light level per layer")
    visuals: VisualStateOutput


#
# Endpoint
#


def apply(inputs: dict[str, Any]) -> dict[str, Any]:
    """
    Validate input, evaluate the model and return JSON-ready output.

    Raises:
        pydantic.ValidationError: If a field has the wrong type
    """
    request = ControlsInput.model_validate(inputs)
    preset = resolve_preset(request.preset_id)
    snapshot = evaluate_forest(request.to_controls(), preset)
    description = describe_forest(snapshot)

    output = ForestOutput(
        preset_id=preset.id if preset is not None else None,
        controls=description["controls"],
        time_of_day=description["time_of_day"],
        auto_penetration=description["auto_penetration"],
        effective_penetration=description["effective_penetration"],
        layer_light=description["layer_light"],
        visuals=VisualStateOutput(**description["visuals"]),
    )
    return output.model_dump()
