"""
Configuration and type definitions for the forest light model.

This module defines the model constants, the user-adjustable controls and
the static records that describe forest-type presets.

Controls:
    canopy_cover: Percentage of canopy area covered by foliage [0, 100]
    lai: Leaf Area Index [0, 10]
    light_penetration: Solar intensity modifier (time of day / weather) [0, 100]
    sun_angle: Solar elevation proxy in degrees [0, 180], 90 = overhead
    canopy_gaps: Count of light-admitting canopy openings [0, 20]

Layers, top to bottom: emergent, canopy, understory, forest-floor.
"""

from dataclasses import dataclass
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

# Layer identifiers (top to bottom)
EMERGENT = "emergent"
CANOPY = "canopy"
UNDERSTORY = "understory"
FOREST_FLOOR = "forest-floor"

LAYER_IDS: tuple[str, ...] = (EMERGENT, CANOPY, UNDERSTORY, FOREST_FLOOR)

DEFAULT_SUN_ANGLE = 45.0

# Documented control ranges
CANOPY_COVER_RANGE = (0.0, 100.0)
LAI_RANGE = (0.0, 10.0)
LIGHT_PENETRATION_RANGE = (0.0, 100.0)
SUN_ANGLE_RANGE = (0.0, 180.0)
CANOPY_GAPS_RANGE = (0, 20)


def check_layer_id(layer_id: str) -> str:
    """Return layer_id unchanged, or raise ValueError if it is not a known layer."""
    if layer_id not in LAYER_IDS:
        raise ValueError(
            f"Unknown layer: {layer_id!r}. Use one of {', '.join(LAYER_IDS)}."
        )
    return layer_id


class ForestControls(NamedTuple):
    """
    User-adjusted structural parameters of the forest.

    A NamedTuple so it flows through JAX transformations as a pytree.
    Values are not validated on construction; every model function
    works on `clamped()` so malformed input never escapes the
    documented output bounds.
    """

    canopy_cover: float | Array = 90.0
    lai: float | Array = 7.5
    light_penetration: float | Array = 60.0
    sun_angle: float | Array | None = DEFAULT_SUN_ANGLE
    canopy_gaps: int | Array = 3

    def clamped(self, default_sun_angle: float = DEFAULT_SUN_ANGLE) -> "ForestControls":
        """Copy with every field clipped to its documented range.

        A missing sun angle becomes `default_sun_angle` (45 degrees unless
        the model config says otherwise) and the gap count is floored to a
        whole number of openings.
        """
        sun_angle = default_sun_angle if self.sun_angle is None else self.sun_angle
        gaps = jnp.floor(jnp.asarray(self.canopy_gaps, dtype=jnp.float32))
        return ForestControls(
            canopy_cover=jnp.clip(self.canopy_cover, *CANOPY_COVER_RANGE),
            lai=jnp.clip(self.lai, *LAI_RANGE),
            light_penetration=jnp.clip(
                self.light_penetration, *LIGHT_PENETRATION_RANGE
            ),
            sun_angle=jnp.clip(sun_angle, *SUN_ANGLE_RANGE),
            canopy_gaps=jnp.clip(gaps, *CANOPY_GAPS_RANGE),
        )

    def to_floats(
        self, default_sun_angle: float = DEFAULT_SUN_ANGLE
    ) -> dict[str, float]:
        """Plain-float view of the clamped controls, for display and export."""
        c = self.clamped(default_sun_angle)
        return {
            "canopy_cover": float(c.canopy_cover),
            "lai": float(c.lai),
            "light_penetration": float(c.light_penetration),
            "sun_angle": float(c.sun_angle),
            "canopy_gaps": int(c.canopy_gaps),
        }

    @classmethod
    def from_preset(cls, preset: "ForestPreset") -> "ForestControls":
        """Controls taken wholesale from a preset (replace, never merge)."""
        return cls(
            canopy_cover=preset.canopy_cover,
            lai=preset.lai,
            light_penetration=preset.light_penetration,
            sun_angle=preset.sun_angle,
            canopy_gaps=preset.canopy_gaps,
        )


@dataclass(frozen=True)
class ForestPalette:
    """Hex colors used to paint each stratum of a forest type."""

    trunk: str
    canopy: str
    understory: str
    floor: str

    def color_for(self, layer_id: str) -> str:
        """Fill color for a layer. Emergent crowns share the canopy color."""
        check_layer_id(layer_id)
        if layer_id in (EMERGENT, CANOPY):
            return self.canopy
        if layer_id == UNDERSTORY:
            return self.understory
        return self.floor


DEFAULT_PALETTE = ForestPalette(
    trunk="#4A3728",
    canopy="#1A5F1A",
    understory="#2D5016",
    floor="#3D5F1F",
)


@dataclass(frozen=True)
class ForestCharacteristics:
    """Descriptive traits of a forest type. Display only, never computed on."""

    tree_height: str
    density: str
    understory: str
    biodiversity: str

    @property
    def is_sparse(self) -> bool:
        return self.density in ("sparse", "very-sparse")


@dataclass(frozen=True)
class SourceRef:
    """A citation for the data behind a preset."""

    name: str
    url: str


@dataclass(frozen=True)
class ForestPreset:
    """
    A fixed forest-type configuration.

    Carries default control values, display text (a one-line summary and
    a markdown `detailed_description`), a color palette and descriptive
    characteristics. Loaded once from the static table in
    `strata.presets` and never mutated.
    """

    id: str
    name: str
    short_name: str
    description: str
    location: str
    canopy_cover: float
    lai: float
    light_penetration: float
    sun_angle: float
    canopy_gaps: int
    palette: ForestPalette
    characteristics: ForestCharacteristics
    detailed_description: str = ""
    tree_types: tuple[str, ...] = ()
    sources: tuple[SourceRef, ...] = ()
    image_queries: tuple[str, ...] = ()

    def controls(self) -> ForestControls:
        return ForestControls.from_preset(self)


@dataclass(frozen=True)
class LightModelConfig:
    """
    Constants of the stylized Beer-Lambert light model.

    The model is not physically calibrated; the constants keep the lower
    strata "almost dark but never literally zero".
    """

    # Automatic penetration: floor + span * exp(-extinction * d * (1 + lai/10))
    extinction: float = 0.8
    penetration_floor: float = 5.0
    penetration_span: float = 95.0

    # Sun angle weighting: angle_floor + angle_weight * |sin(angle)|
    angle_floor: float = 0.7
    angle_weight: float = 0.3
    default_sun_angle: float = DEFAULT_SUN_ANGLE

    # Per-layer attenuation coefficient k (broadleaf forests)
    attenuation: float = 0.5

    # Emergent layer: max(emergent_floor, 100 - lai * emergent_lai_loss)
    emergent_floor: float = 90.0
    emergent_lai_loss: float = 0.8

    # Canopy layer: (canopy_base + canopy_span * T) * (0.7 + 0.3 * (1 - d))
    canopy_base: float = 70.0
    canopy_span: float = 30.0

    # Understory: base + span * T(1.5) * p, clamped to band
    understory_base: float = 5.0
    understory_span: float = 10.0
    understory_depth: float = 1.5
    understory_band: tuple[float, float] = (2.0, 15.0)

    # Forest floor: base + span * T(2) * p, clamped to band
    floor_base: float = 1.0
    floor_span: float = 2.0
    floor_depth: float = 2.0
    floor_band: tuple[float, float] = (0.5, 5.0)

    # Visual mappings
    emergent_opacity: float = 0.9
    canopy_opacity_band: tuple[float, float] = (0.3, 0.95)
    brightness_band: tuple[float, float] = (10.0, 100.0)

    # Biodiversity index
    biodiversity_band: tuple[float, float] = (20.0, 100.0)
    max_gaps: int = 20

    # Wind force reaching each swaying layer before dividing by resistance
    emergent_wind: float = 1.5
    canopy_wind: float = 1.0
    understory_wind: float = 0.5

    def __post_init__(self) -> None:
        if self.attenuation < 0:
            raise ValueError("Attenuation coefficient must be nonnegative")
        if self.extinction < 0:
            raise ValueError("Extinction coefficient must be nonnegative")
        for name in (
            "understory_band",
            "floor_band",
            "canopy_opacity_band",
            "brightness_band",
            "biodiversity_band",
        ):
            low, high = getattr(self, name)
            if low > high:
                raise ValueError(f"{name} lower bound exceeds upper bound")
