"""
Declarative scene description of a forest cross-section.

Builds plain data (sun, layer bands, light rays, canopy gaps, glow) from a
model snapshot. Renderers draw this description; they never recompute
light levels themselves.

Canvas coordinates: 1000 x 800, y grows downward. Light rays start at
y=50 and may reach the forest floor at y=750.
"""

import math
from dataclasses import dataclass, field

from strata.config import (
    CANOPY,
    DEFAULT_PALETTE,
    EMERGENT,
    FOREST_FLOOR,
    LAYER_IDS,
    UNDERSTORY,
    ForestControls,
    ForestPalette,
    ForestPreset,
    LightModelConfig,
)
from strata.layers import get_layer
from strata.light import canopy_transmission
from strata.model import ForestSnapshot, evaluate_forest

CANVAS_WIDTH = 1000.0
CANVAS_HEIGHT = 800.0

# Depth stops for light rays (canvas y)
RAY_ORIGIN_Y = 50.0
EMERGENT_STOP = 120.0
CANOPY_STOP = 400.0
UNDERSTORY_STOP = 600.0
FLOOR_STOP = 750.0

MAIN_RAY_SPREAD = 350.0
SCATTER_OFFSETS = (-180.0, -120.0, -60.0, 60.0, 120.0, 180.0)


@dataclass
class SunPlacement:
    """Sun position on its arc. Rises on the left, sets on the right."""

    x: float
    y: float
    intensity: float  # |sin(angle)|, 1 overhead


@dataclass
class LayerBand:
    """Horizontal band of the canvas occupied by one layer."""

    layer_id: str
    y_top: float
    y_bottom: float
    color: str
    opacity: float
    brightness: float


@dataclass
class LightRay:
    x1: float
    y1: float
    x2: float
    y2: float
    width: float
    opacity: float
    color: str = "#FFE4B5"


@dataclass
class CanopyGap:
    """A light patch where a tree fall has opened the canopy."""

    x: float
    y: float
    size: float
    intensity: float
    regrowth: bool  # Enough light for understory plants to grow in the gap


@dataclass
class Glow:
    """Ambient light pooling below the canopy."""

    cx: float
    cy: float
    rx: float
    ry: float
    opacity: float


@dataclass
class ForestScene:
    """Everything a renderer needs to draw one frame."""

    snapshot: ForestSnapshot
    palette: ForestPalette
    sun: SunPlacement
    bands: list[LayerBand]
    rays: list[LightRay] = field(default_factory=list)
    scattered_rays: list[LightRay] = field(default_factory=list)
    gaps: list[CanopyGap] = field(default_factory=list)
    glow: Glow | None = None
    sparse: bool = False


def scale_color(hex_color: str, brightness: float) -> str:
    """Scale each RGB channel by brightness/100, like a CSS brightness filter."""
    value = hex_color.lstrip("#")
    factor = brightness / 100.0
    channels = [int(value[i : i + 2], 16) for i in (0, 2, 4)]
    r, g, b = (min(255, max(0, int(round(ch * factor)))) for ch in channels)
    return f"#{r:02x}{g:02x}{b:02x}"


def place_sun(sun_angle: float) -> SunPlacement:
    """
    Position the sun for a sun angle.

    0 degrees sits on the left horizon, 90 overhead at the center top,
    180 on the right horizon.
    """
    rad = math.radians(sun_angle)
    return SunPlacement(
        x=CANVAS_WIDTH / 2 - math.cos(rad) * 400.0,
        y=150.0 - math.sin(rad) * 100.0,
        intensity=abs(math.sin(rad)),
    )


def build_bands(snapshot: ForestSnapshot, palette: ForestPalette) -> list[LayerBand]:
    bands = []
    for layer_id in LAYER_IDS:
        info = get_layer(layer_id)
        bands.append(
            LayerBand(
                layer_id=layer_id,
                y_top=info.top / 100.0 * CANVAS_HEIGHT,
                y_bottom=info.bottom / 100.0 * CANVAS_HEIGHT,
                color=palette.color_for(layer_id),
                opacity=snapshot.visuals.opacity[layer_id],
                brightness=snapshot.visuals.brightness[layer_id],
            )
        )
    return bands


def _blockage(controls: ForestControls, floor: float, config: LightModelConfig | None) -> float:
    """How much of the canopy lets rays through, never below floor."""
    d = float(controls.canopy_cover) / 100.0
    transmission = float(canopy_transmission(controls, 1.0, config))
    return max(floor, transmission * (1.0 - d * 0.5))


def main_ray_depth(snapshot: ForestSnapshot) -> float:
    """
    How far down the main light rays reach.

    Rays reach the deepest layer whose light, scaled by penetration,
    is still meaningful. Otherwise they stop a third of the way into
    the canopy.
    """
    p = snapshot.effective_penetration / 100.0
    floor_light = snapshot.layer_light[FOREST_FLOOR] * p
    understory_light = snapshot.layer_light[UNDERSTORY] * p
    canopy_light = snapshot.layer_light[CANOPY] * p

    if floor_light > 2:
        return EMERGENT_STOP + (FLOOR_STOP - EMERGENT_STOP) * (floor_light / 5.0)
    if understory_light > 2:
        return EMERGENT_STOP + (UNDERSTORY_STOP - EMERGENT_STOP) * (understory_light / 15.0)
    if canopy_light > 50:
        return EMERGENT_STOP + (CANOPY_STOP - EMERGENT_STOP) * ((canopy_light - 50.0) / 50.0)
    return EMERGENT_STOP + (CANOPY_STOP - EMERGENT_STOP) * 0.3


def build_main_rays(
    snapshot: ForestSnapshot, config: LightModelConfig | None = None
) -> list[LightRay]:
    """Fan of sun rays whose count, depth and opacity follow the layer light."""
    light = snapshot.layer_light
    p = snapshot.effective_penetration / 100.0
    blockage = _blockage(snapshot.controls, 0.2, config)
    depth = main_ray_depth(snapshot)
    count = math.floor(5 + light[EMERGENT] / 100.0 * 5)
    center = CANVAS_WIDTH / 2

    rays = []
    for i in range(count):
        offset = (i - (count - 1) / 2) * (MAIN_RAY_SPREAD / (count - 1))
        end_y = min(depth, FLOOR_STOP)
        depth_ratio = (end_y - EMERGENT_STOP) / (FLOOR_STOP - EMERGENT_STOP)
        depth_fade = 1.0 - depth_ratio * 0.6

        if end_y < CANOPY_STOP:
            layer_light = light[EMERGENT]
        elif end_y < UNDERSTORY_STOP:
            layer_light = light[CANOPY]
        elif end_y < FLOOR_STOP:
            layer_light = light[UNDERSTORY]
        else:
            layer_light = light[FOREST_FLOOR]

        opacity = min(0.8, layer_light / 100.0 * blockage * depth_fade * p)
        rays.append(
            LightRay(
                x1=center + offset * 0.3,
                y1=RAY_ORIGIN_Y,
                x2=center + offset,
                y2=end_y,
                width=max(1.0, 5.0 - depth_ratio * 2.0 - abs(offset) / 100.0),
                opacity=max(0.15, opacity),
            )
        )
    return rays


def build_scattered_rays(
    snapshot: ForestSnapshot, config: LightModelConfig | None = None
) -> list[LightRay]:
    """Faint secondary rays, present only when the understory is well lit."""
    p = snapshot.effective_penetration / 100.0
    understory = snapshot.layer_light[UNDERSTORY]
    floor_light = snapshot.layer_light[FOREST_FLOOR]
    if understory * p <= 5:
        return []

    blockage = _blockage(snapshot.controls, 0.2, config)
    if understory * p > 10:
        depth = 600.0 + (floor_light * p / 5.0) * 150.0
    else:
        depth = 500.0 + (understory * p / 5.0) * 100.0
    opacity = max(0.1, understory / 100.0 * blockage * p * 0.6)

    center = CANVAS_WIDTH / 2
    return [
        LightRay(
            x1=center + offset * 0.2,
            y1=RAY_ORIGIN_Y,
            x2=center + offset * 0.8,
            y2=min(depth, FLOOR_STOP),
            width=max(1.5, 3.0 - abs(offset) / 100.0),
            opacity=opacity,
            color="#FFFACD",
        )
        for offset in SCATTER_OFFSETS
    ]


def build_glow(
    snapshot: ForestSnapshot, config: LightModelConfig | None = None
) -> Glow | None:
    p = snapshot.effective_penetration / 100.0
    floor_light = snapshot.layer_light[FOREST_FLOOR] * p
    if floor_light <= 1:
        return None
    reach = floor_light / 5.0
    blockage = _blockage(snapshot.controls, 0.3, config)
    return Glow(
        cx=CANVAS_WIDTH / 2,
        cy=50.0 + reach * 350.0,
        rx=150.0 + reach * 200.0,
        ry=reach * 300.0,
        opacity=0.1 * blockage * p,
    )


def build_gaps(snapshot: ForestSnapshot) -> list[CanopyGap]:
    """Light patches for each canopy gap, spread across the canopy and understory."""
    effective = snapshot.effective_penetration
    count = int(snapshot.controls.canopy_gaps)
    intensity = 0.3 + (effective / 100.0) * 0.5
    return [
        CanopyGap(
            x=200.0 + (i * 150) % 600,
            y=250.0 + (i * 80) % 250,
            size=60.0 + (i % 3) * 20.0,
            intensity=intensity,
            regrowth=effective > 20,
        )
        for i in range(count)
    ]


def build_scene(
    controls: ForestControls,
    preset: ForestPreset | None = None,
    config: LightModelConfig | None = None,
) -> ForestScene:
    """
    Evaluate the model and lay out a complete scene.

    Args:
        controls: Forest controls
        preset: Preset supplying the palette (default colors if None)
        config: Model constants

    Returns:
        ForestScene ready for rendering
    """
    snapshot = evaluate_forest(controls, preset, config)
    palette = preset.palette if preset is not None else DEFAULT_PALETTE
    return ForestScene(
        snapshot=snapshot,
        palette=palette,
        sun=place_sun(float(snapshot.controls.sun_angle)),
        bands=build_bands(snapshot, palette),
        rays=build_main_rays(snapshot, config),
        scattered_rays=build_scattered_rays(snapshot, config),
        gaps=build_gaps(snapshot),
        glow=build_glow(snapshot, config),
        sparse=preset is not None and preset.characteristics.is_sparse,
    )
