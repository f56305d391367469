"""
Matplotlib renderer for forest cross-sections.

Draws a ForestScene: sky, sun, layer bands, trees per stratum, canopy
gaps and light rays. All light-dependent values come from the scene;
the renderer only decides shapes and placement.
"""

from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Ellipse, Rectangle

from strata.config import (
    CANOPY,
    EMERGENT,
    FOREST_FLOOR,
    UNDERSTORY,
    ForestControls,
    ForestPreset,
    LightModelConfig,
)
from strata.scene import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    ForestScene,
    LayerBand,
    build_scene,
    scale_color,
)
from strata.visuals import adjust_color_brightness

# Crown height above the trunk base for each swaying layer (canvas y)
CROWN_Y = {EMERGENT: 90.0, CANOPY: 250.0, UNDERSTORY: 520.0}
TRUNK_BASE_Y = 760.0


def hex_to_rgb(hex_color: str) -> tuple[float, float, float]:
    value = hex_color.lstrip("#")
    return tuple(int(value[i : i + 2], 16) / 255 for i in (0, 2, 4))


def draw_sky(ax: plt.Axes) -> None:
    """Vertical gradient from pale blue to warm haze."""
    top = np.array(hex_to_rgb("#E0F2FE"))
    bottom = np.array(hex_to_rgb("#FEF3C7"))
    t = np.linspace(0, 1, 256)[:, None, None]
    gradient = top * (1 - t) + bottom * t
    ax.imshow(
        gradient,
        extent=(0, CANVAS_WIDTH, CANVAS_HEIGHT, 0),
        aspect="auto",
        zorder=0,
    )


def draw_sun(ax: plt.Axes, scene: ForestScene) -> None:
    sun = scene.sun
    ax.add_patch(Circle((sun.x, sun.y), 55, facecolor="#FFF59D",
                        alpha=0.3 * sun.intensity, edgecolor="none", zorder=1))
    ax.add_patch(Circle((sun.x, sun.y), 30, facecolor="#FDD835",
                        alpha=0.8 + 0.2 * sun.intensity, edgecolor="none", zorder=1.1))


def draw_band(ax: plt.Axes, band: LayerBand) -> None:
    color = scale_color(band.color, band.brightness)
    ax.add_patch(Rectangle(
        (0, band.y_top), CANVAS_WIDTH, band.y_bottom - band.y_top,
        facecolor=color, alpha=band.opacity * 0.35, edgecolor="none", zorder=2,
    ))


def draw_trees(ax: plt.Axes, scene: ForestScene, rng: np.random.Generator) -> None:
    """
    Trunks and crowns for the three woody layers.

    Tree count follows tree density; crown size grows with LAI and
    crowns sway (lean) by the layer's wind force.
    """
    controls = scene.snapshot.controls
    visuals = scene.snapshot.visuals
    lai = float(controls.lai)
    density = visuals.tree_density / 100.0
    trunk_color = scene.palette.trunk

    counts = {
        EMERGENT: 1 if scene.sparse else 2,
        CANOPY: max(2, int(round(6 * density))),
        UNDERSTORY: max(2, int(round(5 * density))),
    }
    crown_scale = {EMERGENT: 1.3, CANOPY: 1.0, UNDERSTORY: 0.7}
    z = {EMERGENT: 5, CANOPY: 4, UNDERSTORY: 3}

    for layer_id, count in counts.items():
        band_color = scene.palette.color_for(layer_id)
        brightness = visuals.brightness[layer_id]
        opacity = visuals.opacity[layer_id]
        lean = scene.snapshot.wind.force[layer_id] * 6.0
        xs = np.sort(rng.uniform(80, CANVAS_WIDTH - 80, size=count))

        for i, x in enumerate(xs):
            crown_y = CROWN_Y[layer_id] + rng.uniform(-15, 15)
            width = 6 + lai * 0.5 * crown_scale[layer_id]
            ax.add_patch(Rectangle(
                (x - width / 2, crown_y), width, TRUNK_BASE_Y - crown_y,
                facecolor=trunk_color, edgecolor="none", alpha=0.9, zorder=z[layer_id],
            ))
            shade = adjust_color_brightness(band_color, -10 if i % 2 else 5)
            ax.add_patch(Ellipse(
                (x + lean, crown_y),
                width=(70 + lai * 6) * crown_scale[layer_id],
                height=(40 + lai * 3) * crown_scale[layer_id],
                facecolor=scale_color(shade, brightness),
                edgecolor="none",
                alpha=opacity,
                zorder=z[layer_id] + 0.1,
            ))


def draw_floor(ax: plt.Axes, scene: ForestScene) -> None:
    """Ground strip and low plants, larger when more light reaches the floor."""
    floor_color = scene.palette.color_for(FOREST_FLOOR)
    growth = 1 + scene.snapshot.effective_penetration / 100.0 * 0.5
    ax.add_patch(Rectangle(
        (0, TRUNK_BASE_Y), CANVAS_WIDTH, CANVAS_HEIGHT - TRUNK_BASE_Y,
        facecolor=adjust_color_brightness(floor_color, -15), edgecolor="none", zorder=6,
    ))
    for cx, rx, ry in ((400, 50, 30), (560, 45, 35), (520, 40, 25)):
        ax.add_patch(Ellipse(
            (cx, TRUNK_BASE_Y - 5), rx * 2 * growth, ry * 2 * growth,
            facecolor=floor_color, edgecolor="none",
            alpha=scene.snapshot.visuals.opacity[FOREST_FLOOR], zorder=6.1,
        ))


def draw_light(ax: plt.Axes, scene: ForestScene) -> None:
    for gap in scene.gaps:
        ax.add_patch(Ellipse(
            (gap.x, gap.y), gap.size * 2, gap.size * 1.2,
            facecolor="#FFFACD", edgecolor="none", alpha=gap.intensity * 0.5, zorder=7,
        ))
        if gap.regrowth:
            ax.add_patch(Ellipse(
                (gap.x, TRUNK_BASE_Y - 10), gap.size, gap.size * 0.4,
                facecolor=scene.palette.understory, edgecolor="none", alpha=0.7, zorder=7.1,
            ))

    if scene.glow is not None:
        glow = scene.glow
        ax.add_patch(Ellipse(
            (glow.cx, glow.cy), glow.rx * 2, glow.ry * 2,
            facecolor="#FFFACD", edgecolor="none", alpha=glow.opacity, zorder=7.2,
        ))

    for ray in scene.rays + scene.scattered_rays:
        ax.plot([ray.x1, ray.x2], [ray.y1, ray.y2], color=ray.color,
                linewidth=ray.width, alpha=ray.opacity,
                solid_capstyle="round", zorder=8)


def render_forest(
    controls: ForestControls,
    preset: ForestPreset | None = None,
    config: LightModelConfig | None = None,
    seed: int = 42,
    figsize: tuple = (10, 8),
) -> tuple[plt.Figure, plt.Axes, ForestScene]:
    """
    Render a forest cross-section for the given controls.

    Args:
        controls: Forest controls
        preset: Preset supplying colors (default palette if None)
        config: Model constants
        seed: Random seed for tree placement
        figsize: Figure size in inches

    Returns:
        (figure, axes, scene) tuple
    """
    scene = build_scene(controls, preset, config)
    rng = np.random.default_rng(seed)

    fig, ax = plt.subplots(figsize=figsize)
    draw_sky(ax)
    ax.set_xlim(0, CANVAS_WIDTH)
    ax.set_ylim(CANVAS_HEIGHT, 0)  # Flip Y for screen coords
    ax.set_aspect("equal")
    ax.axis("off")

    draw_sun(ax, scene)
    for band in scene.bands:
        draw_band(ax, band)
    draw_trees(ax, scene, rng)
    draw_floor(ax, scene)
    draw_light(ax, scene)

    title = preset.name if preset is not None else "Custom Forest"
    ax.set_title(
        f"{title} - {scene.snapshot.time_of_day}, "
        f"{scene.snapshot.effective_penetration:.1f}% penetration"
    )
    return fig, ax, scene


def save_forest(
    filepath: str,
    controls: ForestControls,
    preset: ForestPreset | None = None,
    config: LightModelConfig | None = None,
    seed: int = 42,
    dpi: int = 150,
    figsize: tuple = (10, 8),
) -> ForestScene:
    """Render and save a forest cross-section. Returns the scene for inspection."""
    fig, ax, scene = render_forest(controls, preset, config, seed, figsize)
    fig.savefig(filepath, dpi=dpi, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)
    print(f"Saved to {filepath}")
    return scene
