"""
Sensitivity analysis of the forest light model.

Because every model function is written in JAX, the derivative of any
output with respect to any control is available through `jax.grad`.

Key analyses:
- Sensitivity: d(metric)/d(control) at a point
- Sweeps: metric and gradient across a control's range
- 2D sweeps: metric over canopy cover x LAI
- Light profile plots: light by layer, top to bottom

Useful for explaining which structural change matters most in a given
forest, e.g. why extra LAI barely changes a thorn forest floor.
"""

from collections.abc import Callable

import jax
import jax.numpy as jnp
import numpy as np
from jax import Array

from strata.config import (
    CANOPY,
    DEFAULT_SUN_ANGLE,
    EMERGENT,
    FOREST_FLOOR,
    LAYER_IDS,
    UNDERSTORY,
    ForestControls,
)
from strata.light import compute_layer_light, compute_light_penetration
from strata.visuals import compute_biodiversity_index, compute_wind_resistance

# Type alias for scalar model outputs
MetricFn = Callable[[ForestControls], Array]

METRICS: dict[str, MetricFn] = {
    "effective_penetration": compute_light_penetration,
    "emergent_light": lambda c: compute_layer_light(EMERGENT, c),
    "canopy_light": lambda c: compute_layer_light(CANOPY, c),
    "understory_light": lambda c: compute_layer_light(UNDERSTORY, c),
    "floor_light": lambda c: compute_layer_light(FOREST_FLOOR, c),
    "biodiversity_index": compute_biodiversity_index,
    "wind_resistance": compute_wind_resistance,
}

# Continuous controls that can be differentiated
PARAMS = ("canopy_cover", "lai", "light_penetration", "sun_angle")

PARAM_RANGES = {
    "canopy_cover": (0.0, 100.0),
    "lai": (0.0, 10.0),
    "light_penetration": (0.0, 100.0),
    "sun_angle": (0.0, 180.0),
}


def get_metric(metric: str) -> MetricFn:
    if metric not in METRICS:
        raise ValueError(
            f"Unknown metric: {metric}. Use one of {', '.join(sorted(METRICS))}."
        )
    return METRICS[metric]


def _check_param(param: str, allowed: tuple[str, ...]) -> None:
    if param not in allowed:
        raise ValueError(f"Unknown parameter: {param}. Use one of {', '.join(allowed)}.")


def compute_sensitivity(metric: str, controls: ForestControls, param: str) -> float:
    """
    Derivative of a metric with respect to one control, via JAX autodiff.

    Args:
        metric: Name from METRICS, e.g. "floor_light"
        controls: Point at which to differentiate
        param: Control to differentiate w.r.t. (see PARAMS)

    Returns:
        Gradient value - positive means the metric increases with the control.
        Zero where the metric is clamped, reduced on a clamp edge.
    """
    fn = get_metric(metric)
    _check_param(param, PARAMS)

    def metric_of(value: Array) -> Array:
        return fn(controls._replace(**{param: value}))

    current = getattr(controls, param)
    if current is None:
        current = DEFAULT_SUN_ANGLE
    value = jnp.asarray(float(current))
    return float(jax.grad(metric_of)(value))


def sensitivity_sweep(
    metric: str,
    controls: ForestControls,
    param: str,
    param_range: tuple[float, float] | None = None,
    resolution: int = 50,
) -> dict[str, np.ndarray]:
    """
    Evaluate a metric and its gradient across a control's range.

    Args:
        metric: Name from METRICS
        controls: Base controls; only `param` is varied
        param: Control to sweep (see PARAMS)
        param_range: (min, max), defaults to the control's documented range
        resolution: Number of points

    Returns:
        Dictionary with:
        - param_values: 1D array of control values
        - metric_values: 1D array of the metric at each point
        - gradient_values: 1D array of d(metric)/d(param) at each point
    """
    fn = get_metric(metric)
    _check_param(param, PARAMS)
    low, high = param_range if param_range is not None else PARAM_RANGES[param]

    param_values = np.linspace(low, high, resolution)
    metric_values = np.zeros(resolution)
    gradient_values = np.zeros(resolution)

    for i, value in enumerate(param_values):
        point = controls._replace(**{param: float(value)})
        metric_values[i] = float(fn(point))
        gradient_values[i] = compute_sensitivity(metric, point, param)

    return {
        "param_values": param_values,
        "metric_values": metric_values,
        "gradient_values": gradient_values,
    }


def parameter_sweep_2d(
    metric: str,
    controls: ForestControls,
    cover_range: tuple[float, float] = (0.0, 100.0),
    lai_range: tuple[float, float] = (0.0, 10.0),
    resolution: int = 20,
) -> dict[str, np.ndarray]:
    """
    Evaluate a metric over a canopy cover x LAI grid.

    Returns:
        Dictionary with:
        - metric_grid: 2D array [cover_idx, lai_idx]
        - cover_vals: 1D array of canopy cover values
        - lai_vals: 1D array of LAI values
    """
    fn = get_metric(metric)
    cover_vals = np.linspace(cover_range[0], cover_range[1], resolution)
    lai_vals = np.linspace(lai_range[0], lai_range[1], resolution)

    # Vectorized over the grid; the model is elementwise in its controls
    cover_grid, lai_grid = jnp.meshgrid(
        jnp.asarray(cover_vals), jnp.asarray(lai_vals), indexing="ij"
    )
    grid = fn(controls._replace(canopy_cover=cover_grid, lai=lai_grid))
    metric_grid = np.broadcast_to(np.asarray(grid), cover_grid.shape).copy()

    return {
        "metric_grid": metric_grid,
        "cover_vals": cover_vals,
        "lai_vals": lai_vals,
    }


def sensitivity_report(controls: ForestControls) -> dict[str, dict[str, float]]:
    """Gradient of every metric w.r.t. every continuous control."""
    return {
        metric: {param: compute_sensitivity(metric, controls, param) for param in PARAMS}
        for metric in METRICS
    }


def print_sensitivity_report(controls: ForestControls) -> None:
    """Print the sensitivity table to stdout."""
    report = sensitivity_report(controls)
    print("\n" + "=" * 76)
    print("SENSITIVITY REPORT - d(metric)/d(control)")
    print("=" * 76)
    print(f"{'Metric':<22}" + "".join(f"{p:>13}" for p in PARAMS))
    print("-" * 76)
    for metric, row in report.items():
        print(f"{metric:<22}" + "".join(f"{row[p]:>13.4f}" for p in PARAMS))
    print("=" * 76)


def plot_light_profile(controls: ForestControls, ax=None):
    """
    Horizontal bar chart of light by layer, top layer at the top.

    Args:
        controls: Forest controls
        ax: Matplotlib axes (optional)

    Returns:
        The matplotlib axes
    """
    import matplotlib.pyplot as plt

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4))

    levels = [float(compute_layer_light(layer_id, controls)) for layer_id in LAYER_IDS]
    positions = np.arange(len(LAYER_IDS))[::-1]
    ax.barh(positions, levels, color=["#FDD835", "#43A047", "#2E7D32", "#5D4037"])
    ax.set_yticks(positions)
    ax.set_yticklabels(LAYER_IDS)
    ax.set_xlabel("Light (% of full sun)")
    ax.set_title("Light by forest layer")
    ax.grid(True, axis="x", alpha=0.3)

    return ax


def plot_sensitivity_curve(
    sweep_result: dict[str, np.ndarray],
    param_name: str,
    metric_name: str = "metric",
    axes=None,
):
    """
    Plot a metric and its gradient against a control.

    Args:
        sweep_result: Output from sensitivity_sweep
        param_name: Name for x-axis label
        metric_name: Name for y-axis label
        axes: Tuple of two matplotlib axes (optional)

    Returns:
        Tuple of matplotlib axes with the plots
    """
    import matplotlib.pyplot as plt

    if axes is None:
        _, axes = plt.subplots(1, 2, figsize=(12, 4))

    ax1, ax2 = axes

    ax1.plot(
        sweep_result["param_values"],
        sweep_result["metric_values"],
        linewidth=2,
        color="green",
    )
    ax1.set_xlabel(param_name)
    ax1.set_ylabel(metric_name)
    ax1.set_title(f"{metric_name} vs {param_name}")
    ax1.grid(True, alpha=0.3)

    ax2.plot(
        sweep_result["param_values"],
        sweep_result["gradient_values"],
        linewidth=2,
        color="red",
    )
    ax2.axhline(0, color="gray", linestyle="--", alpha=0.5)
    ax2.set_xlabel(param_name)
    ax2.set_ylabel(f"d{metric_name}/d{param_name}")
    ax2.set_title(f"Sensitivity vs {param_name}")
    ax2.grid(True, alpha=0.3)

    return axes
