"""
Tests for JAX autodiff sensitivity analysis.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from strata.analysis import (
    METRICS,
    PARAMS,
    compute_sensitivity,
    parameter_sweep_2d,
    plot_light_profile,
    plot_sensitivity_curve,
    print_sensitivity_report,
    sensitivity_report,
    sensitivity_sweep,
)
from strata.config import ForestControls


def dense_evergreen() -> ForestControls:
    return ForestControls(
        canopy_cover=90, lai=7.5, light_penetration=60, sun_angle=90, canopy_gaps=3
    )


class TestSensitivity:
    """Tests for compute_sensitivity()."""

    def test_wind_resistance_gradient(self) -> None:
        """d(wr)/d(cover) = 0.5 / 100."""
        grad = compute_sensitivity("wind_resistance", dense_evergreen(), "canopy_cover")
        assert grad == pytest.approx(0.005, rel=1e-4)

    def test_cover_reduces_penetration(self) -> None:
        grad = compute_sensitivity("effective_penetration", dense_evergreen(), "canopy_cover")
        assert grad < 0

    def test_intensity_increases_understory_light(self) -> None:
        grad = compute_sensitivity("understory_light", dense_evergreen(), "light_penetration")
        assert grad > 0

    def test_flat_at_overhead_sun(self) -> None:
        """Penetration peaks at 90 degrees, so its slope there is zero."""
        grad = compute_sensitivity("effective_penetration", dense_evergreen(), "sun_angle")
        assert grad == pytest.approx(0.0, abs=1e-4)

    def test_missing_sun_angle(self) -> None:
        """A missing angle is differentiated at the 45 degree default."""
        controls = dense_evergreen()._replace(sun_angle=None)
        explicit = dense_evergreen()._replace(sun_angle=45)
        assert compute_sensitivity(
            "effective_penetration", controls, "sun_angle"
        ) == pytest.approx(
            compute_sensitivity("effective_penetration", explicit, "sun_angle")
        )

    def test_unknown_metric(self) -> None:
        with pytest.raises(ValueError, match="Unknown metric"):
            compute_sensitivity("shade", dense_evergreen(), "lai")

    def test_unknown_param(self) -> None:
        with pytest.raises(ValueError, match="Unknown parameter"):
            compute_sensitivity("floor_light", dense_evergreen(), "canopy_gaps")

    def test_report_covers_every_pair(self) -> None:
        report = sensitivity_report(dense_evergreen())
        assert set(report) == set(METRICS)
        for row in report.values():
            assert set(row) == set(PARAMS)
            assert all(np.isfinite(v) for v in row.values())

    def test_print_report(self, capsys) -> None:
        print_sensitivity_report(dense_evergreen())
        out = capsys.readouterr().out
        assert "SENSITIVITY REPORT" in out
        assert "floor_light" in out


class TestSweeps:
    """Tests for 1D and 2D sweeps."""

    def test_sweep_shapes(self) -> None:
        result = sensitivity_sweep(
            "effective_penetration", dense_evergreen(), "lai", resolution=6
        )
        assert result["param_values"].shape == (6,)
        assert result["metric_values"].shape == (6,)
        assert result["gradient_values"].shape == (6,)

    def test_sweep_decreasing_in_lai(self) -> None:
        result = sensitivity_sweep(
            "effective_penetration",
            dense_evergreen(),
            "lai",
            param_range=(1.0, 9.0),
            resolution=5,
        )
        assert np.all(np.diff(result["metric_values"]) < 0)
        assert np.all(result["gradient_values"] < 0)

    def test_sweep_2d(self) -> None:
        result = parameter_sweep_2d("effective_penetration", dense_evergreen(), resolution=4)
        grid = result["metric_grid"]
        assert grid.shape == (4, 4)
        # Bare ground under an overhead sun at 60% intensity
        assert grid[0, 0] == pytest.approx(60.0, abs=1e-3)
        assert grid[-1, -1] < grid[0, 0]

    def test_sweep_2d_matches_pointwise(self) -> None:
        controls = dense_evergreen()
        result = parameter_sweep_2d("floor_light", controls, resolution=3)
        fn = METRICS["floor_light"]
        point = controls._replace(
            canopy_cover=float(result["cover_vals"][1]), lai=float(result["lai_vals"][2])
        )
        assert result["metric_grid"][1, 2] == pytest.approx(float(fn(point)), rel=1e-5)


class TestPlots:
    """Smoke tests for analysis plots."""

    def test_light_profile(self) -> None:
        ax = plot_light_profile(dense_evergreen())
        assert len(ax.patches) == 4
        plt.close("all")

    def test_sensitivity_curve(self) -> None:
        result = sensitivity_sweep("floor_light", dense_evergreen(), "canopy_cover", resolution=5)
        ax1, ax2 = plot_sensitivity_curve(result, "canopy_cover", "floor_light")
        assert ax1.get_xlabel() == "canopy_cover"
        assert ax2.get_ylabel() == "dfloor_light/dcanopy_cover"
        plt.close("all")
