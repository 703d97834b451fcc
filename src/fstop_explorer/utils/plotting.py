"""
plotting.py — matplotlib views for the brightness explorer

WHAT THIS MODULE PROVIDES
-------------------------
• plot_brightness_chart(samples, y_range, ...)
    Line chart of normalized brightness per f-stop. The x axis is
    categorical (one tick per common stop, labeled f/N) and runs from the
    largest f-number on the left to the smallest on the right, so brightness
    rises left → right.

• plot_exposure_preview(bitmap, ev)
    The exposure-adjusted preview with its EV label.

Both return the matplotlib Figure; saving/showing is left to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from fstop_explorer.optics.aperture_model import BrightnessSample, crop_brightness_factor, fstop_label
from fstop_explorer.sensor.exposure_model import Bitmap


@dataclass
class ChartStyle:
    """Presentation defaults (colors, sizes) for the brightness chart."""
    line_color: str = "#2563eb"
    line_width: float = 2.0
    marker_size: float = 8.0
    grid_dash: Tuple[int, int] = (3, 3)
    label_rotation: float = 45.0
    figsize: Tuple[float, float] = (10.0, 5.0)


def _format_y(value: float, _pos: int) -> str:
    return f"{value:.2f}"


def plot_brightness_chart(
    samples: Sequence[BrightnessSample],
    y_range: Tuple[float, float],
    *,
    reference: float,
    crop_enabled: bool = False,
    crop_factor: float = 1.0,
    ax: Axes | None = None,
    style: ChartStyle | None = None,
) -> Figure:
    """
    Draw normalized brightness vs. f-stop.

    Parameters
    ----------
    samples : sequence of BrightnessSample
        Output of compute_samples (ascending f-number order).
    y_range : (float, float)
        Vertical axis limits.
    reference : float
        Reference f-number (shown in the subtitle).
    crop_enabled, crop_factor :
        When enabled, each point is annotated with its equivalent aperture
        and the title notes the crop brightness factor.
    ax : Axes | None
        Draw into an existing axes; a new figure is created otherwise.
    """
    style = style or ChartStyle()
    if ax is None:
        fig, ax = plt.subplots(figsize=style.figsize)
    else:
        fig = ax.figure

    x = np.arange(len(samples))
    y = np.array([s.display_brightness for s in samples], dtype=np.float64)

    ax.plot(
        x, y,
        color=style.line_color,
        linewidth=style.line_width,
        marker="o",
        markersize=style.marker_size,
        markerfacecolor="white",
        markeredgecolor=style.line_color,
        markeredgewidth=2.0,
    )

    ax.set_xticks(x)
    ax.set_xticklabels([s.label for s in samples], rotation=style.label_rotation, ha="right")
    # Largest f-number on the left
    ax.invert_xaxis()

    ax.set_ylim(*y_range)
    ax.yaxis.set_major_formatter(FuncFormatter(_format_y))
    ax.set_ylabel("Relative Brightness")
    ax.grid(True, linestyle=(0, style.grid_dash), alpha=0.5)

    title = "Relative Brightness vs. f-stop"
    subtitle = f"Normalized to {fstop_label(reference)}"
    if crop_enabled:
        subtitle += f" | crop {crop_factor:g}x ({crop_brightness_factor(crop_factor):.2f}x brightness)"
        for xi, yi, s in zip(x, y, samples):
            ax.annotate(
                f"→ {s.effective_label}",
                (xi, yi),
                textcoords="offset points",
                xytext=(0, 8),
                ha="center",
                fontsize=7,
                color="gray",
            )
    ax.set_title(f"{title}\n{subtitle}")

    fig.tight_layout()
    return fig


def plot_exposure_preview(bitmap: Bitmap, ev: float, ax: Axes | None = None) -> Figure:
    """Show an RGBA preview titled with its exposure value."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(5, 5))
    else:
        fig = ax.figure
    ax.imshow(bitmap.pixels)
    ax.set_title(f"Exposure Value: {ev:.1f}")
    ax.axis("off")
    fig.tight_layout()
    return fig
