"""
Progress chart rendering.

Draws the per-exercise weight series with matplotlib.
"""

import logging
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np

from .analyzer import ProgressPoint, progress_summary


logger = logging.getLogger(__name__)

# plot styling
plt.style.use("seaborn-v0_8-whitegrid")
COLORS = {
    "primary": "#2563eb",
    "secondary": "#64748b",
    "accent": "#f59e0b",
    "success": "#10b981",
}

# marker colour per program day
DAY_COLORS = {
    "d1": "#60a5fa",
    "d2": "#22c55e",
    "d3": "#8b5cf6",
    "d4": "#fb923c",
}


def series_arrays(points: List[ProgressPoint]):
    """
    Split a series into x positions and weights.

    Missing weights become NaN so the line shows a gap instead of a
    drop to zero.
    """
    x = np.arange(len(points))
    weights = np.array(
        [np.nan if p.weight is None else p.weight for p in points], dtype=float
    )
    return x, weights


def plot_exercise_progress(
    points: List[ProgressPoint],
    exercise_name: str,
    unit: str = "kg",
    output_path: Optional[Path] = None,
    show: bool = True,
) -> None:
    """
    Plot logged weight over time for one exercise.

    Parameters:
        points: Series from exercise_series.
        exercise_name: Display name used in the title.
        unit: Weight unit for the y-axis label.
        output_path: Optional path to save the figure.
        show: Whether to display the plot.
    """
    if not points:
        logger.warning(f"No data to plot for {exercise_name}")
        return

    x, weights = series_arrays(points)

    fig, ax = plt.subplots(figsize=(12, 6))

    ax.plot(x, weights, "-", color=COLORS["primary"], linewidth=2)

    for day_key, color in DAY_COLORS.items():
        mask = np.array([p.day_key == day_key for p in points])
        if mask.any():
            ax.scatter(
                x[mask],
                weights[mask],
                color=color,
                s=36,
                zorder=3,
                label=day_key.upper(),
            )

    summary = progress_summary(points)
    if summary.best is not None:
        ax.axhline(
            summary.best,
            color=COLORS["accent"],
            linestyle="--",
            linewidth=1,
            label=f"Best: {summary.best} {unit}",
        )

    ax.set_xlabel("Date", fontsize=11)
    ax.set_ylabel(f"Weight ({unit})", fontsize=11)
    ax.set_title(f"{exercise_name} Progress", fontsize=14, fontweight="bold")

    # x-axis labels (show every nth label to avoid crowding)
    step = max(1, len(points) // 12)
    labels = [p.date for p in points]
    ax.set_xticks(range(0, len(points), step))
    ax.set_xticklabels(labels[::step], rotation=45, ha="right")

    ax.legend()
    ax.grid(True, alpha=0.3, axis="y")
    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150, bbox_inches="tight")
        logger.info(f"Saved plot to {output_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)
