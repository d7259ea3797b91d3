from typing import Tuple

import matplotlib.pyplot as plt
import numpy as np

from .parser import MAX_ELEVATION, MIN_ELEVATION, TerrainGrid
from .solver import SearchResult


def render_path(grid: TerrainGrid, result: SearchResult) -> Tuple[plt.Figure, plt.Axes]:
    fig, ax = plt.subplots(figsize=(max(4, grid.width / 6), max(3, grid.height / 6)))
    image = ax.imshow(
        grid.elevations(), cmap="terrain", vmin=MIN_ELEVATION, vmax=MAX_ELEVATION, origin="upper"
    )
    fig.colorbar(image, ax=ax, label="elevation")

    if result.path:
        # Coordinates are (column, row), which is already imshow's (x, y).
        xs = [x for x, _ in result.path]
        ys = [y for _, y in result.path]
        ax.plot(xs, ys, color="#dc143c", linewidth=1.5)
        ax.plot(xs[0], ys[0], marker="o", color="#ffffff", markeredgecolor="black")
        ax.plot(xs[-1], ys[-1], marker="*", markersize=12, color="#ffd700", markeredgecolor="black")
        title = f"Shortest climb: {result.steps} steps"
    else:
        title = "No path to the summit"

    ax.set_xticks(np.arange(-0.5, grid.width, 1), minor=True)
    ax.set_yticks(np.arange(-0.5, grid.height, 1), minor=True)
    ax.grid(which="minor", color="black", linewidth=0.3, alpha=0.3)
    ax.set_xticklabels([])
    ax.set_yticklabels([])
    ax.set_title(title)
    return fig, ax


def save_path_plot(grid: TerrainGrid, result: SearchResult, output_path: str | None) -> None:
    fig, ax = render_path(grid, result)
    if output_path:
        fig.savefig(output_path, bbox_inches="tight")
    plt.close(fig)


def display_path(grid: TerrainGrid, result: SearchResult) -> None:
    fig, ax = render_path(grid, result)
    plt.show()
    plt.close(fig)
