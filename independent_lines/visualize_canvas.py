from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from canvas2d import LineCanvas
from search_grid import Coordinate


def show_walkability_grid(grid: np.ndarray, ax=None):
    """
    Visualize a walkability grid (H, W) with blocked cells in black.

    Cell (x, y) is drawn as the pixel centred on (x, y), so data coordinates
    of the axes are cell coordinates.
    """
    if ax is None:
        _, ax = plt.subplots()
    blocked = np.logical_not(grid).astype(np.uint8)
    ax.imshow(blocked, cmap="gray_r", origin="lower", vmin=0, vmax=1)
    ax.set_title("Walkability Grid")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    return ax


def show_route(
    grid: np.ndarray,
    path: List[Coordinate],
    start: Optional[Coordinate] = None,
    ax=None,
    color="red",
    label="Route",
):
    """
    Overlay one route on the grid visualization.

    ``path`` is the planner output, which leaves out the start cell; pass
    ``start`` to draw the first segment as well.
    """
    ax = show_walkability_grid(grid, ax=ax)
    points = ([start] if start is not None else []) + list(path)
    if not points:
        return ax

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    ax.plot(xs, ys, color=color, linewidth=2, label=label)
    ax.scatter(xs[0], ys[0], c="green", s=30, label="Start")
    ax.scatter(xs[-1], ys[-1], c="red", s=30, label="Goal")
    ax.set_title(label)
    ax.legend()
    return ax


def draw_lines(
    ax,
    lines: Sequence[Sequence[Coordinate]],
    color="blue",
    linewidth=2,
) -> None:
    """
    Draw straight segments between consecutive cells of every line.
    """
    for line in lines:
        if len(line) == 1:
            ax.scatter([line[0][0]], [line[0][1]], c=color, s=linewidth * 4)
            continue
        xs = [p[0] for p in line]
        ys = [p[1] for p in line]
        ax.plot(xs, ys, color=color, linewidth=linewidth)


def show_lines(
    canvas: LineCanvas,
    ax=None,
    color="blue",
    title: str = "Independent Lines",
):
    """
    Plot every line on the canvas on top of its walkability grid.
    """
    if ax is None:
        _, ax = plt.subplots()

    ax.clear()
    show_walkability_grid(canvas.get_walkability_grid(), ax=ax)
    draw_lines(ax, canvas.lines, color=color)
    ax.set_xlim(-0.5, canvas.width - 0.5)
    ax.set_ylim(-0.5, canvas.height - 0.5)
    ax.set_title(title)
    return ax
