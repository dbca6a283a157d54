"""
Interactive two-click line drawer.

Every pair of clicks on the canvas window is joined by a route that avoids
all lines drawn before it. Unreachable pairs are reported and dropped.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt

from canvas2d import LineCanvas
from grid_planner import add_independent_line
from search_grid import Coordinate
from visualize_canvas import show_lines

logger = logging.getLogger(__name__)


class ClickCollector:
    """
    Collects clicked cells and hands them out in (start, goal) pairs.
    """

    def __init__(self):
        self._pending: Optional[Coordinate] = None

    @property
    def pending(self) -> Optional[Coordinate]:
        return self._pending

    def add(self, cell: Coordinate) -> Optional[Tuple[Coordinate, Coordinate]]:
        """
        Record one click. Returns the pair on every second click, else None.
        """
        if self._pending is None:
            self._pending = cell
            return None

        pair = (self._pending, cell)
        self._pending = None
        return pair


class LineDrawer:
    """
    Wires a LineCanvas to a matplotlib axes through mouse clicks.
    """

    def __init__(self, canvas: LineCanvas, ax=None):
        if ax is None:
            _, ax = plt.subplots()
        self.canvas = canvas
        self.ax = ax
        self.clicks = ClickCollector()
        self.routes: List[List[Coordinate]] = []

        self._cid = ax.figure.canvas.mpl_connect(
            "button_press_event", self.on_click
        )
        self.redraw()

    def disconnect(self) -> None:
        self.ax.figure.canvas.mpl_disconnect(self._cid)

    def on_click(self, event) -> Optional[List[Coordinate]]:
        """
        Handle one mouse press. Returns the new route after a second click.
        """
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            return None

        cell = self.canvas.point_to_cell(event.xdata, event.ydata)
        pair = self.clicks.add(cell)
        if pair is None:
            logger.debug("Start cell %s selected", cell)
            return None

        start, goal = pair
        path = add_independent_line(self.canvas, start, goal)
        if path:
            self.routes.append(path)
        else:
            print(f"No independent line from {start} to {goal}.")

        self.redraw()
        return path

    def redraw(self) -> None:
        show_lines(self.canvas, ax=self.ax)
        self.ax.figure.canvas.draw_idle()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Click two points to join them with a line that crosses no other line."
    )
    parser.add_argument("--width", type=int, default=64, help="Canvas width in cells.")
    parser.add_argument("--height", type=int, default=64, help="Canvas height in cells.")
    parser.add_argument(
        "--segments",
        type=int,
        default=0,
        help="Random obstacle segments drawn before the first click.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the obstacles.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    canvas = LineCanvas.random_canvas(
        num_segments=args.segments,
        width=args.width,
        height=args.height,
        seed=args.seed,
    )
    drawer = LineDrawer(canvas)
    print("Click two points to draw a line; close the window to quit.")
    plt.show()
    print(f"Drew {len(drawer.routes)} lines.")


if __name__ == "__main__":
    main()
