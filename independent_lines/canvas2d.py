import logging
import random
from typing import List, Optional, Sequence, Tuple

import numpy as np

from search_grid import Coordinate

Line = List[Coordinate]

logger = logging.getLogger(__name__)


class LineCanvas:
    """
    Drawing surface of width x height cells holding the lines drawn so far.

    A line is a polyline of cells: either an obstacle segment drawn by the
    user or a route accepted by the planner. Every cell a line covers is
    unwalkable for later searches; every other cell is walkable.
    """

    def __init__(
        self,
        width: int = 64,
        height: int = 64,
        lines: Optional[List[Line]] = None,
    ):
        """
        Parameters
        ----------
        width, height : int
            Canvas size in cells.
        lines : list of lines, optional
            Lines already on the canvas.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}.")

        self.width = width
        self.height = height
        self.lines: List[Line] = []
        for line in lines or []:
            self.add_line(line)

    @classmethod
    def random_canvas(
        cls,
        num_segments: int = 3,
        width: int = 64,
        height: int = 64,
        min_length: float = 0.1,
        max_length: float = 0.4,
        seed: Optional[int] = None,
    ) -> "LineCanvas":
        """
        Create a canvas with a few random straight obstacle segments.

        Each segment:
          - length is sampled in [min_length, max_length] of the shorter
            canvas side
          - direction is uniform, and the end point is clamped into the canvas
        """
        rng = random.Random(seed)
        canvas = cls(width=width, height=height)
        side = min(width, height)

        for _ in range(num_segments):
            x0 = rng.uniform(0, width - 1)
            y0 = rng.uniform(0, height - 1)
            length = rng.uniform(min_length, max_length) * side
            angle = rng.uniform(0, 2 * np.pi)
            x1 = min(max(x0 + length * np.cos(angle), 0), width - 1)
            y1 = min(max(y0 + length * np.sin(angle), 0), height - 1)
            canvas.add_segment((x0, y0), (x1, y1))

        return canvas

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def point_to_cell(self, x: float, y: float) -> Coordinate:
        """
        Map a continuous canvas position (e.g. a mouse click) to a cell.

        Cell (i, j) covers [i - 0.5, i + 0.5) x [j - 0.5, j + 0.5), matching
        how matplotlib centres image pixels; the result is clamped into the
        canvas.
        """
        return (
            min(max(int(np.floor(x + 0.5)), 0), self.width - 1),
            min(max(int(np.floor(y + 0.5)), 0), self.height - 1),
        )

    def add_line(self, points: Sequence[Sequence[int]]) -> None:
        """
        Store a polyline of cells. Empty lines are ignored.
        """
        line: Line = [(int(x), int(y)) for x, y in points]
        if not line:
            return
        for x, y in line:
            if not self.in_bounds(x, y):
                raise ValueError(
                    f"Line cell {(x, y)} lies outside the {self.width}x{self.height} canvas."
                )
        self.lines.append(line)

    def add_segment(
        self,
        p0: Tuple[float, float],
        p1: Tuple[float, float],
        num_samples: Optional[int] = None,
    ) -> Line:
        """
        Rasterize the straight segment p0 -> p1 and store it as a line.

        Implementation:
          - Sample num_samples+1 points along the segment using linear
            interpolation:
                t in [0, 1], x = (1 - t)*x0 + t*x1, y similar
          - Map each sample to its cell and keep the distinct cells in order.

        By default two samples per cell of segment length are taken, which
        leaves no gaps between consecutive cells.
        """
        x0, y0 = p0
        x1, y1 = p1
        if num_samples is None:
            num_samples = max(1, int(np.ceil(2 * max(abs(x1 - x0), abs(y1 - y0)))))

        line: Line = []
        for i in range(num_samples + 1):
            t = i / num_samples
            cell = self.point_to_cell((1 - t) * x0 + t * x1, (1 - t) * y0 + t * y1)
            if not line or line[-1] != cell:
                line.append(cell)

        self.add_line(line)
        logger.debug("Added segment %s -> %s covering %d cells", p0, p1, len(line))
        return line

    def get_walkability_grid(self) -> np.ndarray:
        """
        Build and return a fresh walkability matrix of shape (height, width).

        Convention:
          - grid[y, x] corresponds to cell (x, y)
          - grid[y, x] = False if any line covers that cell, else True
        """
        grid = np.ones((self.height, self.width), dtype=bool)
        for line in self.lines:
            for x, y in line:
                grid[y, x] = False
        return grid

    def is_cell_blocked(self, x: int, y: int) -> bool:
        """
        Return True if (x, y) is outside the canvas or covered by a line.
        """
        if not self.in_bounds(x, y):
            return True
        return any((x, y) in line for line in self.lines)

    def sample_free_cell(
        self,
        max_tries: int = 1000,
        rng: Optional[random.Random] = None,
    ) -> Coordinate:
        """
        Randomly sample a cell no line covers.

        Algorithm:
          - Try up to max_tries times:
              * sample x, y uniformly over the canvas cells
              * if not blocked, return (x, y)
          - If we fail max_tries times in a row, raise RuntimeError.
        """
        rng = rng or random.Random()
        grid = self.get_walkability_grid()
        for _ in range(max_tries):
            x = rng.randrange(self.width)
            y = rng.randrange(self.height)
            if grid[y, x]:
                return (x, y)
        raise RuntimeError("Failed to sample a free cell within max_tries.")
