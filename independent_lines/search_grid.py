import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

Coordinate = Tuple[int, int]  # (x, y) where x is the column, y is the row


class CellState(Enum):
    """
    Search bookkeeping state of a cell.

    Transitions only go forward: UNTESTED -> OPEN -> CLOSED.
    """

    UNTESTED = "untested"
    OPEN = "open"
    CLOSED = "closed"


def heuristic(a: Coordinate, b: Coordinate) -> float:
    """
    Straight-line (Euclidean) distance between two grid cells.
    """
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)


def traversal_cost(a: Coordinate, b: Coordinate) -> float:
    """
    Cost of moving between two adjacent cells.

    Euclidean length of the offset, so every orthogonal move costs 1.0.
    """
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)


@dataclass
class Cell:
    """
    One grid position plus the search bookkeeping attached to it.

    Attributes
    ----------
    coordinate : (x, y)
        Fixed at creation.
    walkable : bool
        Copied from the walkability matrix.
    h : float
        Distance estimate to the goal, computed once at creation.
    g : float
        Cost from the start along the current predecessor chain.
    state : CellState
    predecessor : int or None
        Linear index of the previous cell in the grid (not an owning link).
    """

    coordinate: Coordinate
    walkable: bool
    h: float
    g: float = 0.0
    state: CellState = CellState.UNTESTED
    predecessor: Optional[int] = None

    @property
    def f(self) -> float:
        return self.g + self.h


class Grid:
    """
    Dense width x height collection of cells for one search.

    Cells live in a flat list addressed by ``y * width + x``.
    """

    def __init__(self, walkable: np.ndarray, goal: Coordinate):
        """
        Parameters
        ----------
        walkable : np.ndarray of shape (H, W), dtype bool
            True = passable. Indexed walkable[y, x].
        goal : (x, y)
            Goal coordinate every cell's heuristic is measured against.
        """
        self.height, self.width = walkable.shape
        self.goal = goal

        self.cells: List[Cell] = []
        for y in range(self.height):
            for x in range(self.width):
                self.cells.append(
                    Cell(
                        coordinate=(x, y),
                        walkable=bool(walkable[y, x]),
                        h=heuristic((x, y), goal),
                    )
                )

    def __len__(self) -> int:
        return len(self.cells)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index_of(self, x: int, y: int) -> int:
        return y * self.width + x

    def coordinate_of(self, index: int) -> Coordinate:
        return (index % self.width, index // self.width)

    def cell_at(self, x: int, y: int) -> Cell:
        return self.cells[self.index_of(x, y)]

    def set_predecessor(self, index: int, predecessor: int) -> None:
        """
        Point cell ``index`` back at ``predecessor`` and recompute its g.

        g and predecessor always change together.
        """
        cell = self.cells[index]
        parent = self.cells[predecessor]
        cell.predecessor = predecessor
        cell.g = parent.g + traversal_cost(cell.coordinate, parent.coordinate)
