import operator
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from search_grid import Coordinate

WalkabilityLike = Union[np.ndarray, Sequence[Sequence[bool]]]


class InvalidSearchRequest(ValueError):
    """
    Raised when a search request cannot describe a valid search:
    a non-rectangular or empty matrix, or a start/goal outside of it.
    """


def as_walkability_matrix(walkable: WalkabilityLike) -> np.ndarray:
    """
    Convert ``walkable`` into a read-only boolean array of shape (H, W).

    numpy arrays are viewed rather than copied; nested sequences must be
    rectangular.
    """
    if not isinstance(walkable, np.ndarray):
        rows = [list(row) for row in walkable]
        if rows and any(len(row) != len(rows[0]) for row in rows):
            raise InvalidSearchRequest("Walkability matrix rows differ in length.")
        walkable = np.array(rows, dtype=bool)

    if walkable.ndim != 2:
        raise InvalidSearchRequest(
            f"Walkability matrix must be 2D, got shape {walkable.shape}."
        )
    if walkable.size == 0:
        raise InvalidSearchRequest(
            f"Walkability matrix must not be empty, got shape {walkable.shape}."
        )

    matrix = walkable.astype(bool, copy=False).view()
    matrix.flags.writeable = False
    return matrix


def as_coordinate(value: Sequence[int], name: str) -> Coordinate:
    try:
        x, y = value
        return (operator.index(x), operator.index(y))
    except (TypeError, ValueError) as exc:
        raise InvalidSearchRequest(
            f"{name} must be an (x, y) pair of integers, got {value!r}."
        ) from exc


@dataclass(frozen=True, eq=False)
class SearchRequest:
    """
    Immutable input of one search.

    Attributes
    ----------
    start, goal : (x, y)
        Both must lie inside [0, width) x [0, height).
    walkable : np.ndarray of shape (H, W), dtype bool
        True = passable. Indexed walkable[y, x]. Converted on construction
        into a read-only view of the caller's matrix.
    """

    start: Coordinate
    goal: Coordinate
    walkable: WalkabilityLike

    def __post_init__(self) -> None:
        matrix = as_walkability_matrix(self.walkable)
        start = as_coordinate(self.start, "start")
        goal = as_coordinate(self.goal, "goal")

        height, width = matrix.shape
        for name, (x, y) in (("start", start), ("goal", goal)):
            if not (0 <= x < width and 0 <= y < height):
                raise InvalidSearchRequest(
                    f"{name} {(x, y)} lies outside the {width}x{height} grid."
                )

        object.__setattr__(self, "start", start)
        object.__setattr__(self, "goal", goal)
        object.__setattr__(self, "walkable", matrix)

    @property
    def width(self) -> int:
        return self.walkable.shape[1]

    @property
    def height(self) -> int:
        return self.walkable.shape[0]
