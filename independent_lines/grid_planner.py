import logging
from typing import Iterator, List, Sequence

from canvas2d import LineCanvas
from search_grid import CellState, Coordinate, Grid, traversal_cost
from search_request import SearchRequest

logger = logging.getLogger(__name__)

# 4-connected offsets in enumeration order: east, north, west, south.
# Equal f values keep this order because list.sort is stable.
NEIGHBOR_OFFSETS = ((1, 0), (0, 1), (-1, 0), (0, -1))


class PathFinderConsumedError(RuntimeError):
    """
    Raised when find_path() is called a second time on the same PathFinder.
    """


class PathFinder:
    """
    Depth-first grid search with locally sorted neighbors.

    This is not a priority-queue A*: each expanded cell sorts only its own
    admitted neighbors by f and descends into them in that order, unwinding
    one level whenever a branch is exhausted. The result is a walkable route
    but not necessarily the shortest one.

    A PathFinder owns the Grid built from its request and mutates the cell
    states while searching, so every instance runs exactly one search.
    """

    def __init__(self, request: SearchRequest):
        self.request = request
        self.grid = Grid(request.walkable, request.goal)

        self._start = self.grid.index_of(*request.start)
        self._goal = self.grid.index_of(*request.goal)
        self._consumed = False

        start_cell = self.grid.cells[self._start]
        start_cell.state = CellState.OPEN
        start_cell.g = 0.0

    def find_path(self) -> List[Coordinate]:
        """
        Run the search once.

        Returns
        -------
        path : list of (x, y) from the first step after start up to and
            including the goal. Empty if no route exists or if start and
            goal coincide.
        """
        if self._consumed:
            raise PathFinderConsumedError(
                "PathFinder instances are single-use; build a new one per search."
            )
        self._consumed = True

        if self._start == self._goal:
            return []

        if not self._search():
            logger.debug(
                "No route from %s to %s", self.request.start, self.request.goal
            )
            return []

        path = self._build_path()
        logger.debug(
            "Route from %s to %s has %d steps",
            self.request.start,
            self.request.goal,
            len(path),
        )
        return path

    def _search(self) -> bool:
        # Each frame is the iterator over one expanded cell's remaining
        # sorted candidates; the top frame is the deepest cell.
        stack: List[Iterator[int]] = [self._expand(self._start)]
        cells = self.grid.cells

        while stack:
            next_index = next(stack[-1], None)
            if next_index is None:
                stack.pop()
                continue

            if next_index == self._goal:
                return True

            # A deeper branch may have closed this candidate since it was
            # admitted.
            if cells[next_index].state is CellState.CLOSED:
                continue

            stack.append(self._expand(next_index))

        return False

    def _expand(self, index: int) -> Iterator[int]:
        """
        Close cell ``index`` and return its admitted neighbors, best f first.
        """
        self.grid.cells[index].state = CellState.CLOSED
        candidates = self._adjacent_walkable(index)
        candidates.sort(key=lambda i: self.grid.cells[i].f)
        return iter(candidates)

    def _adjacent_walkable(self, from_index: int) -> List[int]:
        """
        Neighbors of ``from_index`` that may form the next step of the route.

        Untested neighbors are opened with ``from_index`` as predecessor.
        Already-open neighbors are only admitted when going through
        ``from_index`` lowers their g.
        """
        grid = self.grid
        from_cell = grid.cells[from_index]
        fx, fy = from_cell.coordinate

        result: List[int] = []
        for dx, dy in NEIGHBOR_OFFSETS:
            x, y = fx + dx, fy + dy
            if not grid.in_bounds(x, y):
                continue

            index = grid.index_of(x, y)
            cell = grid.cells[index]
            if not cell.walkable:
                continue

            if cell.state is CellState.CLOSED:
                continue

            if cell.state is CellState.OPEN:
                tentative_g = from_cell.g + traversal_cost(
                    cell.coordinate, from_cell.coordinate
                )
                if tentative_g < cell.g:
                    grid.set_predecessor(index, from_index)
                    result.append(index)
            else:
                grid.set_predecessor(index, from_index)
                cell.state = CellState.OPEN
                result.append(index)

        return result

    def _build_path(self) -> List[Coordinate]:
        """
        Follow predecessors from the goal back to the start.

        The start itself has no predecessor and is left out.
        """
        path: List[Coordinate] = []
        cell = self.grid.cells[self._goal]
        while cell.predecessor is not None:
            path.append(cell.coordinate)
            cell = self.grid.cells[cell.predecessor]

        path.reverse()
        return path


def find_path(request: SearchRequest) -> List[Coordinate]:
    """
    Run a search on a fresh PathFinder.
    """
    return PathFinder(request).find_path()


def plan_route(
    canvas: LineCanvas,
    start: Sequence[int],
    goal: Sequence[int],
) -> List[Coordinate]:
    """
    High-level helper:
    1. Rasterize the lines already on the canvas into a walkability matrix.
    2. Search from start to goal around them.

    Returns
    -------
    path : list of (x, y) cells after start up to the goal, or [] if the
        goal cannot be reached.
    """
    walkable = canvas.get_walkability_grid()
    request = SearchRequest(start=start, goal=goal, walkable=walkable)
    return find_path(request)


def add_independent_line(
    canvas: LineCanvas,
    start: Sequence[int],
    goal: Sequence[int],
) -> List[Coordinate]:
    """
    Plan a route that crosses none of the canvas lines and add it as a line.

    The stored line starts at ``start`` so the whole drawn route blocks later
    searches. Nothing is stored when no route exists.
    """
    path = plan_route(canvas, start, goal)
    if path:
        canvas.add_line([tuple(start)] + path)
        logger.info("Added line from %s to %s (%d cells)", start, goal, len(path) + 1)
    else:
        logger.info("No independent line from %s to %s", start, goal)
    return path
