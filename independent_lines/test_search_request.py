# test_search_request.py
import dataclasses

import numpy as np
import pytest
from search_request import InvalidSearchRequest, SearchRequest


def test_nested_lists_become_boolean_matrix() -> None:
    request = SearchRequest(
        start=[0, 0],
        goal=(2, 1),
        walkable=[[1, 1, 0], [1, 1, 1]],
    )

    assert request.start == (0, 0)
    assert request.goal == (2, 1)
    assert request.walkable.dtype == bool
    assert request.walkable.shape == (2, 3)
    assert (request.width, request.height) == (3, 2)


def test_numpy_matrix_is_viewed_read_only() -> None:
    walkable = np.ones((3, 4), dtype=bool)
    request = SearchRequest(start=(0, 0), goal=(3, 2), walkable=walkable)

    assert np.shares_memory(request.walkable, walkable)
    assert request.walkable.flags.writeable is False
    assert walkable.flags.writeable is True


def test_numpy_integer_coordinates_are_accepted() -> None:
    request = SearchRequest(
        start=np.array([1, 2]),
        goal=(np.int64(0), np.int64(0)),
        walkable=np.ones((3, 3), dtype=bool),
    )

    assert request.start == (1, 2)
    assert type(request.start[0]) is int


def test_request_is_immutable() -> None:
    request = SearchRequest(start=(0, 0), goal=(1, 0), walkable=[[True, True]])

    with pytest.raises(dataclasses.FrozenInstanceError):
        request.start = (1, 0)


def test_ragged_matrix_is_rejected() -> None:
    with pytest.raises(InvalidSearchRequest):
        SearchRequest(start=(0, 0), goal=(1, 0), walkable=[[True, True], [True]])


@pytest.mark.parametrize(
    "walkable",
    [[], [[]], np.zeros((0, 4), dtype=bool), np.ones(5, dtype=bool)],
)
def test_empty_or_flat_matrix_is_rejected(walkable) -> None:
    with pytest.raises(InvalidSearchRequest):
        SearchRequest(start=(0, 0), goal=(0, 0), walkable=walkable)


@pytest.mark.parametrize(
    "start, goal",
    [
        ((3, 0), (0, 0)),
        ((0, 2), (0, 0)),
        ((0, 0), (-1, 0)),
        ((0, 0), (0, 5)),
    ],
)
def test_coordinates_outside_grid_are_rejected(start, goal) -> None:
    with pytest.raises(InvalidSearchRequest):
        SearchRequest(start=start, goal=goal, walkable=np.ones((2, 3), dtype=bool))


@pytest.mark.parametrize("bad", [(1.5, 0), (0,), (0, 0, 0), "ab", None])
def test_malformed_coordinates_are_rejected(bad) -> None:
    with pytest.raises(InvalidSearchRequest):
        SearchRequest(start=bad, goal=(0, 0), walkable=np.ones((2, 3), dtype=bool))


def test_invalid_request_is_a_value_error() -> None:
    assert issubclass(InvalidSearchRequest, ValueError)
