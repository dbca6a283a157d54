# test_line_drawer.py
from types import SimpleNamespace

import matplotlib.pyplot as plt
from canvas2d import LineCanvas
from line_drawer import ClickCollector, LineDrawer, parse_args


def click(ax, x, y):
    return SimpleNamespace(inaxes=ax, xdata=x, ydata=y)


def test_click_collector_pairs_clicks() -> None:
    clicks = ClickCollector()

    assert clicks.add((0, 0)) is None
    assert clicks.pending == (0, 0)
    assert clicks.add((3, 4)) == ((0, 0), (3, 4))
    assert clicks.pending is None
    assert clicks.add((1, 1)) is None


def test_two_clicks_draw_a_line() -> None:
    canvas = LineCanvas(width=5, height=5)
    _, ax = plt.subplots()
    drawer = LineDrawer(canvas, ax=ax)

    assert drawer.on_click(click(ax, 0.2, 0.1)) is None
    path = drawer.on_click(click(ax, 4.1, -0.2))

    assert path == [(1, 0), (2, 0), (3, 0), (4, 0)]
    assert drawer.routes == [path]
    assert canvas.lines == [[(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]]
    assert len(ax.lines) == 1


def test_clicks_outside_the_axes_are_ignored() -> None:
    canvas = LineCanvas(width=5, height=5)
    _, ax = plt.subplots()
    drawer = LineDrawer(canvas, ax=ax)

    drawer.on_click(click(ax, 1.0, 1.0))
    assert drawer.on_click(click(None, 3.0, 3.0)) is None
    assert drawer.on_click(click(ax, None, None)) is None

    assert drawer.clicks.pending == (1, 1)
    assert canvas.lines == []


def test_unreachable_pair_is_reported_and_dropped(capsys) -> None:
    canvas = LineCanvas(width=5, height=5)
    canvas.add_segment((0, 2), (4, 2))
    _, ax = plt.subplots()
    drawer = LineDrawer(canvas, ax=ax)

    drawer.on_click(click(ax, 2, 0))
    path = drawer.on_click(click(ax, 2, 4))

    assert path == []
    assert drawer.routes == []
    assert len(canvas.lines) == 1
    assert "No independent line" in capsys.readouterr().out


def test_parse_args_defaults() -> None:
    args = parse_args([])

    assert (args.width, args.height) == (64, 64)
    assert args.segments == 0
    assert args.seed is None
    assert args.log_level == "WARNING"


def test_parse_args_overrides() -> None:
    args = parse_args(["--width", "32", "--height", "16", "--segments", "4", "--seed", "2"])

    assert (args.width, args.height, args.segments, args.seed) == (32, 16, 4, 2)
