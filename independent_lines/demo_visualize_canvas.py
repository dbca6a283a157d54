# demo_visualize_canvas.py
import random

import matplotlib.pyplot as plt
from canvas2d import LineCanvas
from grid_planner import add_independent_line
from visualize_canvas import show_lines


def main() -> None:
    canvas = LineCanvas.random_canvas(num_segments=9, width=64, height=64, seed=1)
    rng = random.Random(1)

    for _ in range(5):
        start = canvas.sample_free_cell(rng=rng)
        goal = canvas.sample_free_cell(rng=rng)
        path = add_independent_line(canvas, start, goal)
        if not path:
            print(f"No path found from {start} to {goal}.")
            continue
        print(f"Line from {start} to {goal}: {len(path)} steps")

    show_lines(canvas)
    plt.show()


if __name__ == "__main__":
    main()
