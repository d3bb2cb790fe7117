import logging
import time
from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

from wilson_maze.core.errors import MazeConfigError, MazeInvariantError
from wilson_maze.core.grid import Grid, NO_CELL

logger = logging.getLogger(__name__)

class Solver(ABC):
    def __init__(self, grid: Grid):
        self.grid = grid
        self.path: List[Tuple[int, int]] = []
        # Visited state lives in the Grid.VISITED bit
        self.visited_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        pass

    def run_all(self) -> List[Tuple[int, int]]:
        for _ in self.run():
            pass
        return self.path

class DepthFirstSolver(Solver):
    """
    Explicit-stack DFS from the entrance to the exit.
    The passage graph is a tree, so the first path found is the only one.
    """

    def run(self) -> Iterator[str]:
        grid = self.grid
        start, end = grid.entrance, grid.exit
        if start == NO_CELL or end == NO_CELL:
            raise MazeConfigError("maze has no entrance/exit to solve between")

        started = time.perf_counter()
        self.path = []
        grid.reset_solver_state()
        came_from = grid.came_from

        stack = [start]
        grid.set_flag(start, Grid.VISITED)
        self.visited_count = 1

        while stack[-1] != end:
            current = stack.pop()

            # Shortcut: exit is one step south, push it and stop expanding
            south = grid.neighbor(current, Grid.SOUTH)
            if south == end and grid.is_open(current, Grid.SOUTH):
                self._push(stack, south, current)
                break

            for direction in Grid.DIRECTIONS:
                if grid.is_open(current, direction):
                    nxt = grid.neighbor(current, direction)
                    if not grid.has_flag(nxt, Grid.VISITED):
                        self._push(stack, nxt, current)

            if not stack:
                raise MazeInvariantError(
                    f"exit {grid.coords(end)} is unreachable from entrance {grid.coords(start)}"
                )

            if self.visited_count % 100 == 0:
                yield f"Visited: {self.visited_count}"

        # Flag the path from the exit back to the entrance, both ends inclusive
        current = end
        while current != NO_CELL:
            grid.set_flag(current, Grid.PATH)
            self.path.append(grid.coords(current))
            current = came_from[current]
        self.path.reverse()

        logger.debug(f"solved {grid.height} x {grid.width} maze in {time.perf_counter() - started:.4f}s "
                     f"(path {len(self.path)}, visited {self.visited_count})")
        yield "Solved"

    def _push(self, stack: List[int], idx: int, parent: int):
        self.grid.set_flag(idx, Grid.VISITED)
        self.grid.came_from[idx] = parent
        self.visited_count += 1
        stack.append(idx)

def solve_maze(grid: Grid) -> List[Tuple[int, int]]:
    """Solves a generated grid in place and returns the (row, col) path."""
    return DepthFirstSolver(grid).run_all()
