import logging
import random
import time
from typing import Iterator, Optional

from wilson_maze.core.errors import MazeInvariantError, validate_dimensions, validate_gate
from wilson_maze.core.grid import Grid, NO_CELL
from wilson_maze.algo.base import Generator

logger = logging.getLogger(__name__)

class WilsonsAlgorithm(Generator):
    """
    Uniform spanning tree via loop-erased random walks.

    Every cell is pushed onto a shuffled work queue. The first cell seeds the tree;
    each later cell that is not yet in the tree starts a random walk that runs until
    it hits the tree. Each visited cell remembers only the direction it was most
    recently left by, so retracing the walk from its start follows the loop-erased
    path and carves it into the tree.

    The walk has no step limit. On a finite connected grid it reaches the tree with
    probability 1, so the worst case is unbounded.
    """

    def __init__(self, grid: Grid, seed: Optional[int] = None, rng: Optional[random.Random] = None,
                 place_openings: bool = True):
        super().__init__(grid, seed, rng)
        self.place_openings = place_openings
        # Fail before touching the grid if there is no room for the openings
        self.gate = validate_gate(grid.width) if place_openings else 0
        self.walk_count = 0
        self.skipped = 0

    def run(self) -> Iterator[str]:
        grid = self.grid
        started = time.perf_counter()

        # The shuffled cells double as the work queue, consumed front to back
        queue = grid.all_cells()
        self.rng.shuffle(queue)

        # Any cell can seed the tree, so take the first one
        grid.set_flag(queue[0], Grid.MEMBER)
        members = 1
        total = len(queue)

        for start in queue[1:]:
            if grid.has_flag(start, Grid.MEMBER):
                # Absorbed by an earlier retrace
                self.skipped += 1
                continue

            steps = self.step_count
            self.loop_erased_walk(start)
            # The finished walk is still visible through walk_to before it is carved
            yield f"Walk: {self.step_count - steps} steps"
            members += self.retrace(start)
            self.walk_count += 1
            yield f"Tree: {members}/{total}"

        if self.place_openings:
            self.add_openings()

        logger.debug(f"generated {grid.height} x {grid.width} maze in {time.perf_counter() - started:.4f}s "
                     f"({self.walk_count} walks, {self.step_count} steps, {self.skipped} skipped)")
        yield "Done"

    def loop_erased_walk(self, start: int):
        """
        Walks at random from 'start' until a tree member is reached.
        Revisiting a cell overwrites its walk pointer, which erases the loop.
        """
        grid = self.grid
        walk_to = grid.walk_to
        grid.reset_walk_pointers()

        current = start
        while not grid.has_flag(current, Grid.MEMBER):
            neighborhood = grid.neighborhood(current)
            if not neighborhood:
                raise MazeInvariantError(f"random walk stuck at {grid.coords(current)}: empty neighborhood")
            nxt = self.rng.choice(neighborhood)
            if nxt == NO_CELL:
                raise MazeInvariantError(f"random walk from {grid.coords(current)} hit a missing neighbor")
            walk_to[current] = nxt
            current = nxt
            self.step_count += 1

    def retrace(self, start: int) -> int:
        """
        Follows the walk pointers forward from 'start', carving each step and adding
        cells to the tree until a member is reached. Returns the number of cells added.
        """
        grid = self.grid
        added = 0
        current = start
        while not grid.has_flag(current, Grid.MEMBER):
            nxt = grid.walk_to[current]
            grid.carve(current, grid.direction_to(current, nxt))
            grid.set_flag(current, Grid.MEMBER)
            added += 1
            current = nxt
        return added

    def add_openings(self):
        """
        Entrance on the north edge within the western sixth of the columns,
        exit on the south edge within the eastern sixth.
        """
        grid = self.grid
        entrance_col = self.rng.randrange(self.gate)
        exit_col = grid.width - 1 - self.rng.randrange(self.gate)

        entrance = grid.index(0, entrance_col)
        grid.set_flag(entrance, Grid.ENTRANCE)
        grid.open_boundary(entrance, Grid.NORTH)
        grid.entrance = entrance

        exit_ = grid.index(grid.height - 1, exit_col)
        grid.set_flag(exit_, Grid.EXIT)
        grid.open_boundary(exit_, Grid.SOUTH)
        grid.exit = exit_

def rectangle_maze(height: int, width: int, seed: Optional[int] = None, solve: bool = False) -> Grid:
    """Builds a height x width maze with an entrance and exit, optionally solved."""
    validate_dimensions(height, width)
    validate_gate(width)

    grid = Grid(height, width)
    WilsonsAlgorithm(grid, seed=seed).run_all()

    if solve:
        from wilson_maze.algo.solvers import solve_maze
        solve_maze(grid)
    return grid

def square_maze(size: int, seed: Optional[int] = None, solve: bool = False) -> Grid:
    return rectangle_maze(size, size, seed=seed, solve=solve)
