from array import array
from typing import Iterator, List, Optional, Tuple

from wilson_maze.core.errors import MazeInvariantError, validate_dimensions

# Marker for an empty pointer slot and for a missing neighbor at the boundary
NO_CELL = -1

class Grid:
    # Bitmask Constants
    NORTH = 0b000000001
    EAST  = 0b000000010
    SOUTH = 0b000000100
    WEST  = 0b000001000

    # Flags
    MEMBER   = 0b000010000 # Part of the spanning tree
    ENTRANCE = 0b000100000
    EXIT     = 0b001000000
    VISITED  = 0b010000000 # Solver only
    PATH     = 0b100000000 # Solver only

    # All walls present by default (N|E|S|W) = 15
    ALL_WALLS = NORTH | EAST | SOUTH | WEST
    SOLVER_FLAGS = VISITED | PATH

    # Fixed order used for neighborhoods and for the solver's expansion
    DIRECTIONS = (NORTH, EAST, SOUTH, WEST)

    # Direction Helpers
    DROW = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    DCOL = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}
    NAMES = {NORTH: "north", EAST: "east", SOUTH: "south", WEST: "west"}

    __slots__ = ('height', 'width', 'cells', 'walk_to', 'came_from',
                 'neighborhoods', 'entrance', 'exit', '_no_cell')

    def __init__(self, height: int, width: int):
        validate_dimensions(height, width)
        self.height = height
        self.width = width
        size = height * width
        # 'H' (unsigned short): 4 wall bits + 5 flag bits per cell
        self.cells = array('H', [self.ALL_WALLS] * size)
        # Two separate pointer fields so generation and solving never share state.
        # walk_to: next step of the current loop-erased walk
        # came_from: predecessor on the path found by the solver
        self.walk_to = array('i', [NO_CELL] * size)
        self.came_from = array('i', [NO_CELL] * size)
        # Template copied in bulk by the resets, which run once per walk
        self._no_cell = array('i', [NO_CELL]) * size
        self.entrance = NO_CELL
        self.exit = NO_CELL

        # Links never change after construction, so the neighborhoods are built once
        self.neighborhoods: List[Tuple[int, ...]] = []
        for idx in range(size):
            self.neighborhoods.append(tuple(
                n for n in (self.neighbor(idx, d) for d in self.DIRECTIONS) if n != NO_CELL
            ))

    def __len__(self) -> int:
        return len(self.cells)

    def index(self, row: int, col: int) -> int:
        if 0 <= row < self.height and 0 <= col < self.width:
            return row * self.width + col
        raise IndexError(f"Cell ({row}, {col}) out of bounds")

    def coords(self, idx: int) -> Tuple[int, int]:
        return divmod(idx, self.width)

    def neighbor(self, idx: int, direction: int) -> int:
        """Index of the grid-adjacent cell in 'direction', or NO_CELL at the boundary."""
        row, col = divmod(idx, self.width)
        row += self.DROW[direction]
        col += self.DCOL[direction]
        if 0 <= row < self.height and 0 <= col < self.width:
            return row * self.width + col
        return NO_CELL

    def neighborhood(self, idx: int) -> Tuple[int, ...]:
        return self.neighborhoods[idx]

    def direction_to(self, a: int, b: int) -> int:
        for direction in self.DIRECTIONS:
            if self.neighbor(a, direction) == b:
                return direction
        raise MazeInvariantError(f"cells {self.coords(a)} and {self.coords(b)} are not adjacent")

    def all_cells(self) -> List[int]:
        """Every cell index in row-major order. Only used as a base for shuffling."""
        return list(range(len(self.cells)))

    def reset_walk_pointers(self):
        self.walk_to[:] = self._no_cell

    def reset_solver_state(self):
        self.came_from[:] = self._no_cell
        clear = ~self.SOLVER_FLAGS
        self.cells[:] = array('H', (val & clear for val in self.cells))

    def carve(self, idx: int, direction: int):
        """
        Removes the wall between cell 'idx' and its neighbor in 'direction'.
        Also removes the OPPOSITE wall from the neighbor.
        """
        other = self.neighbor(idx, direction)
        if other == NO_CELL:
            raise MazeInvariantError(
                f"cannot carve {self.NAMES[direction]} out of {self.coords(idx)}: no neighbor"
            )
        self.cells[idx] &= ~direction
        self.cells[other] &= ~self.OPPOSITE[direction]

    def open_boundary(self, idx: int, direction: int):
        """Opens an outward-facing wall. Only legal along the edge of the grid."""
        if self.neighbor(idx, direction) != NO_CELL:
            raise MazeInvariantError(
                f"{self.NAMES[direction]} wall of {self.coords(idx)} is not on the boundary"
            )
        self.cells[idx] &= ~direction

    def has_wall(self, idx: int, direction: int) -> bool:
        return (self.cells[idx] & direction) != 0

    def is_open(self, idx: int, direction: int) -> bool:
        """True when a neighbor exists in 'direction' and no wall separates them."""
        return not (self.cells[idx] & direction) and self.neighbor(idx, direction) != NO_CELL

    def set_flag(self, idx: int, flag: int):
        self.cells[idx] |= flag

    def clear_flag(self, idx: int, flag: int):
        self.cells[idx] &= ~flag

    def has_flag(self, idx: int, flag: int) -> bool:
        return (self.cells[idx] & flag) != 0

    def open_neighbors(self, idx: int) -> Iterator[int]:
        """Yields neighbor indices reachable through an open passage, in N, E, S, W order."""
        for direction in self.DIRECTIONS:
            if self.is_open(idx, direction):
                yield self.neighbor(idx, direction)

    def open_passage_count(self) -> int:
        """Number of internal wall pairs that have been removed."""
        count = 0
        for idx in range(len(self.cells)):
            # Each shared edge is counted once, from its northern/western side
            if self.is_open(idx, self.EAST):
                count += 1
            if self.is_open(idx, self.SOUTH):
                count += 1
        return count

    def wall_signature(self) -> bytes:
        """The wall bits of every cell, row-major. Equal signatures mean equal mazes."""
        return bytes(val & self.ALL_WALLS for val in self.cells)

    def cell(self, row: int, col: int) -> "Cell":
        return Cell(self, self.index(row, col))

    def cells_view(self) -> Iterator["Cell"]:
        for idx in range(len(self.cells)):
            yield Cell(self, idx)

    def rows(self) -> Iterator[List["Cell"]]:
        for row in range(self.height):
            yield [Cell(self, row * self.width + col) for col in range(self.width)]

class Cell:
    """Read-only view of one cell, for renderers and other collaborators."""

    __slots__ = ('grid', 'idx')

    def __init__(self, grid: Grid, idx: int):
        self.grid = grid
        self.idx = idx

    def __repr__(self):
        return f"Cell(row={self.row}, col={self.col}, walls={self.walls})"

    def __eq__(self, other):
        return isinstance(other, Cell) and other.grid is self.grid and other.idx == self.idx

    def __hash__(self):
        return hash((id(self.grid), self.idx))

    @property
    def row(self) -> int:
        return self.idx // self.grid.width

    @property
    def col(self) -> int:
        return self.idx % self.grid.width

    @property
    def north(self) -> bool:
        return self.grid.has_wall(self.idx, Grid.NORTH)

    @property
    def east(self) -> bool:
        return self.grid.has_wall(self.idx, Grid.EAST)

    @property
    def south(self) -> bool:
        return self.grid.has_wall(self.idx, Grid.SOUTH)

    @property
    def west(self) -> bool:
        return self.grid.has_wall(self.idx, Grid.WEST)

    @property
    def walls(self) -> Tuple[bool, bool, bool, bool]:
        return (self.north, self.east, self.south, self.west)

    @property
    def member(self) -> bool:
        return self.grid.has_flag(self.idx, Grid.MEMBER)

    @property
    def entrance(self) -> bool:
        return self.grid.has_flag(self.idx, Grid.ENTRANCE)

    @property
    def exit(self) -> bool:
        return self.grid.has_flag(self.idx, Grid.EXIT)

    @property
    def visited(self) -> bool:
        return self.grid.has_flag(self.idx, Grid.VISITED)

    @property
    def on_path(self) -> bool:
        return self.grid.has_flag(self.idx, Grid.PATH)

    @property
    def neighbors(self) -> List["Cell"]:
        return [Cell(self.grid, n) for n in self.grid.neighborhood(self.idx)]

    def neighbor(self, direction: int) -> Optional["Cell"]:
        """Adjacent cell in 'direction' (Grid.NORTH etc.), or None at the boundary."""
        other = self.grid.neighbor(self.idx, direction)
        return Cell(self.grid, other) if other != NO_CELL else None
