from typing import Iterator, Tuple

from wilson_maze.core.grid import Grid

Point = Tuple[int, int]
Segment = Tuple[Point, Point]

def gutter_for(scale: int) -> int:
    return max(scale // 2, 5)

def canvas_size(grid: Grid, scale: int) -> Tuple[int, int]:
    """(width, height) in pixels/user units, including the gutter on every side."""
    gutter = gutter_for(scale)
    return grid.width * scale + gutter * 2, grid.height * scale + gutter * 2

def cell_corners(row: int, col: int, scale: int, gutter: int) -> Tuple[Point, Point, Point, Point]:
    """NW, NE, SE, SW corners of a cell."""
    x0 = col * scale + gutter
    y0 = row * scale + gutter
    x1, y1 = x0 + scale, y0 + scale
    return (x0, y0), (x1, y0), (x1, y1), (x0, y1)

def wall_segments(grid: Grid, scale: int) -> Iterator[Segment]:
    """
    Yields one segment per wall still standing.
    Shared walls are taken from the north/west side only, so each appears once.
    """
    gutter = gutter_for(scale)
    for row in range(grid.height):
        for col in range(grid.width):
            idx = row * grid.width + col
            nw, ne, se, sw = cell_corners(row, col, scale, gutter)

            if grid.has_wall(idx, Grid.NORTH):
                yield nw, ne
            if grid.has_wall(idx, Grid.WEST):
                yield sw, nw
            if col == grid.width - 1 and grid.has_wall(idx, Grid.EAST):
                yield ne, se
            if row == grid.height - 1 and grid.has_wall(idx, Grid.SOUTH):
                yield se, sw

def path_cells(grid: Grid, scale: int) -> Iterator[Tuple[Point, Point]]:
    """Yields (NW, SE) corners of every cell flagged as on the solved path."""
    gutter = gutter_for(scale)
    for idx in range(len(grid)):
        if grid.has_flag(idx, Grid.PATH):
            row, col = grid.coords(idx)
            nw, _, se, _ = cell_corners(row, col, scale, gutter)
            yield nw, se
