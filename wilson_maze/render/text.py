import sys
from typing import List, TextIO, Union

from wilson_maze.core.grid import Grid

H_WALL = '═'
V_WALL = '║'
PATH_MARK = '·'

def corner_glyph(row: int, col: int, height: int, width: int) -> str:
    """Junction glyph for the corner at (row, col) of a height x width cell grid."""
    top, bottom = row == 0, row == height
    left, right = col == 0, col == width
    if top:
        return '╔' if left else '╗' if right else '╦'
    if bottom:
        return '╚' if left else '╝' if right else '╩'
    if left:
        return '╠'
    if right:
        return '╣'
    return '╬'

def render_lines(grid: Grid, show_path: bool = False) -> List[str]:
    """
    Draws the maze on a (2*height+1) x (2*width+1) character canvas.
    Even/even positions are corners, odd/odd positions are cell interiors and the
    rest are the walls between them.
    """
    canvas = [[' '] * (grid.width * 2 + 1) for _ in range(grid.height * 2 + 1)]

    for r in range(grid.height + 1):
        for c in range(grid.width + 1):
            canvas[r * 2][c * 2] = corner_glyph(r, c, grid.height, grid.width)

    for row in range(grid.height):
        for col in range(grid.width):
            idx = row * grid.width + col
            cr, cc = row * 2 + 1, col * 2 + 1

            # Shared walls are written from both sides; the copies always agree
            if grid.has_wall(idx, Grid.NORTH):
                canvas[cr - 1][cc] = H_WALL
            if grid.has_wall(idx, Grid.SOUTH):
                canvas[cr + 1][cc] = H_WALL
            if grid.has_wall(idx, Grid.WEST):
                canvas[cr][cc - 1] = V_WALL
            if grid.has_wall(idx, Grid.EAST):
                canvas[cr][cc + 1] = V_WALL

            if show_path and grid.has_flag(idx, Grid.PATH):
                canvas[cr][cc] = PATH_MARK

    return [''.join(line) for line in canvas]

def render_text(grid: Grid, show_path: bool = False) -> str:
    return '\n'.join(render_lines(grid, show_path)) + '\n'

def write_text(grid: Grid, target: Union[str, TextIO], show_path: bool = False):
    """Writes the text rendering to a text stream, a file path, or stdout when target is '-'."""
    text = render_text(grid, show_path)
    if hasattr(target, "write"):
        target.write(text)
    elif target == '-':
        sys.stdout.write(text)
    else:
        with open(target, "w", encoding="utf-8") as f:
            f.write(text)
