from typing import TextIO, Union

import svgwrite

from wilson_maze.core.errors import validate_scale
from wilson_maze.core.grid import Grid
from wilson_maze.render.segments import canvas_size, path_cells, wall_segments

COLOR_BG = "white"
COLOR_WALL = "black"
COLOR_SOLUTION = "gold"
WALL_WIDTH = 3

def build_drawing(grid: Grid, scale: int = 20, show_path: bool = True) -> svgwrite.Drawing:
    """Same wall segments as the raster renderer, as SVG line elements."""
    validate_scale(scale)
    width, height = canvas_size(grid, scale)

    dwg = svgwrite.Drawing(size=(width, height))
    dwg.viewbox(0, 0, width, height)
    dwg.add(dwg.rect((0, 0), (width, height), fill=COLOR_BG))

    if show_path:
        path = dwg.g(id="path", fill=COLOR_SOLUTION)
        for (x0, y0), (x1, y1) in path_cells(grid, scale):
            path.add(dwg.rect((x0, y0), (x1 - x0, y1 - y0)))
        dwg.add(path)

    walls = dwg.g(id="walls", stroke=COLOR_WALL, stroke_width=WALL_WIDTH, stroke_linecap="square")
    for p1, p2 in wall_segments(grid, scale):
        walls.add(dwg.line(p1, p2))
    dwg.add(walls)

    return dwg

def render_svg(grid: Grid, scale: int = 20, show_path: bool = True) -> str:
    return build_drawing(grid, scale, show_path).tostring()

def write_svg(grid: Grid, target: Union[str, TextIO], scale: int = 20, show_path: bool = True):
    dwg = build_drawing(grid, scale, show_path)
    if hasattr(target, "write"):
        dwg.write(target)
    else:
        with open(target, "w", encoding="utf-8") as f:
            dwg.write(f)
