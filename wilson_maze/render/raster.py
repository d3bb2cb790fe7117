import logging
from typing import BinaryIO, Union

import cv2
import numpy as np

from wilson_maze.core.errors import validate_scale
from wilson_maze.core.grid import Grid
from wilson_maze.render.segments import canvas_size, path_cells, wall_segments

logger = logging.getLogger(__name__)

# OpenCV images are BGR
COLOR_BG = (255, 255, 255)
COLOR_WALL = (0, 0, 0)
COLOR_SOLUTION = (0, 215, 255) # Gold
WALL_WIDTH = 3

def render_image(grid: Grid, scale: int = 20, show_path: bool = True) -> np.ndarray:
    """
    Rasterizes the maze into an (H, W, 3) uint8 BGR image.
    Each cell is a scale x scale block; the walls are drawn between its corners.
    """
    validate_scale(scale)
    width, height = canvas_size(grid, scale)
    img = np.full((height, width, 3), COLOR_BG, dtype=np.uint8)

    # Path first so the walls stay on top
    if show_path:
        for nw, se in path_cells(grid, scale):
            cv2.rectangle(img, nw, se, COLOR_SOLUTION, thickness=-1)

    for p1, p2 in wall_segments(grid, scale):
        cv2.line(img, p1, p2, COLOR_WALL, thickness=WALL_WIDTH)

    return img

def encode_png(grid: Grid, scale: int = 20, show_path: bool = True) -> bytes:
    ok, buf = cv2.imencode(".png", render_image(grid, scale, show_path))
    if not ok:
        raise OSError("PNG encoding failed")
    return buf.tobytes()

def write_png(grid: Grid, target: Union[str, BinaryIO], scale: int = 20, show_path: bool = True):
    data = encode_png(grid, scale, show_path)
    if hasattr(target, "write"):
        target.write(data)
    else:
        with open(target, "wb") as f:
            f.write(data)
    logger.debug(f"wrote {len(data)} bytes of PNG")
