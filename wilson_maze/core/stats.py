from typing import Any, Dict

from wilson_maze.core.grid import Grid

def calculate_stats(grid: Grid) -> Dict[str, Any]:
    """
    Shape of the passage graph. Only internal passages count, so the outward
    openings at the entrance and exit do not change a cell's degree.
    """
    dead_ends = 0
    corridors = 0
    junctions = 0 # 3 or 4 open passages
    path_length = 0

    for idx in range(len(grid)):
        degree = sum(1 for _ in grid.open_neighbors(idx))
        if degree == 1: dead_ends += 1
        elif degree == 2: corridors += 1
        elif degree >= 3: junctions += 1

        if grid.has_flag(idx, Grid.PATH):
            path_length += 1

    total = len(grid)
    return {
        "open_passages": grid.open_passage_count(),
        "dead_ends": dead_ends,
        "corridors": corridors,
        "junctions": junctions,
        "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0,
        "path_length": path_length,
    }
