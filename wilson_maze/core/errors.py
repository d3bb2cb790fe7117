class MazeError(Exception):
    """Base class for everything raised by wilson_maze."""


class MazeConfigError(MazeError, ValueError):
    """User-correctable configuration problem, raised before any work starts."""


class MazeInvariantError(MazeError, RuntimeError):
    """
    The cell graph broke one of its own invariants.
    Indicates a programming defect, never a bad input.
    """


def validate_dimensions(height: int, width: int):
    if height <= 0 or width <= 0:
        raise MazeConfigError(f"maze must be at least 1x1, got {height}x{width}")


def validate_gate(width: int) -> int:
    """Returns the width of the entrance/exit column range."""
    gate = width // 6
    if gate <= 0:
        raise MazeConfigError(f"width {width} is too narrow to place an entrance and exit (need at least 6)")
    return gate


def validate_scale(scale: int):
    if scale <= 0:
        raise MazeConfigError(f"scale must be positive, got {scale}")


def validate_steps_per_frame(steps: int):
    if steps <= 0:
        raise MazeConfigError(f"steps per frame must be positive, got {steps}")
