# geometry.py
from typing import Tuple

from .config import MIN_GRID, STYLED_CELL_WIDTH
from .errors import GridTooSmallError


def advance(coord: int, bound: int, delta: int) -> int:
    """Move `coord` by `delta` on an axis of [0, bound], wrapping at both ends."""
    return (coord + delta) % (bound + 1)


def grid_bounds(width: int, height: int, cell_width: int = STYLED_CELL_WIDTH) -> Tuple[int, int]:
    """
    Turn a display size (columns, rows) into inclusive board bounds (max_x, max_y).

    One board cell spans `cell_width` columns. The bottom row is left
    unused so drawing never scrolls the screen.
    """
    max_x = width // cell_width - 1
    max_y = height - 2
    if max_x + 1 < MIN_GRID or max_y + 1 < MIN_GRID:
        raise GridTooSmallError(width, height, MIN_GRID)
    return max_x, max_y
