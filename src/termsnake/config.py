# config.py
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .errors import ConfigurationError

# ----- Timing -----
TICK_MS = 200      # low number = more speed
POLL_MS = 10       # bounded wait for a key press each tick

# ----- Board -----
COLLECTIBLE_CAPACITY = 4
MIN_GRID = 3       # smallest playable board, in cells per axis
STYLED_CELL_WIDTH = 2
PLAIN_CELL_WIDTH = 1

# (dx, dy) offsets from the board centre, head first
INITIAL_BODY_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, -1),
    (0, 0),
    (1, 0),
    (2, 0),
    (3, 0),
    (3, 1),
)


# ----- Directions (dx, dy); y grows downward like terminal rows -----
class Direction(Enum):
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, -1)
    DOWN = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))


INITIAL_DIRECTION = Direction.LEFT

# ----- Keys -----
QUIT_KEY = "q"
KEY_DIRECTIONS: Dict[str, Direction] = {
    "w": Direction.UP,
    "a": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
}


# ----- Tunables (what the command line can override) -----
@dataclass
class Config:
    tick_ms: int = TICK_MS
    poll_ms: int = POLL_MS
    capacity: int = COLLECTIBLE_CAPACITY
    seed: Optional[int] = None
    plain: bool = False
    log_file: Optional[str] = None
    verbose: bool = False

    def __post_init__(self):
        if self.tick_ms <= 0:
            raise ConfigurationError(f"tick interval must be positive, got {self.tick_ms}ms")
        if self.poll_ms < 0:
            raise ConfigurationError(f"poll timeout cannot be negative, got {self.poll_ms}ms")
        if self.capacity < 1:
            raise ConfigurationError(f"collectible capacity must be at least 1, got {self.capacity}")
