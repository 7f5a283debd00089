"""Snake in the terminal: a wrapped-edge board, a growing snake, w/a/s/d to steer."""

import logging

from .config import Config, Direction
from .game import Collectible, CollectibleState, Position, Snake, World, new_world, step_game
from .loop import GameLoop, LoopState

__all__ = [
    "Config", "Direction",
    "Collectible", "CollectibleState", "Position", "Snake", "World", "new_world", "step_game",
    "GameLoop", "LoopState",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
