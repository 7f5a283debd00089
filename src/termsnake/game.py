# game.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Protocol
import logging

from .config import (
    COLLECTIBLE_CAPACITY,
    INITIAL_BODY_OFFSETS,
    INITIAL_DIRECTION,
    KEY_DIRECTIONS,
    QUIT_KEY,
    Direction,
)
from .geometry import advance

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


# ---------- State ----------
class Position(NamedTuple):
    x: int
    y: int


class CollectibleState(Enum):
    ACTIVE = "active"
    CONSUMED = "consumed"


@dataclass
class Collectible:
    position: Position
    state: CollectibleState = CollectibleState.ACTIVE

    @property
    def active(self) -> bool:
        return self.state is CollectibleState.ACTIVE


@dataclass
class Snake:
    body: List[Position]           # head at index 0
    direction: Direction = INITIAL_DIRECTION
    grow: bool = False             # applied on the next update step

    def __post_init__(self):
        if not self.body:
            raise ValueError("a snake needs at least one segment")

    @property
    def head(self) -> Position:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)


@dataclass
class World:
    snake: Snake
    max_x: int
    max_y: int
    capacity: int = COLLECTIBLE_CAPACITY
    collectibles: List[Collectible] = field(default_factory=list)
    running: bool = True
    ticks: int = 0

    def active_collectibles(self) -> List[Collectible]:
        return [c for c in self.collectibles if c.active]


def initial_body(max_x: int, max_y: int) -> List[Position]:
    cx, cy = max_x // 2, max_y // 2
    return [
        Position(advance(cx, max_x, dx), advance(cy, max_y, dy))
        for dx, dy in INITIAL_BODY_OFFSETS
    ]


def new_world(max_x: int, max_y: int, capacity: int = COLLECTIBLE_CAPACITY) -> World:
    snake = Snake(body=initial_body(max_x, max_y))
    logger.debug("new %dx%d world, snake at %s", max_x + 1, max_y + 1, snake.head)
    return World(snake=snake, max_x=max_x, max_y=max_y, capacity=capacity)


# ---------- Helpers ----------
def random_position(world: World, rng: RandomSource) -> Position:
    return Position(rng.randint(0, world.max_x), rng.randint(0, world.max_y))


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b


# ---------- Input / Update ----------
def handle_key(world: World, key: str) -> bool:
    """Apply one key press; w/a/s/d steer (no 180° turns), q quits. Return False to quit."""
    if key == QUIT_KEY:
        world.running = False
        return False
    cand = KEY_DIRECTIONS.get(key)
    if cand is not None and not is_opposite(cand, world.snake.direction):
        world.snake.direction = cand
    return True


def consume(world: World) -> int:
    """Mark every active collectible under the head as eaten and queue growth."""
    eaten = 0
    head = world.snake.head
    for collectible in world.collectibles:
        if collectible.active and collectible.position == head:
            collectible.state = CollectibleState.CONSUMED
            world.snake.grow = True
            eaten += 1
    if eaten:
        logger.debug("tick %d: ate %d at %s", world.ticks, eaten, head)
    return eaten


def step_game(world: World, rng: RandomSource) -> None:
    """
    Advance the world by one tick. The order matters:
      1. eat whatever the head is sitting on (sets snake.grow)
      2. grow by one segment if snake.grow was set
      3. shift the body forward, tail first
      4. move the head one cell, wrapping at the edges
      5. top the collectibles up to capacity
      6. respawn eaten collectibles somewhere random
    Because eating is checked before moving, a collectible reached on
    tick N lengthens the snake on tick N+1.
    """
    snake = world.snake
    consume(world)

    if snake.grow:
        snake.grow = False
        # placeholder; overwritten by the shift below
        snake.body.append(snake.body[-1])

    for i in range(len(snake.body) - 1, 0, -1):
        snake.body[i] = snake.body[i - 1]

    hx, hy = snake.head
    snake.body[0] = Position(
        advance(hx, world.max_x, snake.direction.dx),
        advance(hy, world.max_y, snake.direction.dy),
    )

    while len(world.collectibles) < world.capacity:
        world.collectibles.append(Collectible(random_position(world, rng)))

    for collectible in world.collectibles:
        if not collectible.active:
            collectible.position = random_position(world, rng)
            collectible.state = CollectibleState.ACTIVE

    world.ticks += 1
