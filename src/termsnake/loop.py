# loop.py
from enum import Enum
from typing import Callable, Optional
import logging
import time

from .config import POLL_MS, TICK_MS
from .game import RandomSource, World, handle_key, step_game
from .render import STYLED, Display, Palette, render
from .terminal import KeyEvent, KeyInput

logger = logging.getLogger(__name__)


class LoopState(Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class GameLoop:
    """
    Drives one session: input -> render -> update -> sleep, once per tick,
    until a quit key stops it.
    """

    def __init__(
        self,
        world: World,
        display: Display,
        keys: KeyInput,
        rng: RandomSource,
        palette: Palette = STYLED,
        tick_ms: int = TICK_MS,
        poll_ms: int = POLL_MS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.world = world
        self.display = display
        self.keys = keys
        self.rng = rng
        self.palette = palette
        self.tick_ms = tick_ms
        self.poll_ms = poll_ms
        self.sleep = sleep

    @property
    def state(self) -> LoopState:
        return LoopState.RUNNING if self.world.running else LoopState.STOPPED

    def poll_key(self) -> Optional[KeyEvent]:
        """Wait briefly for a key; if one came, drain the burst and keep only the last."""
        if not self.keys.poll_for_event(self.poll_ms):
            return None
        event = self.keys.read_event()
        while self.keys.poll_for_event(0):
            event = self.keys.read_event()
        return event

    def tick(self) -> LoopState:
        if self.state is LoopState.STOPPED:
            return self.state

        event = self.poll_key()
        if event is not None and not handle_key(self.world, event.char):
            logger.info("quit after %d ticks", self.world.ticks)
            return self.state

        render(self.display, self.world, self.palette)
        step_game(self.world, self.rng)
        logger.debug(
            "tick %d: head=%s dir=%s len=%d",
            self.world.ticks, self.world.snake.head,
            self.world.snake.direction.name, len(self.world.snake),
        )
        self.sleep(self.tick_ms / 1000)
        return self.state

    def run(self) -> int:
        logger.info(
            "starting on a %dx%d board, tick=%dms",
            self.world.max_x + 1, self.world.max_y + 1, self.tick_ms,
        )
        while self.tick() is LoopState.RUNNING:
            pass
        return self.world.ticks
