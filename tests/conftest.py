"""Shared fakes for the terminal, keyboard and random collaborators."""
from collections import deque
from typing import List, Optional, Sequence

import pytest

from termsnake.game import Position, Snake, World
from termsnake.terminal import KeyEvent


class FakeDisplay:
    """Records every call so frames can be compared."""

    def __init__(self, size=(80, 24)):
        self.size = size
        self.ops: list = []

    def clear(self) -> None:
        self.ops.append(("clear",))

    def move_cursor_to(self, x: int, y: int) -> None:
        self.ops.append(("move", x, y))

    def write_styled_text(self, text: str, fg: Optional[str], bg: Optional[str]) -> None:
        self.ops.append(("write", text, fg, bg))

    def flush(self) -> None:
        self.ops.append(("flush",))

    def query_display_size(self):
        return self.size

    def hide_cursor(self) -> None:
        self.ops.append(("hide_cursor",))

    def show_cursor(self) -> None:
        self.ops.append(("show_cursor",))

    def written_at(self):
        """Map (column, row) -> text for every write so far."""
        cells = {}
        cursor = None
        for op in self.ops:
            if op[0] == "move":
                cursor = (op[1], op[2])
            elif op[0] == "write":
                cells[cursor] = op[1]
        return cells


class ScriptedKeys:
    """
    One batch of key presses per loop tick. A poll with a non-zero timeout
    starts the next tick's batch; zero-timeout polls drain the current one.
    """

    def __init__(self, batches: Sequence[Sequence[str]]):
        self._batches = deque(deque(b) for b in batches)
        self._current: deque = deque()

    def poll_for_event(self, timeout_ms) -> bool:
        if timeout_ms:
            self._current = self._batches.popleft() if self._batches else deque()
        return bool(self._current)

    def read_event(self) -> KeyEvent:
        return KeyEvent(self._current.popleft())


class FixedRandom:
    """randint() that always answers the low end of the range."""

    def __init__(self):
        self.calls: List[tuple] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return a


@pytest.fixture
def display():
    return FakeDisplay()


@pytest.fixture
def fixed_random():
    return FixedRandom()


@pytest.fixture
def make_world():
    def _make(body, max_x=9, max_y=9, direction=None, capacity=4):
        snake = Snake(body=[Position(*p) for p in body])
        if direction is not None:
            snake.direction = direction
        return World(snake=snake, max_x=max_x, max_y=max_y, capacity=capacity)
    return _make
