# terminal.py
"""
Terminal plumbing for the game.

- RichDisplay: off-screen cell buffer presented through a rich Live on the
  alternate screen, one whole frame per flush()
- Keyboard: stdin in cbreak mode, polled with select()
- TerminalSession: sets both up and always restores the terminal on exit
"""
from __future__ import annotations

import codecs
import os
import select
import sys
import termios
import tty
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional, Protocol, TextIO, Tuple

from rich.console import Console
from rich.live import Live
from rich.style import Style
from rich.text import Text

from .errors import TerminalError


@dataclass(frozen=True)
class KeyEvent:
    char: str


class KeyInput(Protocol):
    def poll_for_event(self, timeout_ms: Optional[int]) -> bool: ...
    def read_event(self) -> KeyEvent: ...


# ---------- Display ----------
class RichDisplay:
    """Cursor-addressed writes into a buffer; flush() swaps the whole frame in at once."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self._cells: Dict[Tuple[int, int], Tuple[str, Optional[Style]]] = {}
        self._cursor = (0, 0)
        self._live: Optional[Live] = None

    def open(self) -> None:
        self.hide_cursor()
        self._live = Live(
            console=self.console,
            screen=True,
            auto_refresh=False,
            transient=True,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        self._live.start()

    def close(self) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None
        self.show_cursor()

    def query_display_size(self) -> Tuple[int, int]:
        size = self.console.size
        return size.width, size.height

    def hide_cursor(self) -> None:
        self.console.show_cursor(False)

    def show_cursor(self) -> None:
        self.console.show_cursor(True)

    def clear(self) -> None:
        self._cells.clear()
        self._cursor = (0, 0)

    def move_cursor_to(self, x: int, y: int) -> None:
        self._cursor = (x, y)

    def write_styled_text(self, text: str, fg: Optional[str], bg: Optional[str]) -> None:
        style = Style(color=fg, bgcolor=bg) if (fg or bg) else None
        x, y = self._cursor
        for ch in text:
            self._cells[(x, y)] = (ch, style)
            x += 1
        self._cursor = (x, y)

    def compose(self) -> Text:
        """Build the buffered frame as one Text, blank cells filled with spaces."""
        rows = 1 + max((y for _, y in self._cells), default=-1)
        lines = []
        for y in range(rows):
            row = {x: cell for (x, cy), cell in self._cells.items() if cy == y}
            line = Text(no_wrap=True, overflow="crop")
            for x in range(1 + max(row, default=-1)):
                ch, style = row.get(x, (" ", None))
                line.append(ch, style=style)
            lines.append(line)
        return Text("\n", no_wrap=True, overflow="crop").join(lines)

    def flush(self) -> None:
        if self._live is None:
            raise TerminalError("display is not open")
        self._live.update(self.compose(), refresh=True)


# ---------- Input ----------
class Keyboard:
    """
    Key presses from a TTY stream. enter_raw_mode() uses cbreak rather than
    full raw mode: output post-processing stays on so frame newlines render.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream or sys.stdin
        self._saved: Optional[list] = None
        self._pending: Deque[str] = deque()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def fd(self) -> int:
        return self._stream.fileno()

    def enter_raw_mode(self) -> None:
        if not self._stream.isatty():
            raise TerminalError("stdin is not a terminal")
        try:
            self._saved = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"could not enter raw mode: {exc}") from exc

    def exit_raw_mode(self) -> None:
        if self._saved is None:
            return
        saved, self._saved = self._saved, None
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, saved)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"could not restore terminal mode: {exc}") from exc

    def _fill(self, timeout: Optional[float]) -> None:
        ready, _, _ = select.select([self.fd], [], [], timeout)
        if ready:
            data = os.read(self.fd, 64)
            if not data:
                raise TerminalError("stdin closed")
            self._pending.extend(self._decoder.decode(data))

    def poll_for_event(self, timeout_ms: Optional[int]) -> bool:
        """Wait up to `timeout_ms` (None = forever) for a key; True if one is ready."""
        if not self._pending:
            self._fill(None if timeout_ms is None else timeout_ms / 1000)
        return bool(self._pending)

    def read_event(self) -> KeyEvent:
        while not self._pending:
            self._fill(None)
        return KeyEvent(self._pending.popleft())


# ---------- Session ----------
class TerminalSession:
    """Context manager owning the display and keyboard for one game."""

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.display = RichDisplay(console)
        self.keyboard = Keyboard(stream)

    def __enter__(self) -> "TerminalSession":
        self.keyboard.enter_raw_mode()
        try:
            self.display.open()
        except BaseException:
            self.keyboard.exit_raw_mode()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.display.close()
        finally:
            self.keyboard.exit_raw_mode()
