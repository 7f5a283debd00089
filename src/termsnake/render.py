# render.py
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from .config import PLAIN_CELL_WIDTH, STYLED_CELL_WIDTH
from .game import World


class Display(Protocol):
    def clear(self) -> None: ...
    def move_cursor_to(self, x: int, y: int) -> None: ...
    def write_styled_text(self, text: str, fg: Optional[str], bg: Optional[str]) -> None: ...
    def flush(self) -> None: ...
    def query_display_size(self) -> Tuple[int, int]: ...
    def hide_cursor(self) -> None: ...
    def show_cursor(self) -> None: ...


# ---------- Palettes ----------
@dataclass(frozen=True)
class Glyph:
    text: str
    fg: Optional[str] = None
    bg: Optional[str] = None


@dataclass(frozen=True)
class Palette:
    cell_width: int
    collectible: Glyph
    body_even: Glyph
    body_odd: Glyph
    head: Glyph


STYLED = Palette(
    cell_width=STYLED_CELL_WIDTH,
    collectible=Glyph("⊕", "green", "green"),
    body_even=Glyph(" ", "black", "red"),
    body_odd=Glyph(" ", "red", "black"),
    head=Glyph("O", "red", "red"),
)

PLAIN = Palette(
    cell_width=PLAIN_CELL_WIDTH,
    collectible=Glyph("*"),
    body_even=Glyph("o"),
    body_odd=Glyph("+"),
    head=Glyph("@"),
)


# ---------- Frame ----------
@dataclass(frozen=True)
class Cell:
    column: int
    row: int
    text: str
    fg: Optional[str]
    bg: Optional[str]


Frame = Tuple[Cell, ...]


def _cells(x: int, y: int, glyph: Glyph, palette: Palette) -> List[Cell]:
    # a board cell spans `cell_width` terminal columns
    return [
        Cell(x * palette.cell_width + i, y, glyph.text, glyph.fg, glyph.bg)
        for i in range(palette.cell_width)
    ]


def build_frame(world: World, palette: Palette = STYLED) -> Frame:
    """Project the world onto terminal cells: collectibles, then body, then head on top."""
    cells: List[Cell] = []
    for collectible in world.active_collectibles():
        x, y = collectible.position
        cells += _cells(x, y, palette.collectible, palette)

    body = world.snake.body
    for i in range(1, len(body)):
        glyph = palette.body_even if i % 2 == 0 else palette.body_odd
        cells += _cells(body[i].x, body[i].y, glyph, palette)

    head = world.snake.head
    cells += _cells(head.x, head.y, palette.head, palette)
    return tuple(cells)


def draw_frame(display: Display, frame: Frame) -> None:
    display.clear()
    for cell in frame:
        display.move_cursor_to(cell.column, cell.row)
        display.write_styled_text(cell.text, cell.fg, cell.bg)
    display.flush()


def render(display: Display, world: World, palette: Palette = STYLED) -> Frame:
    frame = build_frame(world, palette)
    draw_frame(display, frame)
    return frame
