# main.py
import argparse
import logging
import random
import sys
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape

from .config import COLLECTIBLE_CAPACITY, POLL_MS, TICK_MS, Config
from .errors import ConfigurationError, TerminalError
from .game import World, new_world
from .geometry import grid_bounds
from .loop import GameLoop
from .render import PLAIN, STYLED
from .terminal import TerminalSession

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def parse_args(argv: Optional[List[str]] = None) -> Config:
    parser = argparse.ArgumentParser(
        prog="termsnake",
        description="Snake in the terminal. Steer with w/a/s/d, quit with q.",
    )
    parser.add_argument("--tick-ms", type=int, default=TICK_MS, help="milliseconds per tick (lower is faster)")
    parser.add_argument("--poll-ms", type=int, default=POLL_MS, help="how long each tick waits for a key")
    parser.add_argument(
        "--capacity",
        type=int,
        default=COLLECTIBLE_CAPACITY,
        help="number of collectibles kept on the board",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed collectible placement for a repeatable game")
    parser.add_argument(
        "--plain",
        action="store_true",
        help="one column per cell and no colours, for terminals without colour support",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="write log records here (the screen belongs to the game while it runs)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every tick")

    args = parser.parse_args(argv)
    return Config(
        tick_ms=args.tick_ms,
        poll_ms=args.poll_ms,
        capacity=args.capacity,
        seed=args.seed,
        plain=args.plain,
        log_file=args.log_file,
        verbose=args.verbose,
    )


def setup_logging(cfg: Config) -> None:
    # no console handler: the screen belongs to the game while it runs
    if cfg.log_file is None:
        return
    logging.basicConfig(
        filename=cfg.log_file,
        level=logging.DEBUG if cfg.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def play(cfg: Config, session_factory: Callable[[], TerminalSession] = TerminalSession) -> World:
    """Open the terminal, size the board from it and run one game to completion."""
    rng = random.Random(cfg.seed)
    palette = PLAIN if cfg.plain else STYLED

    with session_factory() as session:
        width, height = session.display.query_display_size()
        max_x, max_y = grid_bounds(width, height, palette.cell_width)
        world = new_world(max_x, max_y, cfg.capacity)
        loop = GameLoop(
            world,
            session.display,
            session.keyboard,
            rng,
            palette=palette,
            tick_ms=cfg.tick_ms,
            poll_ms=cfg.poll_ms,
        )
        loop.run()
    return world


def main(argv: Optional[List[str]] = None) -> int:
    try:
        cfg = parse_args(argv)
    except ConfigurationError as exc:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        return 2

    setup_logging(cfg)

    try:
        world = play(cfg)
    except ConfigurationError as exc:
        logger.error("configuration error: %s", exc)
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        return 2
    except TerminalError as exc:
        logger.error("terminal error: %s", exc)
        err_console.print(f"[red]Terminal error:[/red] {escape(str(exc))}")
        return 1
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130

    console.print(f"Thanks for playing: {world.ticks} ticks, final length [bold]{len(world.snake)}[/bold]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
