# errors.py
"""Exceptions raised while setting up a game session.

Everything here is fatal: the game cannot run without a usable terminal and a
board big enough to play on, so these propagate out to ``main()``.
"""


class SnakeError(Exception):
    """Base class for termsnake errors."""


class ConfigurationError(SnakeError):
    """A setting (from the command line or the display) is unusable."""


class GridTooSmallError(ConfigurationError):
    def __init__(self, width: int, height: int, minimum: int):
        self.width = width
        self.height = height
        self.minimum = minimum
        super().__init__(
            f"terminal is {width}x{height}, too small for a "
            f"{minimum}x{minimum} board"
        )


class TerminalError(SnakeError):
    """The terminal could not be put into (or taken out of) game mode."""
