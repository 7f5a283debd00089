"""Tests for termsnake.terminal: keyboard input over a pipe, session and display lifecycle over a pty."""
import io
import os
import pty
import termios

import pytest
from rich.console import Console

from termsnake.errors import TerminalError
from termsnake.game import Collectible, Position
from termsnake.render import Display, render
from termsnake.terminal import KeyEvent, Keyboard, RichDisplay, TerminalSession


@pytest.fixture
def pipe():
    r, w = os.pipe()
    reader = os.fdopen(r, "rb", buffering=0)
    yield reader, w
    reader.close()
    try:
        os.close(w)
    except OSError:
        pass


class TestKeyboard:
    def test_poll_times_out_without_input(self, pipe):
        reader, _ = pipe
        assert Keyboard(reader).poll_for_event(0) is False

    def test_reads_keys_in_order(self, pipe):
        reader, w = pipe
        kb = Keyboard(reader)
        os.write(w, b"wd")
        assert kb.poll_for_event(10) is True
        assert kb.read_event() == KeyEvent("w")
        assert kb.poll_for_event(0) is True
        assert kb.read_event() == KeyEvent("d")
        assert kb.poll_for_event(0) is False

    def test_split_utf8_sequence(self, pipe):
        reader, w = pipe
        kb = Keyboard(reader)
        data = "é".encode("utf-8")
        os.write(w, data[:1])
        assert kb.poll_for_event(0) is False
        os.write(w, data[1:])
        assert kb.poll_for_event(0) is True
        assert kb.read_event().char == "é"

    def test_closed_input_is_an_error(self, pipe):
        reader, w = pipe
        os.close(w)
        with pytest.raises(TerminalError):
            Keyboard(reader).poll_for_event(0)

    def test_raw_mode_needs_a_tty(self, pipe):
        reader, _ = pipe
        with pytest.raises(TerminalError):
            Keyboard(reader).enter_raw_mode()

    def test_exit_raw_mode_without_enter_is_noop(self, pipe):
        reader, _ = pipe
        Keyboard(reader).exit_raw_mode()


def test_session_refuses_non_tty(pipe):
    reader, _ = pipe
    with pytest.raises(TerminalError):
        with TerminalSession(stream=reader):
            pass


# ---------- Session lifecycle on a real pseudo-terminal ----------
@pytest.fixture
def tty_stream():
    master, slave = pty.openpty()
    stream = os.fdopen(slave, "rb", buffering=0)
    yield stream
    stream.close()
    os.close(master)


@pytest.fixture
def console():
    return Console(file=io.StringIO(), force_terminal=True, width=20, height=6)


class TestTerminalSession:
    def test_enters_cbreak_and_restores_on_interrupt(self, tty_stream, console):
        saved = termios.tcgetattr(tty_stream.fileno())
        with pytest.raises(KeyboardInterrupt):
            with TerminalSession(console=console, stream=tty_stream):
                assert termios.tcgetattr(tty_stream.fileno()) != saved
                raise KeyboardInterrupt
        assert termios.tcgetattr(tty_stream.fileno()) == saved

    def test_restores_when_display_fails_to_open(self, tty_stream, console, monkeypatch):
        def boom(self):
            raise RuntimeError("no alternate screen")
        monkeypatch.setattr(RichDisplay, "open", boom)
        saved = termios.tcgetattr(tty_stream.fileno())
        with pytest.raises(RuntimeError):
            with TerminalSession(console=console, stream=tty_stream):
                pass
        assert termios.tcgetattr(tty_stream.fileno()) == saved

    def test_display_is_closed_on_exit(self, tty_stream, console):
        with TerminalSession(console=console, stream=tty_stream) as session:
            display = session.display
        with pytest.raises(TerminalError):
            display.flush()


class TestRichDisplayLive:
    def test_frame_goes_through_alternate_screen(self, console, make_world):
        world = make_world([(1, 1), (2, 1)])
        world.collectibles.append(Collectible(Position(3, 2)))
        display = RichDisplay(console)
        display.open()
        render(display, world)
        display.close()
        out = console.file.getvalue()
        assert "\x1b[?1049h" in out
        assert "\x1b[?1049l" in out
        assert "⊕" in out
        assert "O" in out
        # cursor hidden while playing and shown again afterwards
        assert out.index("\x1b[?25l") < out.rindex("\x1b[?25h")

    @pytest.mark.parametrize("name", [
        "clear", "move_cursor_to", "write_styled_text", "flush",
        "query_display_size", "hide_cursor", "show_cursor",
    ])
    def test_implements_display_protocol(self, name):
        assert name in Display.__dict__
        assert callable(getattr(RichDisplay, name))
