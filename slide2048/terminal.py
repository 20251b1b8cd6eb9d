import contextlib
import enum
import shutil
import termios
import tty

from colorama import Cursor
from colorama.ansi import clear_screen

from slide2048.display import frame_width
from slide2048.grid import WIDTH, Direction

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
ESCAPE = "\x1b"


class TerminalError(Exception):
    """The terminal could not be read from or configured."""


class Key(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    OTHER = "other"

    @property
    def direction(self) -> Direction | None:
        if self is Key.OTHER:
            return None
        return Direction(self.value)


_KEYS = {
    ESCAPE + "[A": Key.UP,
    ESCAPE + "[B": Key.DOWN,
    ESCAPE + "[C": Key.RIGHT,
    ESCAPE + "[D": Key.LEFT,
    "w": Key.UP,
    "s": Key.DOWN,
    "d": Key.RIGHT,
    "a": Key.LEFT,
}


def decode_key(sequence: str) -> Key:
    return _KEYS.get(sequence, Key.OTHER)


def read_key(stream) -> Key:
    """Read a single key press, following arrow-key escape sequences."""
    try:
        ch = stream.read(1)
        if ch == ESCAPE:
            ch += stream.read(2)
    except OSError as e:
        raise TerminalError(f"failed to read input: {e}") from e
    if not ch:
        raise TerminalError("input stream closed")
    return decode_key(ch)


@contextlib.contextmanager
def raw_mode(stream):
    """Put the terminal behind `stream` in raw mode for the duration."""
    try:
        fd = stream.fileno()
        saved = termios.tcgetattr(fd)
        tty.setraw(fd)
    except (termios.error, OSError, ValueError) as e:
        raise TerminalError(f"cannot enter raw mode: {e}") from e
    try:
        yield stream
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


@contextlib.contextmanager
def hidden_cursor(out):
    out.write(HIDE_CURSOR)
    out.flush()
    try:
        yield out
    finally:
        out.write(SHOW_CURSOR)
        out.flush()


def terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size(fallback=(0, 0))
    if size.columns == 0 or size.lines == 0:
        raise TerminalError("terminal size unavailable")
    return size.columns, size.lines


def centre_origin(columns: int, lines: int) -> str:
    """Clear the screen and park the cursor just below a centred board."""
    return "".join(
        [
            clear_screen(),
            Cursor.POS(max(columns // 2, 1), max(lines // 2, 1)),
            Cursor.DOWN(WIDTH // 2),
            Cursor.BACK(frame_width() // 2),
        ]
    )
