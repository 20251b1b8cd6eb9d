import logging
import sys
from typing import Iterable, Iterator, TextIO

from colorama import Cursor

from slide2048.display import render
from slide2048.grid import Direction, Grid
from slide2048.terminal import (
    Key,
    TerminalError,
    centre_origin,
    hidden_cursor,
    raw_mode,
    read_key,
    terminal_size,
)

logger = logging.getLogger(__name__)


def can_continue(grid: Grid) -> bool:
    """
    Whether play can go on. Probed on scratch copies so the displayed board
    is untouched: a left move, an up move or another spawn must be possible.
    """
    return grid.valid(Direction.LEFT) or grid.valid(Direction.UP) or grid.clone().spawn()


def key_presses(stream) -> Iterator[Key]:
    while True:
        yield read_key(stream)


def play(grid: Grid, keys: Iterable[Key], out: TextIO) -> int:
    """
    Run the game loop until a non-direction key arrives or no move remains.

    Returns the number of moves that changed the board.
    """
    moves = 0
    for key in keys:
        direction = key.direction
        # anything that isn't a direction ends the game
        if direction is None:
            break

        moved = grid.move(direction)
        if moved:
            moves += 1
            grid.spawn()

        out.write(render(grid))
        out.flush()

        if moved and not can_continue(grid):
            logger.info("no moves left after %d moves", moves)
            break
    return moves


def run(stdin, stdout) -> int:
    columns, lines = terminal_size()
    stdout.write(centre_origin(columns, lines))

    grid = Grid()
    logger.info("starting game on a %dx%d terminal", columns, lines)
    with hidden_cursor(stdout), raw_mode(stdin):
        stdout.write(render(grid))
        stdout.flush()
        moves = play(grid, key_presses(stdin), stdout)
    logger.info("game finished after %d moves", moves)

    stdout.write(render(grid))
    stdout.write(Cursor.POS(1, max(lines - 1, 1)))
    print("Thanks for playing!", file=stdout)
    return moves


def main() -> None:
    try:
        run(sys.stdin, sys.stdout)
    except TerminalError as e:
        print(f"slide2048: {e}", file=sys.stderr)
        sys.exit(1)
