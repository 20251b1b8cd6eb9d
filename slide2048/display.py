from colorama import Cursor

from slide2048.grid import EMPTY, WIDTH, Grid

CELL_WIDTH = 6
DELIMITER = "|"


def format_tile(exponent: int) -> str:
    if exponent == EMPTY:
        return " " * CELL_WIDTH
    return f"{2 ** int(exponent):^{CELL_WIDTH}}"


def frame_width() -> int:
    # every tile is wrapped in its own pair of delimiters
    return (CELL_WIDTH + 2 * len(DELIMITER)) * WIDTH


def render_rows(grid: Grid) -> list[str]:
    return [
        "".join(f"{DELIMITER}{format_tile(e)}{DELIMITER}" for e in row)
        for row in grid.snapshot()
    ]


def render(grid: Grid) -> str:
    """
    Text frame that redraws the board in place.

    The cursor is expected to sit just below the previous frame: it is moved
    up WIDTH lines, and after each row it is moved back to the start column
    and down one line.
    """
    out = [Cursor.UP(WIDTH)]
    for line in render_rows(grid):
        out.append(line)
        out.append(Cursor.BACK(frame_width()))
        out.append(Cursor.DOWN(1))
    return "".join(out)
