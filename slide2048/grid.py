import enum
import logging

import numpy as np

logger = logging.getLogger(__name__)

WIDTH = 4
EMPTY = -1


class Direction(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


def _line_coordinates(direction: Direction) -> list[tuple[np.ndarray, np.ndarray]]:
    """(rows, cols) index arrays for every line, ordered from the leading edge."""
    forward = np.arange(WIDTH)
    backward = forward[::-1]
    lines = []
    for k in range(WIDTH):
        fixed = np.full(WIDTH, k)
        if direction is Direction.LEFT:
            lines.append((fixed, forward))
        elif direction is Direction.RIGHT:
            lines.append((fixed, backward))
        elif direction is Direction.UP:
            lines.append((forward, fixed))
        elif direction is Direction.DOWN:
            lines.append((backward, fixed))
    return lines


_LINES = {direction: _line_coordinates(direction) for direction in Direction}


def collapse(line) -> list[int]:
    """
    Slide one line toward its front and merge equal neighbours.

    Empty squares are dropped, then the tiles are scanned pairwise from the
    front: an equal pair becomes one tile one exponent higher and both are
    consumed, so a merged tile never merges again in the same pass. The
    result is padded with EMPTY back to the original length.
    """
    tiles = [int(e) for e in line if e != EMPTY]
    merged = []
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged.append(tiles[i] + 1)
            i += 2
        else:
            merged.append(tiles[i])
            i += 1
    return merged + [EMPTY] * (len(line) - len(merged))


class Grid:
    """2048 board state, stored as tile exponents"""

    state: np.ndarray

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.state = np.full((WIDTH, WIDTH), EMPTY, dtype=np.int16)
        self.spawn()
        self.spawn()

    @classmethod
    def from_rows(cls, rows, rng: np.random.Generator | None = None) -> "Grid":
        """Build a grid from exponent rows, None marking an empty square."""
        rows = [list(row) for row in rows]
        if len(rows) != WIDTH or any(len(row) != WIDTH for row in rows):
            raise ValueError(f"Grid must be {WIDTH}x{WIDTH}")
        state = np.full((WIDTH, WIDTH), EMPTY, dtype=np.int16)
        for i, row in enumerate(rows):
            for j, e in enumerate(row):
                if e is None:
                    continue
                if e < 0:
                    raise ValueError(f"Negative exponent {e} at ({i}, {j})")
                state[i, j] = e
        grid = cls.__new__(cls)
        grid.rng = rng if rng is not None else np.random.default_rng()
        grid.state = state
        return grid

    def spawn(self, rng: np.random.Generator | None = None) -> bool:
        """
        Place a 1 or a 2 (exponent 0 or 1) on a random empty square.

        Returns False without touching the grid if it is full.
        """
        rng = rng if rng is not None else self.rng
        rows, cols = np.nonzero(self.state == EMPTY)
        if len(rows) == 0:
            return False
        idx = rng.integers(len(rows))
        exponent = int(rng.integers(2))
        self.state[rows[idx], cols[idx]] = exponent
        logger.debug("spawned %d at (%d, %d)", exponent, rows[idx], cols[idx])
        return True

    def move(self, direction: Direction) -> bool:
        """
        Slide every line toward the direction's edge. Return whether
        anything changed.
        """
        if not isinstance(direction, Direction):
            raise ValueError(f"Unknown direction: {direction!r}")
        changed = False
        for rows, cols in _LINES[direction]:
            line = self.state[rows, cols]
            new_line = np.array(collapse(line), dtype=self.state.dtype)
            if not np.array_equal(line, new_line):
                self.state[rows, cols] = new_line
                changed = True
        logger.debug("move %s changed=%s", direction.value, changed)
        return changed

    def left(self) -> bool:
        return self.move(Direction.LEFT)

    def right(self) -> bool:
        return self.move(Direction.RIGHT)

    def up(self) -> bool:
        return self.move(Direction.UP)

    def down(self) -> bool:
        return self.move(Direction.DOWN)

    def has_empty_square(self) -> bool:
        return bool((self.state == EMPTY).any())

    def tile_count(self) -> int:
        return int((self.state != EMPTY).sum())

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the exponents, EMPTY for blank squares."""
        view = self.state.copy()
        view.flags.writeable = False
        return view

    def rows(self) -> list[list[int | None]]:
        return [[None if e == EMPTY else int(e) for e in row] for row in self.state]

    def clone(self) -> "Grid":
        g = Grid.__new__(Grid)
        g.rng = self.rng
        g.state = self.state.copy()
        return g

    def valid(self, direction: Direction) -> bool:
        return self.clone().move(direction)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return bool(np.array_equal(self.state, other.state))

    def __repr__(self) -> str:
        return f"Grid({self.rows()!r})"
