from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .pieces import Piece


EMPTY = 0

Grid = np.ndarray


@dataclass
class ClearResult:
    grid: Grid
    lines_cleared: int


def empty_grid(width: int = 10, height: int = 20) -> Grid:
    """Discrete 2D playfield, indexed ``grid[y, x]`` with y=0 at the top.

    The grid uses 0 for empty cells and the ``TetrominoType`` value of the
    piece that locked there for filled cells.
    """
    return np.zeros((int(height), int(width)), dtype=np.int8)


def collides(grid: Grid, piece: Piece, dx: int = 0, dy: int = 0, drotation: int = 0) -> bool:
    """Return True if ``piece`` moved by the deltas is an illegal placement.

    Cells above the top row (y < 0) are allowed and never checked against
    the grid contents.
    """
    height, width = grid.shape
    for x, y in piece.shifted(dx, dy, drotation).cells():
        if x < 0 or x >= width or y >= height:
            return True
        if y >= 0 and grid[y, x] != EMPTY:
            return True
    return False


def place(grid: Grid, piece: Piece) -> Grid:
    """Lock ``piece`` into a copy of ``grid``; cells outside the grid are dropped."""
    height, width = grid.shape
    new_grid = grid.copy()
    value = int(piece.kind)
    for x, y in piece.cells():
        if 0 <= x < width and 0 <= y < height:
            new_grid[y, x] = value
    return new_grid


def clear_lines(grid: Grid) -> ClearResult:
    full_rows = np.all(grid != EMPTY, axis=1)
    num = int(np.count_nonzero(full_rows))
    if num == 0:
        return ClearResult(grid=grid, lines_cleared=0)
    # Keep surviving rows in order and pad empty rows on top
    kept = grid[~full_rows]
    new_rows = np.zeros((num, grid.shape[1]), dtype=grid.dtype)
    return ClearResult(grid=np.vstack((new_rows, kept)), lines_cleared=num)


def drop_distance(grid: Grid, piece: Piece) -> int:
    distance = 0
    while not collides(grid, piece, dy=distance + 1):
        distance += 1
    return distance


def ghost_piece(grid: Grid, piece: Piece) -> Piece:
    """Where ``piece`` would lock if hard-dropped now."""
    return piece.shifted(dy=drop_distance(grid, piece))
