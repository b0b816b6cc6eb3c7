from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    L = 4
    J = 5
    S = 6
    Z = 7


Shape = np.ndarray


def _shape(*rows: str) -> Shape:
    shape = np.array([[c == "1" for c in row] for row in rows], dtype=np.bool_)
    shape.flags.writeable = False
    return shape


# Explicit rotation tables; index 0 is the spawn orientation.
ROTATIONS: Dict[TetrominoType, Tuple[Shape, Shape, Shape, Shape]] = {
    TetrominoType.I: (
        _shape("1111"),
        _shape("1", "1", "1", "1"),
        _shape("1111"),
        _shape("1", "1", "1", "1"),
    ),
    TetrominoType.O: (
        _shape("11", "11"),
        _shape("11", "11"),
        _shape("11", "11"),
        _shape("11", "11"),
    ),
    TetrominoType.T: (
        _shape("010", "111"),
        _shape("10", "11", "10"),
        _shape("111", "010"),
        _shape("01", "11", "01"),
    ),
    TetrominoType.L: (
        _shape("10", "10", "11"),
        _shape("111", "100"),
        _shape("11", "01", "01"),
        _shape("001", "111"),
    ),
    TetrominoType.J: (
        _shape("01", "01", "11"),
        _shape("100", "111"),
        _shape("11", "10", "10"),
        _shape("111", "001"),
    ),
    TetrominoType.S: (
        _shape("011", "110"),
        _shape("10", "11", "01"),
        _shape("011", "110"),
        _shape("10", "11", "01"),
    ),
    TetrominoType.Z: (
        _shape("110", "011"),
        _shape("01", "11", "10"),
        _shape("110", "011"),
        _shape("01", "11", "10"),
    ),
}


def shape_for(kind: TetrominoType, rotation: int = 0) -> Shape:
    """Occupancy matrix of `kind` at `rotation` (taken modulo 4)."""
    return ROTATIONS[kind][rotation % 4]


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    x: int
    y: int
    rotation: int = 0  # 0..3

    def shape(self) -> Shape:
        return shape_for(self.kind, self.rotation)

    def shifted(self, dx: int = 0, dy: int = 0, drotation: int = 0) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy, rotation=(self.rotation + drotation) % 4)

    def cells(self) -> List[Tuple[int, int]]:
        """Grid coordinates (x, y) of every occupied cell."""
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells
