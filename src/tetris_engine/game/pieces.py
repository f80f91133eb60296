from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple

import numpy as np


EMPTY = 0


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


# Cell values double as the type tag so a locked piece keeps its color.
BASE_SHAPES = {
    TetrominoType.I: _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.J: _frozen([[2, 0, 0], [2, 2, 2], [0, 0, 0]]),
    TetrominoType.L: _frozen([[0, 0, 3], [3, 3, 3], [0, 0, 0]]),
    TetrominoType.O: _frozen([[4, 4], [4, 4]]),
    TetrominoType.S: _frozen([[0, 5, 5], [5, 5, 0], [0, 0, 0]]),
    TetrominoType.T: _frozen([[0, 6, 0], [6, 6, 6], [0, 0, 0]]),
    TetrominoType.Z: _frozen([[7, 7, 0], [0, 7, 7], [0, 0, 0]]),
}


def shape_of(kind: TetrominoType) -> Shape:
    return BASE_SHAPES[TetrominoType(kind)]


def rotate_cw(matrix: Shape) -> Shape:
    """Rotate 90 degrees clockwise: cell (i, j) of an n x m matrix lands on (j, n-1-i)."""
    rotated = np.rot90(matrix, 1, axes=(1, 0)).copy()
    rotated.setflags(write=False)
    return rotated


def rotation_states(base: Shape) -> Tuple[Shape, Shape, Shape, Shape]:
    states = [base]
    for _ in range(3):
        states.append(rotate_cw(states[-1]))
    return tuple(states)  # type: ignore[return-value]


@dataclass(frozen=True, eq=False)
class Piece:
    """Falling tetromino: its type, the four rotation states and the current index.

    Rotating picks another precomputed state and returns a new Piece, so the
    matrices handed out by ``shape()`` are never mutated.
    """

    kind: TetrominoType
    states: Tuple[Shape, ...] = field(repr=False)
    rotation: int = 0  # 0..3

    @classmethod
    def of(cls, kind: TetrominoType) -> "Piece":
        kind = TetrominoType(kind)
        return cls(kind=kind, states=rotation_states(shape_of(kind)), rotation=0)

    def shape(self) -> Shape:
        return self.states[self.rotation]

    @property
    def width(self) -> int:
        return int(self.shape().shape[1])

    @property
    def height(self) -> int:
        return int(self.shape().shape[0])

    def rotated_cw(self) -> "Piece":
        return Piece(self.kind, self.states, (self.rotation + 1) % 4)

    def rotated_ccw(self) -> "Piece":
        return Piece(self.kind, self.states, (self.rotation + 3) % 4)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells


def random_piece(rng: random.Random) -> Piece:
    # Uniform with replacement; droughts of one type are possible.
    return Piece.of(rng.choice(list(TetrominoType)))
