from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np


class PieceKind(IntEnum):
    SQUARE = 1
    L = 2
    REVERSE_L = 3
    LINE = 4
    T = 5
    Z = 6
    S = 7
    CROSS = 8
    SMALL_L = 9
    DOT = 10
    CORNER = 11
    SMALL_T = 12


Shape = np.ndarray


def make_shape(rows: List[List[int]]) -> Shape:
    """Build a read-only int8 shape matrix from nested lists."""
    shape = np.array(rows, dtype=np.int8)
    if shape.ndim != 2 or shape.size == 0:
        raise ValueError("shape must be a non-empty 2D matrix")
    shape.flags.writeable = False
    return shape


@dataclass(frozen=True, eq=False)
class PieceDefinition:
    kind: PieceKind
    shape: Shape
    color: str  # display only

    @property
    def rows(self) -> int:
        return int(self.shape.shape[0])

    @property
    def cols(self) -> int:
        return int(self.shape.shape[1])

    @property
    def cell_count(self) -> int:
        return int(np.count_nonzero(self.shape))

    def cells(self) -> List[Tuple[int, int]]:
        """Filled (row, col) offsets relative to the top-left corner."""
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.shape))]

    def __repr__(self) -> str:
        return f"PieceDefinition({self.kind.name}, {self.rows}x{self.cols}, {self.color!r})"


# Catalog order matters: draws are permutations of this tuple.
PIECES: Tuple[PieceDefinition, ...] = (
    PieceDefinition(PieceKind.SQUARE, make_shape([[1, 1], [1, 1]]), "yellow"),
    PieceDefinition(PieceKind.L, make_shape([[1, 0, 0], [1, 0, 0], [1, 1, 1]]), "blue"),
    PieceDefinition(PieceKind.REVERSE_L, make_shape([[0, 0, 1], [0, 0, 1], [1, 1, 1]]), "orange"),
    PieceDefinition(PieceKind.LINE, make_shape([[1], [1], [1], [1]]), "cyan"),
    PieceDefinition(PieceKind.T, make_shape([[0, 1, 0], [1, 1, 1], [0, 0, 0]]), "purple"),
    PieceDefinition(PieceKind.Z, make_shape([[1, 1, 0], [0, 1, 1], [0, 0, 0]]), "red"),
    PieceDefinition(PieceKind.S, make_shape([[0, 1, 1], [1, 1, 0], [0, 0, 0]]), "green"),
    PieceDefinition(PieceKind.CROSS, make_shape([[0, 1, 0], [1, 1, 1], [0, 1, 0]]), "pink"),
    PieceDefinition(PieceKind.SMALL_L, make_shape([[1, 0], [1, 1]]), "indigo"),
    PieceDefinition(PieceKind.DOT, make_shape([[1]]), "gray"),
    PieceDefinition(PieceKind.CORNER, make_shape([[1, 1], [1, 0]]), "teal"),
    PieceDefinition(PieceKind.SMALL_T, make_shape([[1, 1, 1], [0, 1, 0]]), "amber"),
)

_BY_KIND = {piece.kind: piece for piece in PIECES}


def piece_for_kind(kind: PieceKind | int) -> PieceDefinition:
    return _BY_KIND[PieceKind(kind)]


def color_for_value(value: int) -> Optional[str]:
    """Color tag for a board cell value, None for empty or unknown cells."""
    try:
        return _BY_KIND[PieceKind(int(value))].color
    except ValueError:
        return None


def draw_random_pieces(count: int = 3, rng: Optional[random.Random] = None) -> List[PieceDefinition]:
    """Shuffle the whole catalog and take the first `count` entries.

    Pieces never repeat within one draw. Pass a seeded `random.Random` for
    reproducible draws.
    """
    if not 0 <= count <= len(PIECES):
        raise ValueError(f"count must be between 0 and {len(PIECES)}, got {count}")
    rng = rng or random.Random()
    pool = list(PIECES)
    rng.shuffle(pool)  # Fisher-Yates
    return pool[:count]


def print_piece(piece_shape: Shape) -> None:
    for row in piece_shape:
        print("".join(["█" if cell else "·" for cell in row]))
