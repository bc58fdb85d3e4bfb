from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

import numpy as np

from .errors import OutOfRangeError
from .pieces import Shape


BOARD_SIZE = 10
LINE_CLEAR_POINTS = 100
BOARD_DTYPE = np.int32

Board = np.ndarray
Coordinate = Tuple[int, int]


@dataclass
class ClearResult:
    board: Board
    lines_cleared: int
    score_delta: int
    rows: List[int] = field(default_factory=list)
    cols: List[int] = field(default_factory=list)


def _freeze(board: Board) -> Board:
    board.flags.writeable = False
    return board


def create_empty_board() -> Board:
    """Fresh 10x10 board with every cell empty (0)."""
    return _freeze(np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=BOARD_DTYPE))


def can_place(board: Board, shape: Shape, row: int, col: int) -> bool:
    """Check if `shape` fits with its top-left corner at (row, col)"""
    shape_h, shape_w = shape.shape

    # Check bounds
    if row < 0 or col < 0:
        return False
    if row + shape_h > BOARD_SIZE or col + shape_w > BOARD_SIZE:
        return False

    # Check for collision with existing blocks
    window = board[row : row + shape_h, col : col + shape_w]
    return not bool(np.any((shape != 0) & (window != 0)))


def place(board: Board, shape: Shape, row: int, col: int, fill_value: int = 1) -> Board:
    """
    Return a new board with the filled cells of `shape` set to `fill_value`.
    Assumes position is already validated with `can_place`: occupied cells
    under the shape are overwritten, not rejected.
    """
    if fill_value <= 0:
        raise ValueError(f"fill_value must be positive, got {fill_value}")
    shape_h, shape_w = shape.shape
    if row < 0 or col < 0 or row + shape_h > BOARD_SIZE or col + shape_w > BOARD_SIZE:
        raise OutOfRangeError(f"{shape_h}x{shape_w} shape at ({row}, {col}) leaves the board")

    new_board = np.array(board, dtype=BOARD_DTYPE)
    window = new_board[row : row + shape_h, col : col + shape_w]
    window[shape != 0] = fill_value
    return _freeze(new_board)


def clear_full_lines(board: Board, line_clear_points: int = LINE_CLEAR_POINTS) -> ClearResult:
    """
    Clear complete rows and columns.

    Rows and columns are both detected on the board as given, so a cell on a
    full row and a full column counts toward two lines. Each line is worth
    `line_clear_points`.
    """
    filled = board != 0
    rows = [int(r) for r in np.flatnonzero(np.all(filled, axis=1))]
    cols = [int(c) for c in np.flatnonzero(np.all(filled, axis=0))]

    new_board = np.array(board, dtype=BOARD_DTYPE)
    if rows:
        new_board[rows, :] = 0
    if cols:
        new_board[:, cols] = 0

    lines_cleared = len(rows) + len(cols)
    return ClearResult(
        board=_freeze(new_board),
        lines_cleared=lines_cleared,
        score_delta=line_clear_points * lines_cleared,
        rows=rows,
        cols=cols,
    )


def valid_placements(board: Board, shape: Shape) -> List[Coordinate]:
    """All (row, col) anchors where `shape` can be placed"""
    shape_h, shape_w = shape.shape
    positions: List[Coordinate] = []
    for row in range(BOARD_SIZE - shape_h + 1):
        for col in range(BOARD_SIZE - shape_w + 1):
            if can_place(board, shape, row, col):
                positions.append((row, col))
    return positions


def can_place_any(board: Board, shapes: Iterable[Shape]) -> bool:
    for shape in shapes:
        shape_h, shape_w = shape.shape
        for row in range(BOARD_SIZE - shape_h + 1):
            for col in range(BOARD_SIZE - shape_w + 1):
                if can_place(board, shape, row, col):
                    return True
    return False


def filled_ratio(board: Board) -> float:
    return float(np.count_nonzero(board)) / float(board.size)


def print_board(board: Board) -> None:
    for row in board:
        print("".join(["█" if cell else "·" for cell in row]))
