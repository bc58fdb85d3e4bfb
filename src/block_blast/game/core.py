from __future__ import annotations

"""
Block Blast game state and controller.

The board, tray and score live in one immutable `GameState`. A placement is a
single transition (validate, place, clear lines, score, consume the piece)
that produces a new state, so earlier snapshots stay valid for undo and
replay. `BlockBlastGame` owns the current state together with the random
source and the pause before an empty tray is refilled.
"""

import logging
import random
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

import numpy as np

from .board import (
    BOARD_SIZE,
    Board,
    can_place,
    can_place_any,
    clear_full_lines,
    create_empty_board,
    filled_ratio,
    place,
    print_board,
    valid_placements,
)
from .pieces import print_piece
from .rules import DEFAULT_RULES, ScoringRules
from .scheduler import RefillScheduler
from .tray import Tray

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Configuration for a Block Blast game"""
    pieces_per_set: int = 3
    refill_delay: float = 0.5  # seconds between an emptied tray and the next batch
    random_seed: Optional[int] = None
    end_on_no_moves: bool = True


@dataclass(frozen=True, eq=False)
class GameState:
    board: Board
    tray: Tray
    score: int = 0
    level: int = 1
    lines_cleared_total: int = 0
    pieces_placed: int = 0

    @classmethod
    def empty(cls) -> "GameState":
        return cls(board=create_empty_board(), tray=Tray())

    @classmethod
    def initial(cls, rng: Optional[random.Random] = None, pieces_per_set: int = 3) -> "GameState":
        return cls(board=create_empty_board(), tray=Tray.drawn(pieces_per_set, rng))


@dataclass
class PlacementOutcome:
    success: bool
    score_gained: int = 0
    lines_cleared: int = 0
    rows: List[int] = field(default_factory=list)
    cols: List[int] = field(default_factory=list)
    tray_emptied: bool = False


@dataclass
class HoverPreview:
    row: int
    col: int
    is_valid: bool
    cells: List[Tuple[int, int]] = field(default_factory=list)


def apply_placement(
    state: GameState,
    tray_index: int,
    row: int,
    col: int,
    rules: Optional[ScoringRules] = None,
) -> Tuple[GameState, PlacementOutcome]:
    """Place tray piece `tray_index` with its top-left corner at (row, col).

    An illegal position returns the unchanged state and an unsuccessful
    outcome. A tray index outside the tray raises `OutOfRangeError`.
    """
    rules = rules or DEFAULT_RULES
    piece = state.tray[tray_index]
    if not can_place(state.board, piece.shape, row, col):
        return state, PlacementOutcome(success=False)

    placed = place(state.board, piece.shape, row, col, fill_value=int(piece.kind))
    cleared = clear_full_lines(placed, rules.line_clear_points)
    score, level = rules.apply_placement_score(state.score, cleared.score_delta)
    _, tray = state.tray.consume(tray_index)

    new_state = GameState(
        board=cleared.board,
        tray=tray,
        score=score,
        level=level,
        lines_cleared_total=state.lines_cleared_total + cleared.lines_cleared,
        pieces_placed=state.pieces_placed + 1,
    )
    outcome = PlacementOutcome(
        success=True,
        score_gained=score - state.score,
        lines_cleared=cleared.lines_cleared,
        rows=cleared.rows,
        cols=cleared.cols,
        tray_emptied=tray.is_empty,
    )
    return new_state, outcome


class BlockBlastGame:
    """Main game controller for Block Blast"""

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.refills = RefillScheduler()
        self.generation = 0
        self.history: List[GameState] = []
        self.state = GameState.empty()
        self.reset()

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def tray(self) -> Tray:
        return self.state.tray

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def refill_pending(self) -> bool:
        return self.refills.pending

    @property
    def game_over(self) -> bool:
        if not self.config.end_on_no_moves or self.tray.is_empty:
            return False
        return not can_place_any(self.board, [piece.shape for piece in self.tray])

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        # A refill scheduled before the reset must never land on the new tray
        self.refills.cancel()
        self.generation += 1
        self.history = []
        self.state = GameState.initial(self.rng, self.config.pieces_per_set)
        logger.debug("new game (generation %d), tray %s", self.generation, self.tray.kinds())

    def place_piece(self, piece_idx: int, row: int, col: int) -> PlacementOutcome:
        new_state, outcome = apply_placement(self.state, piece_idx, row, col, self.rules)
        if not outcome.success:
            return outcome
        self.history.append(self.state)
        self.state = new_state
        logger.debug(
            "placed tray[%d] at (%d, %d): +%d, %d lines, score %d",
            piece_idx, row, col, outcome.score_gained, outcome.lines_cleared, self.score,
        )
        if outcome.tray_emptied:
            if self.config.refill_delay > 0:
                self.refills.schedule(self.config.refill_delay, self.generation)
            else:
                self._refill()
        return outcome

    def update(self, dt: float) -> bool:
        """Advance the refill timer by `dt` seconds; True if the tray was refilled."""
        if self.refills.tick(dt, self.generation):
            self._refill()
            return True
        return False

    def _refill(self) -> None:
        self.state = replace(self.state, tray=self.tray.refill(self.config.pieces_per_set, self.rng))
        logger.debug("tray refilled: %s", self.tray.kinds())

    def undo(self) -> bool:
        if not self.history:
            return False
        self.state = self.history.pop()
        if not self.tray.is_empty:
            self.refills.cancel()
        return True

    def preview(self, piece_idx: int, row: int, col: int) -> HoverPreview:
        """Where tray piece `piece_idx` would land, and whether it may."""
        piece = self.tray[piece_idx]
        cells = [
            (row + dr, col + dc)
            for dr, dc in piece.cells()
            if 0 <= row + dr < BOARD_SIZE and 0 <= col + dc < BOARD_SIZE
        ]
        return HoverPreview(row=row, col=col, is_valid=can_place(self.board, piece.shape, row, col), cells=cells)

    def get_valid_actions(self) -> List[Tuple[int, int, int]]:
        """List of (piece_idx, row, col) valid actions"""
        actions: List[Tuple[int, int, int]] = []
        for piece_idx, piece in enumerate(self.tray):
            for row, col in valid_placements(self.board, piece.shape):
                actions.append((piece_idx, row, col))
        return actions

    def simulate_placement(self, piece_idx: int, row: int, col: int) -> PlacementOutcome:
        _, outcome = apply_placement(self.state, piece_idx, row, col, self.rules)
        return outcome

    def get_state(self) -> dict:
        return {
            "board": np.array(self.board),
            "tray": self.tray.kinds(),
            "pieces_remaining": len(self.tray),
            "score": self.score,
            "level": self.level,
            "total_lines_cleared": self.state.lines_cleared_total,
            "total_pieces_placed": self.state.pieces_placed,
            "refill_pending": self.refill_pending,
            "game_over": self.game_over,
            "filled_ratio": filled_ratio(self.board),
        }

    def get_game_stats(self) -> dict:
        placed = self.state.pieces_placed
        return {
            "final_score": self.score,
            "level": self.level,
            "pieces_placed": placed,
            "lines_cleared": self.state.lines_cleared_total,
            "final_fill_ratio": filled_ratio(self.board),
            "avg_score_per_piece": self.score / max(1, placed),
            "avg_lines_per_piece": self.state.lines_cleared_total / max(1, placed),
        }


def run_game_demo() -> None:  # pragma: no cover
    game = BlockBlastGame(GameConfig(refill_delay=0.0))
    print("=== Block Blast Demo ===")
    print(f"Initial tray: {game.tray.kinds()}")
    piece = game.tray[0]
    print(f"\nPiece 0 ({piece.kind.name}):")
    print_piece(piece.shape)
    outcome = game.place_piece(0, 0, 0)
    if outcome.success:
        print(f"\nPlaced piece! Score gained: {outcome.score_gained}, Lines cleared: {outcome.lines_cleared}")
        print("Board after placement:")
        print_board(game.board)
        print(f"Remaining tray: {game.tray.kinds()}")
        print(f"Score {game.score}, level {game.level}")
    else:
        print("Could not place piece at (0,0)")
    valid_actions = game.get_valid_actions()
    print(f"\nTotal valid actions available: {len(valid_actions)}")
    if valid_actions:
        print(f"Example valid action: {valid_actions[0]} (piece_idx, row, col)")


if __name__ == "__main__":  # pragma: no cover
    run_game_demo()
