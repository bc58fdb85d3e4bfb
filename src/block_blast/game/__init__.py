"""Game module for Block Blast.

Exports the state engine and supporting pieces:
- PIECES / draw_random_pieces: the fixed piece catalog
- create_empty_board, can_place, place, clear_full_lines: board engine
- ScoringRules: placement and line scoring, levels
- Tray: the pieces on offer
- BlockBlastGame: game state holder with deferred tray refill
"""

from .errors import BlockBlastError, OutOfRangeError
from .pieces import PIECES, PieceDefinition, PieceKind, draw_random_pieces, piece_for_kind
from .board import (
    BOARD_SIZE,
    ClearResult,
    can_place,
    clear_full_lines,
    create_empty_board,
    place,
)
from .rules import ScoringRules, apply_placement_score, level_for_score
from .tray import Tray
from .scheduler import RefillScheduler
from .core import (
    BlockBlastGame,
    GameConfig,
    GameState,
    HoverPreview,
    PlacementOutcome,
    apply_placement,
)

__all__ = [
    "BlockBlastError",
    "OutOfRangeError",
    "PIECES",
    "PieceDefinition",
    "PieceKind",
    "draw_random_pieces",
    "piece_for_kind",
    "BOARD_SIZE",
    "ClearResult",
    "can_place",
    "clear_full_lines",
    "create_empty_board",
    "place",
    "ScoringRules",
    "apply_placement_score",
    "level_for_score",
    "Tray",
    "RefillScheduler",
    "BlockBlastGame",
    "GameConfig",
    "GameState",
    "HoverPreview",
    "PlacementOutcome",
    "apply_placement",
]
