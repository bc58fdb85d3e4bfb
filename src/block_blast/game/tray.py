from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .errors import OutOfRangeError
from .pieces import PieceDefinition, draw_random_pieces


@dataclass(frozen=True)
class Tray:
    """Pieces currently offered to the player.

    Trays are immutable: `refill` and `consume` return new trays. The tray
    never refills itself; whoever owns it decides when an empty tray gets a
    new batch.
    """

    pieces: Tuple[PieceDefinition, ...] = ()

    @classmethod
    def drawn(cls, count: int = 3, rng: Optional[random.Random] = None) -> "Tray":
        return cls(tuple(draw_random_pieces(count, rng)))

    def refill(self, count: int = 3, rng: Optional[random.Random] = None) -> "Tray":
        """Replace the whole contents with a fresh draw from the catalog."""
        return Tray.drawn(count, rng)

    def consume(self, index: int) -> Tuple[PieceDefinition, "Tray"]:
        """Remove the piece at `index`, keeping the order of the rest."""
        if not 0 <= index < len(self.pieces):
            raise OutOfRangeError(f"tray index {index} out of range for {len(self.pieces)} pieces")
        piece = self.pieces[index]
        return piece, Tray(self.pieces[:index] + self.pieces[index + 1 :])

    @property
    def is_empty(self) -> bool:
        return len(self.pieces) == 0

    def kinds(self) -> List[int]:
        return [int(piece.kind) for piece in self.pieces]

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self) -> Iterator[PieceDefinition]:
        return iter(self.pieces)

    def __getitem__(self, index: int) -> PieceDefinition:
        if not 0 <= index < len(self.pieces):
            raise OutOfRangeError(f"tray index {index} out of range for {len(self.pieces)} pieces")
        return self.pieces[index]
