from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class RefillTicket:
    generation: int
    remaining: float


class RefillScheduler:
    """Countdown for the pause between an emptied tray and the next batch.

    The owner advances it with `tick(dt)` from its update loop. Each ticket
    carries the game generation it was scheduled in; a ticket from an older
    generation (the game was reset meanwhile) is dropped instead of firing.
    """

    def __init__(self) -> None:
        self._ticket: Optional[RefillTicket] = None

    @property
    def pending(self) -> bool:
        return self._ticket is not None

    @property
    def remaining(self) -> float:
        return self._ticket.remaining if self._ticket is not None else 0.0

    def schedule(self, delay: float, generation: int) -> None:
        self._ticket = RefillTicket(generation=generation, remaining=max(0.0, float(delay)))
        logger.debug("refill scheduled in %.3fs (generation %d)", self._ticket.remaining, generation)

    def cancel(self) -> None:
        if self._ticket is not None:
            logger.debug("refill for generation %d cancelled", self._ticket.generation)
        self._ticket = None

    def tick(self, dt: float, generation: int) -> bool:
        """Advance by `dt` seconds (negative counts as 0); True exactly once when the refill is due."""
        ticket = self._ticket
        if ticket is None:
            return False
        if ticket.generation != generation:
            logger.debug("dropping stale refill from generation %d", ticket.generation)
            self._ticket = None
            return False
        ticket.remaining = max(0.0, ticket.remaining - max(0.0, dt))
        if ticket.remaining > 0.0:
            return False
        self._ticket = None
        return True
