from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass
class ScoringRules:
    placement_points: int = 10
    line_clear_points: int = 100
    points_per_level: int = 500

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.line_clear_points

    def level_for_score(self, score: int) -> int:
        # Always derived from the total, never stepped on its own
        return score // self.points_per_level + 1

    def apply_placement_score(self, current_score: int, line_clear_score_delta: int) -> Tuple[int, int]:
        """Return (new_score, level) after one successful placement."""
        if current_score < 0 or line_clear_score_delta < 0:
            raise ValueError("scores never decrease")
        new_score = current_score + line_clear_score_delta + self.placement_points
        return new_score, self.level_for_score(new_score)


DEFAULT_RULES = ScoringRules()


def apply_placement_score(current_score: int, line_clear_score_delta: int) -> Tuple[int, int]:
    return DEFAULT_RULES.apply_placement_score(current_score, line_clear_score_delta)


def level_for_score(score: int) -> int:
    return DEFAULT_RULES.level_for_score(score)
