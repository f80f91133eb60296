from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    placement_score: int = 10
    line_clear_base: int = 100

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        # Quadratic multi-line bonus: 100, 400, 900, 1600
        return self.line_clear_base * lines * lines

    def score_for_lock(self, lines: int) -> int:
        return self.placement_score + self.score_for_lines(lines)
