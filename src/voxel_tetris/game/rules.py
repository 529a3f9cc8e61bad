from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_points: int = 100
    lines_per_level: int = 10
    base_interval_ms: int = 1000
    interval_step_ms: int = 100
    min_interval_ms: int = 100

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.line_clear_points * level

    def level_for_lines(self, lines: int) -> int:
        return lines // self.lines_per_level + 1

    def drop_interval_ms(self, level: int) -> int:
        """Gravity period: one step faster per level, floored at ``min_interval_ms``."""
        return max(self.min_interval_ms, self.base_interval_ms - (level - 1) * self.interval_step_ms)
