"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GameConfig:
    """Rules constants for a Ratopoly session."""

    starting_rubbies: int = 300
    go_payout: int = 200
    firing_squad_penalty: int = 1000

    # Minimum die value needed on hell-escape attempts 1, 2, 3+.
    escape_thresholds: Tuple[int, ...] = (6, 5, 4)
    firing_squad_attempt: int = 4

    indulgence_win: int = 3
    wealth_win: int = 3000

    min_players: int = 2

    def required_escape_roll(self, attempt: int) -> int:
        """Die value needed to escape hell on the given attempt (1-based)."""
        index = min(max(attempt, 1), len(self.escape_thresholds)) - 1
        return self.escape_thresholds[index]
