"""
JSONL logger for Rat-Monopoly game events.

Writes the engine's narrative log and the session's recorded inputs to a
JSONL file, one JSON object per line.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Union

from ratopoly.game.state import GameState

logger = logging.getLogger(__name__)


class GameLogger:
    """Logger that writes game events to a JSONL file."""

    def __init__(self, log_file: Union[str, Path, None] = None, game_id: Optional[str] = None):
        """
        Initialize game logger.

        Args:
            log_file: Path to log file. If None, generates timestamped filename.
            game_id: Identifier stamped on every line.
        """
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"ratopoly_game_{timestamp}.jsonl"

        self.log_file = Path(log_file)
        self.game_id = game_id
        self.event_count = 0
        self._engine_last_idx = 0
        self._inputs_last_idx = 0

        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.log_file.write_text("")

    def log_event(self, event_type: str, **kwargs: Any) -> None:
        """
        Log a game event to the JSONL file.

        Args:
            event_type: Type of event (e.g., "game_start", "dice_roll", "purchase")
            **kwargs: Additional event data
        """
        event = {
            "event_id": self.event_count,
            "timestamp": datetime.now().isoformat(),
            "event_type": event_type,
            **kwargs,
        }
        if self.game_id is not None:
            event["game_id"] = self.game_id

        with self.log_file.open("a") as f:
            f.write(json.dumps(event) + "\n")

        self.event_count += 1

    def flush_engine_events(self, game: GameState) -> int:
        """Write engine log entries not yet flushed. Returns the number written."""
        events = game.log
        if self._engine_last_idx >= len(events):
            return 0

        names = {p.player_id: p.name for p in game.players}
        wrote = 0
        for event in events[self._engine_last_idx :]:
            data = event.to_dict()
            etype = data.pop("event_type")
            data["turn_number"] = event.turn_number
            if data.get("player_id") is not None:
                data["player_name"] = names.get(data["player_id"])
            if etype == "game_end":
                data["final_standings"] = [
                    {
                        "player_id": p.player_id,
                        "player_name": p.name,
                        "rubbies": p.rubbies,
                        "indulgences": p.indulgences,
                        "alive": p.alive,
                    }
                    for p in game.players
                ]
            self.log_event(etype, **data)
            wrote += 1

        self._engine_last_idx = len(events)
        return wrote

    def flush_inputs(self, inputs: Sequence[Any]) -> int:
        """Write recorded session inputs not yet flushed. Returns the number written."""
        if self._inputs_last_idx >= len(inputs):
            return 0
        wrote = 0
        for item in inputs[self._inputs_last_idx :]:
            data = item.to_dict() if hasattr(item, "to_dict") else dict(item)
            self.log_event("input", **data)
            wrote += 1
        self._inputs_last_idx = len(inputs)
        return wrote

    def log_game_start(self, player_names: Iterable[str], seed: Optional[int], cpu_names: Iterable[str] = ()):
        """Log game start event."""
        player_names = list(player_names)
        self.log_event(
            "session_start",
            num_players=len(player_names),
            player_names=player_names,
            cpu_names=list(cpu_names),
            seed=seed,
        )

    def log_player_state(self, game: GameState) -> None:
        """Log a state line for every participant."""
        for player in game.players:
            self.log_event(
                "player_state",
                turn_number=game.turn_number,
                player_id=player.player_id,
                player_name=player.name,
                rubbies=player.rubbies,
                indulgences=player.indulgences,
                alive=player.alive,
                position=str(player.position),
                in_hell=player.in_hell,
                properties=sorted(player.owned_properties),
            )

    def log_summary(self, game: GameState) -> Dict[str, Any]:
        """Log and return a final summary line."""
        win = game.status.win
        summary = {
            "turn_number": game.turn_number,
            "winner_id": win.winner_id if win else None,
            "winner_name": game.get_player(win.winner_id).name if win else None,
            "reason": win.reason.value if win else None,
            "jackpot": game.jackpot,
            "events_logged": len(game.log),
        }
        self.log_event("summary", **summary)
        logger.info("Game log written to %s", self.log_file)
        return summary
