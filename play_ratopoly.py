#!/usr/bin/env python3
"""
Minimal CLI for playing and simulating Rat-Monopoly games.

By default every participant is a CPU rat. Pass ``--human NAME`` to take a
seat yourself; you will be prompted for each action on your turn.
"""

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from ratopoly.game.rules import ACTION_INPUTS
from ratopoly.game.state import GameState
from ratopoly.game_logger import GameLogger
from ratopoly.services import GameSession
from ratopoly.settings import get_settings

logger = logging.getLogger("play_ratopoly")


def print_game_state(game: GameState):
    """Print current game state."""
    print("\n" + "=" * 60)
    print(f"TURN {game.turn_number} | phase {game.phase.value} | jackpot {game.jackpot}")
    print("=" * 60)

    for player in game.players:
        if not player.alive:
            status = "DEAD"
        elif player.in_hell:
            status = f"IN HELL ({player.hell_escapes} attempts)"
        else:
            status = f"at {game.get_board(player.board_id).get_space(player.space_index).name}"

        marker = "*" if player.player_id == game.current_player.player_id else " "
        print(
            f"{marker} {player.name}: {player.rubbies} rubbies | "
            f"{player.indulgences} indulgences | "
            f"{len(player.owned_properties)} properties | {status}"
        )


def print_game_summary(game: GameState):
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER" if game.is_over else "GAME STOPPED")
    print("=" * 60)

    win = game.status.win
    if win is not None:
        winner = game.get_player(win.winner_id)
        print(f"\nWinner: {winner.name} ({win.reason.value})")
        print(f"Final Rubbies: {winner.rubbies}")
        print(f"Indulgences: {winner.indulgences}")

    print("\nFinal Standings:")
    for player in game.players:
        status = f"{player.rubbies} rubbies" if player.alive else "DEAD"
        print(f"  {player.name}: {status}")

    print(f"\nTotal Turns: {game.turn_number}")
    print(f"Jackpot left: {game.jackpot}")


def _prompt_int(label: str, low: int = 1, high: int = 6) -> Optional[int]:
    raw = input(f"  {label} [{low}-{high}, blank = roll for me]: ").strip()
    if not raw:
        return None
    value = int(raw)
    if not low <= value <= high:
        raise ValueError(f"{label} must be between {low} and {high}")
    return value


def prompt_human(session: GameSession) -> None:
    """Ask the human at the table what to do and apply it."""
    game = session.state
    legal = session.legal_actions()
    print(f"\n{game.current_player.name}, choose an action ({game.phase.value}):")
    for index, action in enumerate(legal, start=1):
        print(f"  {index}. {action.action_type.value}")

    while True:
        try:
            choice = input("> ").strip()
            index = int(choice) if choice else 1
            if not 1 <= index <= len(legal):
                raise IndexError(f"pick a number between 1 and {len(legal)}")
            kind = legal[index - 1].action_type
            params = {}
            inputs = ACTION_INPUTS[kind]
            if "face" in inputs:
                params["face"] = _prompt_int("Face to call")
            elif "roll" in inputs:
                params["roll"] = _prompt_int("Die value")
            session.perform(kind, **params)
            return
        except (ValueError, IndexError) as e:
            print(f"  Invalid choice: {e}")


def simulate_game(
    players: List[str],
    humans: List[str],
    agent_type: str = "heuristic",
    seed: Optional[int] = None,
    verbose: bool = True,
    max_steps: int = 5000,
    log_file: Optional[str] = None,
    steer: bool = False,
    shuffle: bool = False,
) -> GameState:
    """
    Play a complete game of Rat-Monopoly.

    Args:
        players: Participant names in turn order.
        humans: Names played from the keyboard; the rest are CPU rats.
        agent_type: Type of AI ('heuristic' or 'random')
        seed: Random seed for reproducibility
        verbose: Whether to print detailed output
        max_steps: Safety cap on transitions
        log_file: Path to JSONL log file (None = timestamped file in log_dir)
        steer: Let heuristic rats pick their own die faces
        shuffle: Shuffle the deck before the first draw
    """
    settings = get_settings()
    if log_file is None:
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        log_file = str(Path(settings.log_dir) / f"ratopoly_game_{timestamp}.jsonl")
    game_log = GameLogger(log_file)

    cpu_names = [name for name in players if name not in humans]
    session = GameSession.create(
        players,
        cpu_names,
        seed=seed,
        agent_type=agent_type,
        steer=steer,
        shuffle=shuffle,
    )
    game_log.log_game_start(players, seed, cpu_names)
    game_log.flush_engine_events(session.state)

    if verbose:
        print(f"Starting game with {len(players)} rats ({len(cpu_names)} CPU, {agent_type} agents)")
        print(f"Seed: {seed}")
        print(f"Logging to: {game_log.log_file}")

    delay = settings.cpu_delay_ms / 1000.0 if humans else 0.0
    last_turn_number = -1
    steps = 0
    while not session.is_over and steps < max_steps:
        steps += 1
        game = session.state

        if game.turn_number != last_turn_number:
            last_turn_number = game.turn_number
            game_log.log_player_state(game)
            if verbose:
                print_game_state(game)

        if session.is_cpu_turn():
            if delay:
                time.sleep(delay)
            before = session.state
            after = session.step()
            if after is before:
                logger.warning("CPU made no progress; stopping")
                break
            if verbose:
                for event in after.log[len(before.log) :]:
                    print(f"  {event}")
        else:
            before = session.state
            prompt_human(session)
            if verbose:
                for event in session.state.log[len(before.log) :]:
                    print(f"  {event}")

        game_log.flush_engine_events(session.state)
        game_log.flush_inputs(session.inputs)

    if steps >= max_steps and not session.is_over:
        print(f"\n!!! SAFETY LIMIT HIT ({max_steps} steps) !!!")

    game_log.flush_engine_events(session.state)
    game_log.flush_inputs(session.inputs)
    game_log.log_summary(session.state)

    if verbose:
        print_game_summary(session.state)
        print(f"\nGame logged to: {game_log.log_file}")

    return session.state


def main():
    """Main entry point for CLI."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Play or simulate a Rat-Monopoly game")
    parser.add_argument(
        "--players",
        type=str,
        default=settings.players,
        help="Participant names, comma separated (at least two)",
    )
    parser.add_argument(
        "--human",
        action="append",
        default=[],
        help="Name of a participant played from the keyboard (repeatable)",
    )
    parser.add_argument(
        "--agent",
        type=str,
        default="heuristic",
        choices=["heuristic", "random"],
        help="AI agent type",
    )
    parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument("--steer", action="store_true", help="Heuristic rats choose their own die faces")
    parser.add_argument("--shuffle", action="store_true", help="Shuffle the deck before play")
    parser.add_argument(
        "--max-steps",
        type=int,
        default=settings.max_steps,
        help="Safety cap on transitions",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Path to JSONL log file (default: auto-generated timestamp in log_dir)",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    players = [name.strip() for name in args.players.split(",") if name.strip()]
    simulate_game(
        players=players,
        humans=args.human,
        agent_type=args.agent,
        seed=args.seed,
        verbose=not args.quiet,
        max_steps=args.max_steps,
        log_file=args.log_file,
        steer=args.steer,
        shuffle=args.shuffle,
    )


if __name__ == "__main__":
    main()
