"""
Main entry point for running an automated letter-drop game.

Usage:
    python -m src.main
    python -m src.main config.yaml --mode clear --seed 7 --output results/run1.json --verbose
"""

import argparse
import json
import logging
import random
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field

from .board import load_dictionary, render_grid
from .engine import GameConfig, GameMode, GameOver, GameSession, VirtualScheduler


# Simulated time between two drops
THINK_TIME_MS = 250
MAX_STEPS = 100_000


class GameResult(BaseModel):
    """Summary of a finished game."""
    mode: GameMode
    seed: Optional[int] = None
    score: int = 0
    made_words: List[str] = Field(default_factory=list)
    drops: int = 0
    letters_remaining: int = 0
    status: str = ""
    final_grid: str = ""
    simulated_ms: float = 0.0
    started_at: str = ""
    ended_at: str = ""


def load_config(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def open_columns(session: GameSession) -> List[int]:
    """Columns whose top cell is still empty."""
    return [col for col in range(session.config.columns) if session.state.grid[col] is None]


def play_game(
    config: GameConfig,
    mode: GameMode = "classic",
    dictionary_paths: Optional[List[str]] = None,
    verbose: bool = False,
) -> GameResult:
    """
    Play one game, dropping each letter into a random open column.

    Runs on a simulated clock so the game finishes instantly.
    """
    dictionary = load_dictionary(dictionary_paths)
    scheduler = VirtualScheduler()
    session = GameSession(dictionary, scheduler, config=config)
    rng = random.Random(config.seed)

    started_at = datetime.now()
    session.start(mode)
    drops = 0

    for _ in range(MAX_STEPS):
        if session.is_over:
            break
        columns = open_columns(session)
        if not columns and not session.is_resolving and not len(session.coordinator):
            # Board full and nothing left to clear
            session.dispatch(GameOver())
            break
        if columns and session.drop(rng.choice(columns)):
            drops += 1
            if verbose:
                print(f"Drop {drops}: score {session.state.score}, "
                      f"{session.state.letters_remaining} letters left")
        scheduler.advance(THINK_TIME_MS)

    scheduler.run_all()

    state = session.state
    return GameResult(
        mode=mode,
        seed=config.seed,
        score=state.score,
        made_words=list(state.made_words),
        drops=drops,
        letters_remaining=state.letters_remaining,
        status=state.status,
        final_grid=render_grid(state.grid, config.columns),
        simulated_ms=scheduler.now(),
        started_at=started_at.isoformat(),
        ended_at=datetime.now().isoformat(),
    )


def save_result(result: GameResult, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(result.model_dump(), f, indent=2, default=str)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Play an automated letter-drop game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  rows: 6
  columns: 7
  total_letters: 100
  grace_period_ms: 1000
  seed: 42
  scoring:
    length_bonuses: {3: 0, 4: 1, 5: 3, 6: 4, 7: 7}
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults are used if omitted)"
    )
    parser.add_argument(
        "--mode",
        choices=["classic", "clear"],
        default="classic",
        help="Game mode (default: classic)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (overrides the config file)"
    )
    parser.add_argument(
        "--dictionary", "-d",
        action="append",
        help="Word list CSV file; may be repeated (default: bundled list)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save the result JSON"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress and engine logs"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else GameConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})

    dictionary_paths = args.dictionary
    if dictionary_paths is None and config.dictionary_path:
        dictionary_paths = [config.dictionary_path]

    try:
        result = play_game(config, args.mode, dictionary_paths, verbose=args.verbose)
    except ValueError as e:
        print(f"Error during game: {e}", file=sys.stderr)
        return 1

    if args.output:
        save_result(result, Path(args.output))
        if args.verbose:
            print(f"Results saved to: {args.output}")

    # Print summary
    print()
    print("=== Game Summary ===")
    print(f"Mode: {result.mode}")
    print(f"Score: {result.score}")
    print(f"Drops: {result.drops}")
    print(f"Words: {', '.join(result.made_words) or '-'}")
    print(result.final_grid)

    return 0


if __name__ == "__main__":
    sys.exit(main())
