"""
Command-line interface for playing against and reviewing with the engine.
"""

import argparse
import logging
import random

from ultimate_ttt.api import parse_move_log, play_match
from ultimate_ttt.core.types import Mark
from ultimate_ttt.review import review_match
from ultimate_ttt.utils.config import DEFAULT_CONFIG, DIFFICULTIES, parse_difficulty


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play Ultimate Tic-Tac-Toe against a search engine"
    )
    parser.add_argument(
        "--difficulty", "-d",
        choices=list(DIFFICULTIES.keys()),
        default="deep",
        help="Engine strength (default: deep)",
    )
    parser.add_argument(
        "--players", "-p",
        type=str,
        default=None,
        help="Comma-separated human marks (e.g., 'X' or 'X,O'). Overrides --self-play.",
    )
    parser.add_argument(
        "--self-play",
        action="store_true",
        help="Engine plays both sides (no human players)",
    )
    parser.add_argument(
        "--budget-ms", "-b",
        type=float,
        default=DEFAULT_CONFIG.search.time_budget_ms,
        help=f"Deep search time budget per move in ms (default: {DEFAULT_CONFIG.search.time_budget_ms:.0f})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the shallow tiers",
    )
    parser.add_argument(
        "--review",
        type=str,
        default=None,
        help="Review a move log ('board,cell board,cell ...') and exit",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging (search depth reports)",
    )
    return parser.parse_args(argv)


def parse_human_players(players_str: str | None, self_play: bool) -> list[Mark]:
    """Parse and validate the human players argument."""
    if self_play and players_str is None:
        return []

    if players_str is None:
        return [Mark.X]  # Default: X is human

    humans = []
    for token in players_str.split(","):
        token = token.strip().upper()
        if not token:
            continue
        if token not in Mark.__members__:
            raise ValueError(
                f"Invalid --players value: '{players_str}'. Expected marks X and/or O (e.g., 'X,O')."
            )
        humans.append(Mark[token])
    return sorted(set(humans))


def run_review(raw_log: str, config=DEFAULT_CONFIG) -> None:
    moves = parse_move_log(raw_log)
    reviews = review_match(moves, config)
    for i, (move, review) in enumerate(zip(moves, reviews), start=1):
        player = "X" if i % 2 else "O"
        line = f"{i:3d}. {player} {move}  {review.label.value:<10} {review.score:>7d}"
        if review.best_move is not None:
            line += f"  (best: {review.best_move})"
        print(line)


def main(argv=None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    config = DEFAULT_CONFIG.with_budget(args.budget_ms)

    if args.review is not None:
        run_review(args.review, config)
        return

    difficulty = parse_difficulty(args.difficulty)
    human_players = parse_human_players(args.players, args.self_play)
    rng = random.Random(args.seed) if args.seed is not None else None

    play_match(
        difficulty=difficulty,
        human_players=human_players,
        config=config,
        rng=rng,
    )


if __name__ == "__main__":
    main()
