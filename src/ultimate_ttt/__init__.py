"""
Ultimate Tic-Tac-Toe - rules engine, heuristic evaluation and search.

This package provides an immutable game-state model, a pure rules engine,
four engine tiers from random to time-boxed alpha-beta search, and a
move-quality analyzer for reviewing finished games.

Quick Start:
    from ultimate_ttt import BoardState, Difficulty, apply_move, select_move

    state = BoardState.initial()
    choice = select_move(state, Difficulty.DEEP)
    state = apply_move(state, *choice.move)

Modules:
    core       - Fundamental types (Mark, Outcome, Move) and hashing
    games      - BoardState, rules engine, GameSession (undo/redo/sync)
    evaluation - Heuristic evaluator and opponent modelling
    selection  - Move selection strategies per difficulty tier
    review     - Move-quality classification for played games
"""

from ultimate_ttt.api import (
    BoardState,
    GameSession,
    Difficulty,
    Mark,
    Move,
    Quality,
    MoveReview,
    IllegalMoveError,
    apply_move,
    is_legal,
    legal_moves,
    replay,
    evaluate,
    select_move,
    classify,
    review_match,
    evaluation_bar,
    play_match,
)

from ultimate_ttt.core import Outcome, MoveRecord, Choice
from ultimate_ttt.utils.config import DEFAULT_CONFIG, EngineConfig

__version__ = "1.0.0"

__all__ = [
    # Main API
    "select_move",
    "classify",
    "review_match",
    "evaluation_bar",
    "evaluate",
    "apply_move",
    "is_legal",
    "legal_moves",
    "replay",
    "play_match",
    # Types
    "BoardState",
    "GameSession",
    "Difficulty",
    "Mark",
    "Outcome",
    "Move",
    "MoveRecord",
    "Choice",
    "Quality",
    "MoveReview",
    "IllegalMoveError",
    # Config
    "EngineConfig",
    "DEFAULT_CONFIG",
]
