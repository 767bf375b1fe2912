"""
Best-first heuristic ranking (one ply, static evaluation).
"""

from __future__ import annotations

import random
from typing import List, Optional, Tuple

from ultimate_ttt.core.types import Choice, Move
from ultimate_ttt.evaluation.heuristic import evaluate
from ultimate_ttt.games.game_state import BoardState
from ultimate_ttt.games.ultimate import apply_move, legal_moves
from ultimate_ttt.utils.config import DEFAULT_CONFIG, EngineConfig


def rank_moves(state: BoardState, config: Optional[EngineConfig] = None) -> List[Tuple[Move, int]]:
    """
    Score every legal move by evaluating the resulting state for the mover.

    Returns:
        (move, score) pairs, best first. Equal scores keep legal_moves() order.
    """
    cfg = config or DEFAULT_CONFIG
    mover = state.current_player
    scored = [
        (m, evaluate(apply_move(state, m.board, m.cell, validated=True), mover, cfg.weights))
        for m in legal_moves(state)
    ]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def heuristic_move(
    state: BoardState,
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Choice]:
    """Top-ranked move and its score."""
    ranked = rank_moves(state, config)
    if not ranked:
        return None
    move, score = ranked[0]
    return Choice(move, score, 1)
