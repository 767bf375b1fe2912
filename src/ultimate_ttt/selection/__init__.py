"""
Selection module - one move-selection strategy per difficulty tier.

Provides the main entry point:
- select_move(): pick a move for the side to move at a given difficulty

Each strategy is a plain function (state, config, rng) -> Optional[Choice];
None means the position has no legal move (the game is over).
"""

from __future__ import annotations

import random
from typing import Callable, Dict, Optional

from ultimate_ttt.core.types import Choice, Difficulty
from ultimate_ttt.games.game_state import BoardState
from ultimate_ttt.selection.ranking import heuristic_move, rank_moves
from ultimate_ttt.selection.search import deep_move
from ultimate_ttt.selection.simple import random_move, tactical_move
from ultimate_ttt.utils.config import DEFAULT_CONFIG, EngineConfig

Strategy = Callable[[BoardState, Optional[EngineConfig], Optional[random.Random]], Optional[Choice]]

STRATEGIES: Dict[Difficulty, Strategy] = {
    Difficulty.RANDOM: random_move,
    Difficulty.TACTICAL: tactical_move,
    Difficulty.HEURISTIC: heuristic_move,
    Difficulty.DEEP: deep_move,
}


def select_move(
    state: BoardState,
    difficulty: Difficulty,
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Choice]:
    """
    Select a move for `state.current_player`.

    Args:
        state: Position to move from
        difficulty: Strategy tier
        config: Engine configuration (weights, Deep-tier time budget)
        rng: Random source for the Random and Tactical tiers

    Returns:
        The chosen move with its score where the tier computes one, or None
        if there is no legal move.
    """
    return STRATEGIES[difficulty](state, config or DEFAULT_CONFIG, rng)


__all__ = [
    "STRATEGIES",
    "select_move",
    "random_move",
    "tactical_move",
    "heuristic_move",
    "rank_moves",
    "deep_move",
]
