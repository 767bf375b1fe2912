"""
Static position evaluation.

Scores a BoardState from one player's perspective. Terms, strongest first:

1. Decisive result      ±win, draw = 0
2. Macro-line potential  two-in-a-row threats and open lines on the macro board
3. Captured sub-boards   center > corners > edges; drawn boards are dead weight
4. Tactical              where the last move sent the opponent
5. Positional            cell geometry of the last move (opponent-model scaled)

Terms 4 and 5 are signed by who made the last move: a move that hands the
opponent a free choice costs its maker, and credits the other side.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ultimate_ttt.core.types import CENTER, CORNERS, Mark, Outcome
from ultimate_ttt.evaluation.opponent import NEUTRAL, PositionalPreferences
from ultimate_ttt.games.game_rules import has_winning_cell, line_counts
from ultimate_ttt.games.game_state import BoardState
from ultimate_ttt.utils.config import DEFAULT_CONFIG, EvalWeights


def evaluate(
    state: BoardState,
    perspective: Mark,
    weights: Optional[EvalWeights] = None,
    preferences: Optional[PositionalPreferences] = None,
) -> int:
    """
    Score `state` for `perspective`. Positive = good for `perspective`.

    For decided games the score is exactly ±weights.win (or 0 for a draw), so
    evaluate(s, X) == -evaluate(s, O) whenever the result is decisive.
    """
    w = weights or DEFAULT_CONFIG.weights

    result = state.result
    if result.decided:
        if result is Outcome.DRAW:
            return 0
        return w.win if result.winner == perspective else -w.win

    score = macro_potential(state.macro, perspective, w)
    score += capture_value(state, perspective, w)
    score += tactical_penalty(state, perspective, w)
    score += positional_bonus(state, perspective, w, preferences or NEUTRAL)
    return int(score)


def macro_potential(macro: np.ndarray, perspective: Mark, w: EvalWeights) -> int:
    """Threat score over the 8 macro lines; blocked lines count for nobody."""
    own, opp, empty = line_counts(macro, perspective)
    mine = opp == 0
    theirs = own == 0

    score = w.macro_threat * int(np.count_nonzero(mine & (own == 2) & (empty == 1)))
    score += w.macro_open * int(np.count_nonzero(mine & (own == 1) & (empty == 2)))
    score -= w.macro_threat_against * int(np.count_nonzero(theirs & (opp == 2) & (empty == 1)))
    score -= w.macro_open_against * int(np.count_nonzero(theirs & (opp == 1) & (empty == 2)))
    return score


def _capture_weight(index: int, w: EvalWeights) -> int:
    if index == CENTER:
        return w.capture_center
    if index in CORNERS:
        return w.capture_corner
    return w.capture_edge


def capture_value(state: BoardState, perspective: Mark, w: EvalWeights) -> int:
    score = 0
    for i, sub in enumerate(state.boards):
        outcome = sub.outcome
        if outcome is Outcome.NONE:
            continue
        if outcome is Outcome.DRAW:
            score -= w.drawn_board
        elif outcome.winner == perspective:
            score += _capture_weight(i, w)
        else:
            score -= _capture_weight(i, w)
    return score


def tactical_penalty(state: BoardState, perspective: Mark, w: EvalWeights) -> int:
    """
    Cost of where the last move sent the opponent.

    A free choice costs `free_move`; any reachable sub-board in which the
    opponent can complete a line immediately costs `winnable_board` on top.
    """
    if state.last_move is None:
        return 0

    victim = state.current_player
    penalty = 0
    if state.active_board is None:
        penalty += w.free_move
    reachable = state.playable_boards()
    if any(has_winning_cell(state.boards[b].cells, victim) for b in reachable):
        penalty += w.winnable_board

    return penalty if victim == perspective else -penalty


def positional_bonus(
    state: BoardState,
    perspective: Mark,
    w: EvalWeights,
    preferences: PositionalPreferences,
) -> int:
    if state.last_move is None:
        return 0
    cell = state.last_move.cell
    if cell == CENTER:
        base = w.position_center
    elif cell in CORNERS:
        base = w.position_corner
    else:
        base = w.position_edge
    bonus = int(round(base * preferences.weight_for(cell)))
    mover = state.current_player.other
    return bonus if mover == perspective else -bonus
