"""
Post-hoc move-quality classification.

A played move is compared against the Heuristic tier's recommendation for
the same position; the evaluation gap maps onto an ordered set of labels.
The Heuristic tier is used (not Deep) so a whole match can be reviewed at
interactive speed.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, NamedTuple, Optional, Tuple

from ultimate_ttt.core.types import Mark, Move, MoveRecord, Quality
from ultimate_ttt.evaluation.heuristic import evaluate
from ultimate_ttt.games.game_state import BoardState
from ultimate_ttt.games.ultimate import IllegalMoveError, apply_move, is_legal
from ultimate_ttt.selection.ranking import heuristic_move
from ultimate_ttt.utils.config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)

# Evaluation bar mapping: clamp, then 50 ± score / scale, kept inside [5, 95]
BAR_CLAMP = 2000
BAR_SCALE = 40
BAR_MIN = 5.0
BAR_MAX = 95.0


class MoveReview(NamedTuple):
    """Quality label for one move."""

    label: Quality
    score: int
    best_move: Optional[Move] = None


def classify(
    previous_state: BoardState,
    move: Tuple[int, int],
    config: Optional[EngineConfig] = None,
) -> MoveReview:
    """
    Label `move` played from `previous_state`.

    Args:
        previous_state: Position before the move.
        move: (board, cell) actually played.
        config: Evaluation weights and review thresholds.

    Returns:
        MoveReview. best_move is set only when a better move existed, i.e.
        for GOOD, INACCURACY and BLUNDER.

    Raises:
        IllegalMoveError: `move` is not legal in `previous_state`.
    """
    cfg = config or DEFAULT_CONFIG
    move = Move(int(move[0]), int(move[1]))
    mover = previous_state.current_player

    recommendation = heuristic_move(previous_state, cfg)
    if recommendation is None:
        # Finished position: there is nothing to compare against.
        return MoveReview(Quality.FORCED, evaluate(previous_state, mover, cfg.weights))

    if not is_legal(previous_state, move.board, move.cell):
        raise IllegalMoveError(f"Cannot review illegal move {move}")

    after = apply_move(previous_state, move.board, move.cell, validated=True)
    score_made = evaluate(after, mover, cfg.weights)

    best = recommendation.move
    best_after = apply_move(previous_state, best.board, best.cell, validated=True)
    score_best = evaluate(best_after, mover, cfg.weights)

    thresholds = cfg.review
    if move == best:
        label = Quality.BRILLIANT if score_made > thresholds.brilliant_above else Quality.BEST
        return MoveReview(label, score_made)

    diff = score_best - score_made
    if diff < thresholds.best_below:
        return MoveReview(Quality.BEST, score_made)
    if diff < thresholds.good_below:
        label = Quality.GOOD
    elif diff < thresholds.inaccuracy_below:
        label = Quality.INACCURACY
    else:
        label = Quality.BLUNDER
    return MoveReview(label, score_made, best)


def review_match(
    move_log: Iterable[MoveRecord | Move | tuple],
    config: Optional[EngineConfig] = None,
    initial: Optional[BoardState] = None,
) -> List[MoveReview]:
    """
    Classify every move of a stored match, replaying it move by move.

    Raises:
        IllegalMoveError: the log contains a move illegal in its position.
    """
    state = initial if initial is not None else BoardState.initial()
    reviews: List[MoveReview] = []
    for entry in move_log:
        board, cell = int(entry[0]), int(entry[1])
        reviews.append(classify(state, (board, cell), config))
        state = apply_move(state, board, cell)
    logger.debug("reviewed %d moves", len(reviews))
    return reviews


def evaluation_bar(
    state: BoardState,
    perspective: Mark = Mark.X,
    config: Optional[EngineConfig] = None,
) -> float:
    """
    Map the evaluation onto a 5-95 percentage for an evaluation indicator.

    50 means level; above 50 favours `perspective`.
    """
    cfg = config or DEFAULT_CONFIG
    raw = evaluate(state, perspective, cfg.weights)
    clamped = max(-BAR_CLAMP, min(BAR_CLAMP, raw))
    return max(BAR_MIN, min(BAR_MAX, 50.0 + clamped / BAR_SCALE))
