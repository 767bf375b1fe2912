"""
Deep tier: time-boxed iterative-deepening negamax with alpha-beta pruning.

The wall-clock deadline is checked before every node expansion. When it has
passed, the recursion returns CUT_SHORT (None) instead of a score and every
frame above it returns CUT_SHORT unchanged, so an unfinished depth unwinds
without touching the result of the last completed depth.
"""

from __future__ import annotations

import logging
import random
import time
from typing import List, NamedTuple, Optional

from ultimate_ttt.core.types import Choice, Move, Outcome
from ultimate_ttt.evaluation.heuristic import evaluate
from ultimate_ttt.evaluation.opponent import NEUTRAL, PositionalPreferences, analyze_opponent
from ultimate_ttt.games.game_rules import winning_cells
from ultimate_ttt.games.game_state import BoardState
from ultimate_ttt.games.ultimate import apply_move, legal_move_list
from ultimate_ttt.utils.config import DEFAULT_CONFIG, EngineConfig, EvalWeights

logger = logging.getLogger(__name__)

# Returned by the recursion when the deadline interrupted it
CUT_SHORT = None

_INF = 10 ** 9
_TOTAL_CELLS = 81


class Deadline:
    """Monotonic wall-clock deadline."""

    __slots__ = ('expires',)

    def __init__(self, budget_ms: float):
        self.expires = time.perf_counter() + budget_ms / 1000.0

    def passed(self) -> bool:
        return time.perf_counter() >= self.expires


class RootResult(NamedTuple):
    move: Optional[Move]
    score: int
    completed: bool


def order_moves(state: BoardState, moves: List[Move]) -> List[Move]:
    """
    Cheap presort for inner nodes.

    Sub-board captures first, then blocks, then everything else; moves that
    hand the opponent a free choice go last. Stable within each class.
    """
    me = state.current_player
    boards = {m.board for m in moves}
    wins = {b: winning_cells(state.boards[b].cells, me) for b in boards}
    blocks = {b: winning_cells(state.boards[b].cells, me.other) for b in boards}

    def key(m: Move) -> int:
        k = 0
        if m.cell in wins[m.board]:
            k -= 2
        elif m.cell in blocks[m.board]:
            k -= 1
        if m.cell != m.board and state.boards[m.cell].decided:
            k += 3
        return k

    return sorted(moves, key=key)


class AlphaBeta:
    """
    One search invocation. Holds no state shared with other invocations.
    """

    def __init__(
        self,
        weights: EvalWeights,
        deadline: Deadline,
        preferences: PositionalPreferences = NEUTRAL,
    ):
        self.weights = weights
        self.deadline = deadline
        self.preferences = preferences
        self.nodes = 0

    def root(self, state: BoardState, moves: List[Move], depth: int) -> RootResult:
        """
        Search every root move to `depth` plies.

        On a cut-off the result is marked incomplete and carries the best
        move among the root children that did finish.
        """
        alpha = -_INF
        best_move: Optional[Move] = None
        best_score = -_INF

        for m in moves:
            child = apply_move(state, m.board, m.cell, validated=True)
            value = self.negamax(child, depth - 1, -_INF, -alpha)
            if value is CUT_SHORT:
                return RootResult(best_move, best_score, False)
            score = -value
            if score > best_score:
                best_score, best_move = score, m
            if score > alpha:
                alpha = score

        return RootResult(best_move, best_score, True)

    def negamax(self, state: BoardState, depth: int, alpha: int, beta: int) -> Optional[int]:
        """Score of `state` for the side to move, or CUT_SHORT."""
        if self.deadline.passed():
            return CUT_SHORT
        self.nodes += 1

        result = state.result
        if result.decided:
            if result is Outcome.DRAW:
                return 0
            # Offset by remaining depth: faster wins, slower losses
            swing = self.weights.win + depth
            return swing if result.winner == state.current_player else -swing

        if depth <= 0:
            return evaluate(state, state.current_player, self.weights, self.preferences)

        moves = legal_move_list(state)
        if depth > 1:
            moves = order_moves(state, moves)

        best = -_INF
        for m in moves:
            child = apply_move(state, m.board, m.cell, validated=True)
            value = self.negamax(child, depth - 1, -beta, -alpha)
            if value is CUT_SHORT:
                return CUT_SHORT
            score = -value
            if score > best:
                best = score
            if best > alpha:
                alpha = best
            if alpha >= beta:
                break
        return best


def deep_move(
    state: BoardState,
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Choice]:
    """
    Iterative deepening under config.search.time_budget_ms.

    Returns the best move of the last fully completed depth. If no depth
    completes, the best finished root child of the interrupted depth is used,
    and failing that the first legal move. Never None while a legal move
    exists.
    """
    cfg = config or DEFAULT_CONFIG
    moves = legal_move_list(state)
    if not moves:
        return None

    started = time.perf_counter()
    deadline = Deadline(cfg.search.time_budget_ms)

    preferences = NEUTRAL
    if cfg.search.use_opponent_model:
        preferences = analyze_opponent(state.move_log, state.current_player.other)

    search = AlphaBeta(cfg.weights, deadline, preferences)
    remaining = _TOTAL_CELLS - len(state.move_log)
    max_depth = max(cfg.search.start_depth, min(cfg.search.max_depth, remaining))

    best: Optional[Choice] = None
    partial: Optional[Choice] = None
    ordered = moves

    for depth in range(cfg.search.start_depth, max_depth + 1):
        outcome = search.root(state, ordered, depth)
        elapsed_ms = (time.perf_counter() - started) * 1000.0

        if not outcome.completed:
            logger.debug(
                "depth %d cut short after %.1f ms (%d nodes)", depth, elapsed_ms, search.nodes
            )
            if best is None and outcome.move is not None:
                partial = Choice(outcome.move, outcome.score, 0)
            break

        best = Choice(outcome.move, outcome.score, depth)
        logger.debug(
            "depth %d: best %s score %d (%.1f ms, %d nodes)",
            depth, outcome.move, outcome.score, elapsed_ms, search.nodes,
        )

        if abs(outcome.score) >= cfg.weights.win:
            break  # proven result, deeper search cannot improve on it

        ordered = [outcome.move] + [m for m in moves if m != outcome.move]

    if best is not None:
        return best
    if partial is not None:
        return partial
    logger.debug("no search result within %.0f ms budget; playing first legal move",
                 cfg.search.time_budget_ms)
    return Choice(moves[0], None, 0)


__all__ = [
    "CUT_SHORT",
    "Deadline",
    "AlphaBeta",
    "RootResult",
    "order_moves",
    "deep_move",
]
