"""
Shallow strategies: uniform random and one-ply tactics.
"""

from __future__ import annotations

import random
from typing import Optional

from ultimate_ttt.core.types import Choice
from ultimate_ttt.games.game_rules import has_winning_cell, winning_cells
from ultimate_ttt.games.game_state import BoardState
from ultimate_ttt.games.ultimate import apply_move, legal_move_list
from ultimate_ttt.utils.config import EngineConfig


def random_move(
    state: BoardState,
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Choice]:
    """Uniform choice over the legal moves."""
    moves = legal_move_list(state)
    if not moves:
        return None
    return Choice((rng or random).choice(moves))


def tactical_move(
    state: BoardState,
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Choice]:
    """
    One-ply tactics.

    In order:
      1. complete a sub-board for the mover
      2. take the cell where the opponent would complete a sub-board
      3. random among moves that do not send the opponent somewhere they can
         complete a sub-board immediately (all moves if none qualify)
    """
    moves = legal_move_list(state)
    if not moves:
        return None

    me = state.current_player
    opp = me.other
    boards = {m.board for m in moves}

    wins = {b: winning_cells(state.boards[b].cells, me) for b in boards}
    for m in moves:
        if m.cell in wins[m.board]:
            return Choice(m)

    blocks = {b: winning_cells(state.boards[b].cells, opp) for b in boards}
    for m in moves:
        if m.cell in blocks[m.board]:
            return Choice(m)

    safe = []
    for m in moves:
        child = apply_move(state, m.board, m.cell, validated=True)
        if not any(has_winning_cell(child.boards[b].cells, opp) for b in child.playable_boards()):
            safe.append(m)

    return Choice((rng or random).choice(safe or moves))
