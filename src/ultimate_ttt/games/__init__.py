"""
Games module - Ultimate Tic-Tac-Toe state model and rules engine.
"""

from ultimate_ttt.games.game_state import BoardState, SubBoard
from ultimate_ttt.games.game_rules import WIN_LINES, line_outcome, board_full, winning_cells
from ultimate_ttt.games.ultimate import (
    IllegalMoveError,
    apply_move,
    initial_state,
    is_legal,
    legal_move_list,
    legal_moves,
    other,
    replay,
)
from ultimate_ttt.games.session import GameSession

__all__ = [
    "BoardState",
    "SubBoard",
    "GameSession",
    "IllegalMoveError",
    "WIN_LINES",
    "line_outcome",
    "board_full",
    "winning_cells",
    "initial_state",
    "is_legal",
    "apply_move",
    "legal_moves",
    "legal_move_list",
    "replay",
    "other",
]
