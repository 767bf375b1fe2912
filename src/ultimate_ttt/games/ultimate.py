"""
Ultimate Tic-Tac-Toe rules engine.

Pure functions over BoardState: legality, transition, move enumeration and
replay. Nothing here mutates its input; every transition returns a new state
sharing the untouched sub-boards with its parent.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from ultimate_ttt.core.types import BOARD_COUNT, CELL_COUNT, Mark, Move, MoveRecord, Outcome
from ultimate_ttt.games.game_rules import line_outcome
from ultimate_ttt.games.game_state import BoardState


class IllegalMoveError(ValueError):
    """A move was applied that fails is_legal()."""


def other(mark: Mark) -> Mark:
    return mark.other


def initial_state(first_player: Mark = Mark.X) -> BoardState:
    return BoardState.initial(first_player)


def is_legal(state: BoardState, board: int, cell: int) -> bool:
    """Return True if the current player may play `cell` of sub-board `board`."""
    if not (0 <= board < BOARD_COUNT and 0 <= cell < CELL_COUNT):
        return False
    if state.result.decided:
        return False
    if state.active_board is not None and state.active_board != board:
        return False
    target = state.boards[board]
    if target.decided:
        return False
    return target.is_empty(cell)


def apply_move(
    state: BoardState,
    board: int,
    cell: int,
    *,
    validated: bool = False,
) -> BoardState:
    """
    Apply a move and return the resulting state.

    Args:
        state: Position to play from. Never modified.
        board: Sub-board index 0-8.
        cell: Cell index 0-8 within that sub-board.
        validated: If True, skip the legality check (caller guarantees the
                   move came from legal_moves()).

    Returns:
        The new state. A finished game is returned unchanged.

    Raises:
        IllegalMoveError: the move is not legal and `validated` is False.
    """
    if state.result.decided:
        return state
    if not validated and not is_legal(state, board, cell):
        raise IllegalMoveError(
            f"Illegal move {board},{cell} for {state.current_player} "
            f"(active board: {'free' if state.active_board is None else state.active_board})"
        )

    player = state.current_player
    boards = list(state.boards)
    before = boards[board]
    after = before.with_mark(cell, player)
    boards[board] = after

    macro = state.macro
    result = state.result
    if after.outcome != before.outcome:
        macro = macro.copy()
        macro[board] = after.outcome
        result = line_outcome(macro)

    # The opponent is sent to the board matching the cell just played,
    # unless that board is already finished.
    next_board: Optional[int] = cell
    if boards[cell].decided:
        next_board = None

    return BoardState(
        boards=tuple(boards),
        macro=macro,
        active_board=next_board,
        current_player=player.other,
        result=result,
        move_log=state.move_log + (MoveRecord(board, cell, player),),
        last_move=Move(board, cell),
    )


def legal_moves(state: BoardState) -> Iterator[Move]:
    """
    Lazily enumerate legal moves.

    Order is ascending sub-board index, then ascending cell index. Search
    tie-breaking depends on this order.
    """
    for b in state.playable_boards():
        sub = state.boards[b]
        if sub.decided:
            continue
        for c in sub.empty_cells():
            yield Move(b, c)


def legal_move_list(state: BoardState) -> List[Move]:
    return list(legal_moves(state))


def replay(
    move_log: Iterable[MoveRecord | Move | tuple],
    initial: Optional[BoardState] = None,
) -> BoardState:
    """
    Fold apply_move over a move log.

    Used for undo (replay a truncated prefix), redo (prefix plus the undone
    entries) and review. Entries may be MoveRecord, Move or plain
    (board, cell[, player]) tuples; the recorded player is not trusted and is
    re-derived from alternation.

    Raises:
        IllegalMoveError: an entry is illegal in the position it is applied to,
            or the log continues past the end of the game.
    """
    state = initial if initial is not None else BoardState.initial()
    for i, entry in enumerate(move_log):
        board, cell = int(entry[0]), int(entry[1])
        if state.result.decided:
            raise IllegalMoveError(f"Move {i} ({board},{cell}) played after the game ended")
        state = apply_move(state, board, cell)
    return state


def winner(state: BoardState) -> Optional[Mark]:
    return state.result.winner


__all__ = [
    "IllegalMoveError",
    "Outcome",
    "other",
    "initial_state",
    "is_legal",
    "apply_move",
    "legal_moves",
    "legal_move_list",
    "replay",
    "winner",
]
