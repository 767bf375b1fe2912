"""
BoardState - immutable game state container.

Sub-boards are shared between successive states: applying a move rebuilds
only the sub-board that was played in and the 9-entry macro array, so a
search can create states cheaply. All arrays are int8 and read-only.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ultimate_ttt.core.hashing import hash_position
from ultimate_ttt.core.types import (
    BOARD_COUNT,
    CELL_COUNT,
    EMPTY,
    Mark,
    Move,
    MoveRecord,
    Outcome,
)
from ultimate_ttt.games.game_rules import line_outcome

# Cell strings: each cell value maps to its display string
CELL_STRINGS = {0: " ", 1: "X", 2: "O"}


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class SubBoard:
    """
    One local 3x3 grid.

    The outcome is computed when the sub-board is built and never changes
    afterwards: a decided sub-board keeps its cells but accepts no new marks.
    """

    __slots__ = ('cells', 'outcome')

    def __init__(self, cells: np.ndarray, outcome: Outcome = Outcome.NONE):
        self.cells = _frozen(cells)
        self.outcome = outcome

    @classmethod
    def empty(cls) -> "SubBoard":
        return cls(np.zeros(CELL_COUNT, dtype=np.int8))

    @classmethod
    def from_cells(cls, cells: Sequence[int]) -> "SubBoard":
        """Build a sub-board from raw cells, deriving its outcome."""
        arr = np.array(cells, dtype=np.int8)
        return cls(arr, line_outcome(arr))

    def with_mark(self, cell: int, mark: Mark) -> "SubBoard":
        """Return a new sub-board with `mark` placed at `cell`."""
        cells = self.cells.copy()
        cells[cell] = mark
        outcome = self.outcome if self.outcome.decided else line_outcome(cells)
        return SubBoard(cells, outcome)

    @property
    def decided(self) -> bool:
        return self.outcome.decided

    def is_empty(self, cell: int) -> bool:
        return self.cells[cell] == EMPTY

    def empty_cells(self) -> List[int]:
        return [int(i) for i in np.flatnonzero(self.cells == EMPTY)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubBoard):
            return NotImplemented
        return self.outcome == other.outcome and np.array_equal(self.cells, other.cells)

    def __repr__(self) -> str:
        return f"SubBoard({self.cells.tolist()}, {self.outcome.name})"


class BoardState:
    """
    One point in a game of Ultimate Tic-Tac-Toe.

    Attributes:
        boards: the 9 sub-boards, row-major
        macro: int8 array of the 9 sub-board outcomes
        active_board: index the mover must play in, or None when free
        current_player: mark to move
        result: outcome of the whole game
        move_log: every move since the empty board, in order
        last_move: most recent move, or None for a fresh game
    """

    __slots__ = (
        'boards', 'macro', 'active_board', 'current_player',
        'result', 'move_log', 'last_move',
    )

    def __init__(
        self,
        boards: Tuple[SubBoard, ...],
        macro: np.ndarray,
        active_board: Optional[int],
        current_player: Mark,
        result: Outcome,
        move_log: Tuple[MoveRecord, ...] = (),
        last_move: Optional[Move] = None,
    ):
        self.boards = boards
        self.macro = _frozen(macro)
        self.active_board = active_board
        self.current_player = current_player
        self.result = result
        self.move_log = move_log
        self.last_move = last_move

    @classmethod
    def initial(cls, first_player: Mark = Mark.X) -> "BoardState":
        """Empty boards, free choice, `first_player` to move."""
        empty = SubBoard.empty()
        return cls(
            boards=(empty,) * BOARD_COUNT,
            macro=np.zeros(BOARD_COUNT, dtype=np.int8),
            active_board=None,
            current_player=first_player,
            result=Outcome.NONE,
        )

    @classmethod
    def from_cells(
        cls,
        cells: Sequence[Sequence[int]],
        current_player: Mark,
        active_board: Optional[int] = None,
        move_log: Iterable[MoveRecord] = (),
    ) -> "BoardState":
        """
        Build a position directly from a 9x9 cell grid.

        Outcomes are recomputed from the cells. Used for snapshots and test
        positions; no legality of the arrangement is checked.
        """
        boards = tuple(SubBoard.from_cells(row) for row in cells)
        macro = np.array([b.outcome for b in boards], dtype=np.int8)
        log = tuple(move_log)
        last = log[-1].move if log else None
        if active_board is not None and boards[active_board].decided:
            active_board = None
        return cls(boards, macro, active_board, current_player, line_outcome(macro), log, last)

    # ------------------------------------------------------------------ views

    @property
    def is_over(self) -> bool:
        return self.result.decided

    @property
    def cells(self) -> np.ndarray:
        """All cells as a (9, 9) array indexed [board, cell]."""
        return np.stack([b.cells for b in self.boards])

    def macro_outcomes(self) -> List[Outcome]:
        return [b.outcome for b in self.boards]

    def playable_boards(self) -> List[int]:
        """Sub-boards the current player may play in."""
        if self.result.decided:
            return []
        if self.active_board is not None:
            return [self.active_board]
        return [i for i, b in enumerate(self.boards) if not b.decided]

    def fingerprint(self) -> str:
        return hash_position(
            self.cells, self.macro, self.active_board,
            int(self.current_player), self.move_log,
        )

    # ------------------------------------------------------------- comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (
            self.active_board == other.active_board
            and self.current_player == other.current_player
            and self.result == other.result
            and self.move_log == other.move_log
            and self.last_move == other.last_move
            and np.array_equal(self.macro, other.macro)
            and all(a == b for a, b in zip(self.boards, other.boards))
        )

    def __hash__(self) -> int:
        return hash(self.fingerprint())

    def __repr__(self) -> str:
        return (
            f"BoardState(moves={len(self.move_log)}, to_move={self.current_player.name}, "
            f"active={self.active_board}, result={self.result.name})"
        )

    # -------------------------------------------------------------- rendering

    def state_string(self) -> str:
        """Pretty string of the full 9x9 grid with the macro outcomes."""
        grid = self.cells
        lines = ["╭───────┬───────┬───────╮"]
        for big_row in range(3):
            for small_row in range(3):
                parts = []
                for big_col in range(3):
                    b = big_row * 3 + big_col
                    row = grid[b, small_row * 3:small_row * 3 + 3]
                    parts.append(" ".join(CELL_STRINGS[int(v)] for v in row))
                lines.append("│ " + " │ ".join(parts) + " │")
            if big_row < 2:
                lines.append("├───────┼───────┼───────┤")
        lines.append("╰───────┴───────┴───────╯")

        macro = " ".join(
            "." if o is Outcome.NONE else ("=" if o is Outcome.DRAW else o.name)
            for o in self.macro_outcomes()
        )
        target = "free" if self.active_board is None else str(self.active_board)
        lines.append(f"macro: {macro}  to move: {self.current_player}  board: {target}")
        return "\n".join(lines)
