"""
NumPy line utilities shared by sub-boards and the macro board.

Every 3x3 grid in the game is a flat int8 array of length 9 using the
encoding from ultimate_ttt.core.types. A single line-detection routine is
used for both levels so "line complete" never has two definitions.
"""

from __future__ import annotations

from typing import List

import numpy as np

from ultimate_ttt.core.types import EMPTY, Mark, Outcome

# Pre-computed winning lines (indices into a flattened 3x3 grid)
WIN_LINES = np.array([
    [0, 1, 2], [3, 4, 5], [6, 7, 8],  # rows
    [0, 3, 6], [1, 4, 7], [2, 5, 8],  # cols
    [0, 4, 8], [2, 4, 6],             # diagonals
], dtype=np.intp)

_DRAW = int(Outcome.DRAW)


def line_outcome(cells: np.ndarray) -> Outcome:
    """
    Outcome of a 3x3 grid.

    Lines are checked before fullness so a move filling the last cell with a
    completed line is a win, not a draw. The first matching line wins. Drawn
    entries (macro board only) never form a line.
    """
    trios = cells[WIN_LINES]
    first = trios[:, 0]
    hits = (
        (first != EMPTY)
        & (first != _DRAW)
        & (trios[:, 1] == first)
        & (trios[:, 2] == first)
    )
    if hits.any():
        return Outcome(int(first[int(np.argmax(hits))]))
    if board_full(cells):
        return Outcome.DRAW
    return Outcome.NONE


def board_full(cells: np.ndarray) -> bool:
    """Return True if no entry of the grid is empty."""
    return not np.any(cells == EMPTY)


def line_counts(cells: np.ndarray, mark: Mark) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Per-line counts for `mark`, its opponent and empty entries.

    Returns (own, opp, empty) arrays of shape (8,). Drawn entries count for
    none of them but still occupy the line.
    """
    trios = cells[WIN_LINES]
    own = np.count_nonzero(trios == int(mark), axis=1)
    opp = np.count_nonzero(trios == int(mark.other), axis=1)
    empty = np.count_nonzero(trios == EMPTY, axis=1)
    return own, opp, empty


def winning_cells(cells: np.ndarray, mark: Mark) -> List[int]:
    """Empty cells where `mark` would complete a line, ascending."""
    trios = cells[WIN_LINES]
    own = np.count_nonzero(trios == int(mark), axis=1)
    empty = np.count_nonzero(trios == EMPTY, axis=1)
    open_lines = WIN_LINES[(own == 2) & (empty == 1)]
    if open_lines.size == 0:
        return []
    candidates = open_lines[cells[open_lines] == EMPTY]
    return sorted(set(int(i) for i in candidates))


def has_winning_cell(cells: np.ndarray, mark: Mark) -> bool:
    """True if `mark` can complete a line in this grid with one move."""
    trios = cells[WIN_LINES]
    own = np.count_nonzero(trios == int(mark), axis=1)
    empty = np.count_nonzero(trios == EMPTY, axis=1)
    return bool(np.any((own == 2) & (empty == 1)))
