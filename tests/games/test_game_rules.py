"""
Tests for ultimate_ttt.games.game_rules

Line detection shared by sub-boards and the macro board.
"""

import numpy as np
import pytest

from ultimate_ttt.core.types import Mark, Outcome
from ultimate_ttt.games.game_rules import (
    WIN_LINES,
    board_full,
    has_winning_cell,
    line_counts,
    line_outcome,
    winning_cells,
)


def cells(*values) -> np.ndarray:
    return np.array(values, dtype=np.int8)


class TestLineOutcome:
    """line_outcome tests."""

    @pytest.mark.parametrize("line", WIN_LINES.tolist())
    @pytest.mark.parametrize("mark", [Mark.X, Mark.O])
    def test_all_win_lines(self, line, mark):
        """All 8 lines are detected for both marks."""
        grid = np.zeros(9, dtype=np.int8)
        grid[line] = mark
        assert line_outcome(grid) == Outcome.of(mark)

    def test_empty_is_none(self):
        """An empty grid is undecided."""
        assert line_outcome(np.zeros(9, dtype=np.int8)) is Outcome.NONE

    def test_full_without_line_is_draw(self):
        """All 9 cells filled with no line is a draw, not undecided."""
        assert line_outcome(cells(1, 2, 1, 1, 2, 2, 2, 1, 1)) is Outcome.DRAW

    def test_line_on_last_cell_beats_draw(self):
        """Completing a line with the last empty cell is a win."""
        assert line_outcome(cells(1, 2, 1, 2, 1, 2, 2, 1, 1)) is Outcome.X

    def test_drawn_entries_never_form_a_line(self):
        """Three drawn sub-boards in a macro row are not a win."""
        macro = cells(3, 3, 3, 0, 0, 0, 0, 0, 0)
        assert line_outcome(macro) is Outcome.NONE

    def test_full_macro_with_draws_is_draw(self):
        """A full macro board with drawn entries and no line is a draw."""
        macro = cells(1, 2, 1, 3, 3, 2, 2, 1, 3)
        assert line_outcome(macro) is Outcome.DRAW

    def test_first_pattern_wins(self):
        """With lines for both marks the first line in order decides."""
        assert line_outcome(cells(2, 2, 2, 1, 1, 1, 0, 0, 0)) is Outcome.O


class TestHelpers:
    """board_full / line_counts / winning_cells tests."""

    def test_board_full(self):
        """Full only when no cell is empty."""
        assert board_full(cells(1, 2, 1, 1, 2, 2, 2, 1, 1))
        assert not board_full(cells(1, 2, 1, 1, 2, 2, 2, 1, 0))

    def test_line_counts(self):
        """Per-line counts of own, opposing and empty cells."""
        own, opp, empty = line_counts(cells(1, 1, 0, 2, 0, 0, 3, 0, 0), Mark.X)
        # Row 0: two X, one empty
        assert (own[0], opp[0], empty[0]) == (2, 0, 1)
        # Col 0: X, O, drawn -> drawn counts for nobody
        assert (own[3], opp[3], empty[3]) == (1, 1, 0)

    def test_winning_cells(self):
        """Cells that complete a line, in order."""
        grid = cells(1, 1, 0, 1, 0, 0, 0, 0, 0)
        assert winning_cells(grid, Mark.X) == [2, 6]
        assert winning_cells(grid, Mark.O) == []

    def test_blocked_line_not_winnable(self):
        """A line holding an opposing mark offers no win."""
        grid = cells(1, 1, 2, 0, 0, 0, 0, 0, 0)
        assert winning_cells(grid, Mark.X) == []
        assert not has_winning_cell(grid, Mark.X)

    def test_has_winning_cell(self):
        """True when one move completes a line."""
        assert has_winning_cell(cells(0, 0, 0, 0, 2, 0, 0, 0, 2), Mark.O)
