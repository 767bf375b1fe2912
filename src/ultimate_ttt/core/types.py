"""
Core types and constants.

This module contains the value types shared by every layer of the engine:
- Mark / Outcome: int8-compatible cell and result encodings
- Move / MoveRecord: coordinates of a play and its log entry
- Difficulty / Quality: engine tiers and review labels
"""

from __future__ import annotations

from enum import Enum, IntEnum, auto
from typing import NamedTuple, Optional


# ─── Cell encoding ────────────────────────────────────────────────────────────
#
#   0 = empty cell / undecided board
#   1 = X
#   2 = O
#   3 = drawn board (macro board only)
#
# Mark and Outcome share the values 1 and 2 so a sub-board's cells and the
# macro board's outcomes can live in the same int8 arrays.

EMPTY = 0
BOARD_COUNT = 9
CELL_COUNT = 9


class Mark(IntEnum):
    X = 1
    O = 2

    @property
    def other(self) -> "Mark":
        return Mark(3 - self.value)

    def __str__(self) -> str:
        return self.name


class Outcome(IntEnum):
    NONE = 0
    X = 1
    O = 2
    DRAW = 3

    @property
    def decided(self) -> bool:
        return self is not Outcome.NONE

    @property
    def winner(self) -> Optional[Mark]:
        """The winning mark, or None for undecided/drawn."""
        if self in (Outcome.X, Outcome.O):
            return Mark(self.value)
        return None

    @classmethod
    def of(cls, mark: Mark) -> "Outcome":
        return cls(int(mark))


class Move(NamedTuple):
    """A play at `cell` (0-8) of sub-board `board` (0-8), both row-major."""

    board: int
    cell: int

    def __str__(self) -> str:
        return f"{self.board},{self.cell}"


class MoveRecord(NamedTuple):
    """One entry of a move log."""

    board: int
    cell: int
    player: Mark

    @property
    def move(self) -> Move:
        return Move(self.board, self.cell)


class Difficulty(Enum):
    RANDOM = auto()
    TACTICAL = auto()
    HEURISTIC = auto()
    DEEP = auto()


class Quality(Enum):
    BRILLIANT = "brilliant"
    BEST = "best"
    GOOD = "good"
    INACCURACY = "inaccuracy"
    BLUNDER = "blunder"
    FORCED = "forced"


# Board geometry (applies to cells within a sub-board and to the macro board)
CENTER = 4
CORNERS = frozenset({0, 2, 6, 8})
EDGES = frozenset({1, 3, 5, 7})


class Choice(NamedTuple):
    """A move picked by the engine, with its score and completed search depth."""

    move: Move
    score: Optional[int] = None
    depth: int = 0
