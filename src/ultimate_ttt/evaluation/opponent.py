"""
Opponent modelling from the move log.

A pure function of the log: no learning state is kept between calls. The
resulting preferences only scale the evaluator's positional term.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ultimate_ttt.core.types import CENTER, CORNERS, Mark, MoveRecord

# Only the opponent's most recent moves are considered
RECENT_WINDOW = 5
MIN_HISTORY = 3

CORNER_BIAS = 0.6
CENTER_BIAS = 0.4


@dataclass(frozen=True)
class PositionalPreferences:
    """Multipliers for the cell-geometry bonus of the last move."""

    center: float = 1.0
    corner: float = 1.0
    edge: float = 1.0

    def weight_for(self, cell: int) -> float:
        if cell == CENTER:
            return self.center
        if cell in CORNERS:
            return self.corner
        return self.edge


NEUTRAL = PositionalPreferences()


def analyze_opponent(move_log: Sequence[MoveRecord], opponent: Mark) -> PositionalPreferences:
    """
    Derive positional preferences from the opponent's recent cell choices.

    If the opponent keeps taking corners, corners are worth more to us (to
    contest the lines they build); if they fight for centers, centers are.

    Args:
        move_log: Full move log of the game so far.
        opponent: The mark whose habits are being modelled.

    Returns:
        Preferences; NEUTRAL when there is too little history.
    """
    if len(move_log) < MIN_HISTORY:
        return NEUTRAL

    recent = [m for m in move_log if m.player == opponent][-RECENT_WINDOW:]
    if not recent:
        return NEUTRAL

    total = len(recent)
    centers = sum(1 for m in recent if m.cell == CENTER)
    corners = sum(1 for m in recent if m.cell in CORNERS)

    center = 2.0 if centers / total > CENTER_BIAS else 1.0
    corner = 1.5 if corners / total > CORNER_BIAS else 1.0
    if center == 1.0 and corner == 1.0:
        return NEUTRAL
    return PositionalPreferences(center=center, corner=corner)
