"""
Core module - fundamental types and hashing.

This module provides the building blocks used throughout the engine.
"""

from ultimate_ttt.core.types import (
    EMPTY,
    BOARD_COUNT,
    CELL_COUNT,
    CENTER,
    CORNERS,
    EDGES,
    Mark,
    Outcome,
    Move,
    MoveRecord,
    Difficulty,
    Quality,
    Choice,
)
from ultimate_ttt.core.hashing import hash_board, hash_position

__all__ = [
    # Types
    "Mark",
    "Outcome",
    "Move",
    "MoveRecord",
    "Difficulty",
    "Quality",
    "Choice",
    # Constants
    "EMPTY",
    "BOARD_COUNT",
    "CELL_COUNT",
    "CENTER",
    "CORNERS",
    "EDGES",
    # Functions
    "hash_board",
    "hash_position",
]
