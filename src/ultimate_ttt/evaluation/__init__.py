"""
Evaluation module - static scoring and opponent modelling.
"""

from ultimate_ttt.evaluation.heuristic import evaluate
from ultimate_ttt.evaluation.opponent import (
    NEUTRAL,
    PositionalPreferences,
    analyze_opponent,
)

__all__ = [
    "evaluate",
    "analyze_opponent",
    "PositionalPreferences",
    "NEUTRAL",
]
