"""
Engine configuration and difficulty registry.

Every weight, time budget and review threshold lives in an immutable value
passed into the evaluator, the search and the analyzer. Nothing reads
module-level tuning state at call time.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ultimate_ttt.core.types import Difficulty


# ---------------------------------------------------------------------------
# Difficulty Registry
# ---------------------------------------------------------------------------

DIFFICULTIES = {
    "random": Difficulty.RANDOM,
    "tactical": Difficulty.TACTICAL,
    "heuristic": Difficulty.HEURISTIC,
    "deep": Difficulty.DEEP,
}


def parse_difficulty(name: str) -> Difficulty:
    """Look up a difficulty tier by name (case-insensitive)."""
    key = name.strip().lower()
    if key not in DIFFICULTIES:
        available = ", ".join(DIFFICULTIES.keys())
        raise ValueError(f"Unknown difficulty: {name}. Available: {available}")
    return DIFFICULTIES[key]


# ---------------------------------------------------------------------------
# Evaluation Weights
# ---------------------------------------------------------------------------
#
# Term priority, strongest first:
#   decisive result  >  macro-line threats  >  captured sub-boards  >  tactical
#
# Blocking an opponent's macro two-in-a-row is weighted above building one,
# so ties between attack and defence resolve towards defence.

# Cap on opponent-model preference multipliers
MAX_PREFERENCE = 2.0


@dataclass(frozen=True)
class EvalWeights:
    win: int = 100_000

    # Macro-line potential
    macro_threat: int = 1000          # two own, third open
    macro_threat_against: int = 1100  # two opponent, third open
    macro_open: int = 50              # one own, rest open
    macro_open_against: int = 55

    # Captured sub-boards by macro position
    capture_center: int = 400
    capture_corner: int = 300
    capture_edge: int = 200
    drawn_board: int = 50             # dead weight, charged to both sides

    # Where the last move sent the opponent
    free_move: int = 120
    winnable_board: int = 180

    # Cell geometry of the last move; the only term opponent modelling scales
    position_center: int = 40
    position_corner: int = 25
    position_edge: int = 10

    def __post_init__(self):
        if self.macro_threat_against < self.macro_threat:
            raise ValueError("macro_threat_against must be >= macro_threat")
        if not (self.macro_threat > self.capture_center >= self.capture_corner >= self.capture_edge):
            raise ValueError("capture weights must sit below macro_threat and order center >= corner >= edge")
        if not (self.capture_edge > self.winnable_board > self.free_move):
            raise ValueError("tactical weights must sit below capture_edge with winnable_board > free_move")
        if self.win <= self.max_heuristic:
            raise ValueError(
                f"win ({self.win}) must exceed the largest heuristic magnitude ({self.max_heuristic})"
            )

    @property
    def max_heuristic(self) -> int:
        """Upper bound on the absolute value of all non-decisive terms."""
        lines = 8 * max(self.macro_threat_against, self.macro_threat)
        captures = self.capture_center + 4 * self.capture_corner + 4 * self.capture_edge
        drawn = 9 * self.drawn_board
        tactical = self.free_move + self.winnable_board
        # Opponent preference weights are capped at MAX_PREFERENCE.
        positional = int(MAX_PREFERENCE * max(self.position_center, self.position_corner, self.position_edge))
        return lines + captures + drawn + tactical + positional


# ---------------------------------------------------------------------------
# Search / Review Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchConfig:
    """Deep-tier iterative deepening settings."""

    time_budget_ms: float = 1000.0
    start_depth: int = 1
    max_depth: int = 64
    use_opponent_model: bool = True

    def __post_init__(self):
        if self.time_budget_ms < 0:
            raise ValueError("time_budget_ms must be >= 0")
        if self.start_depth < 1:
            raise ValueError("start_depth must be >= 1")
        if self.max_depth < self.start_depth:
            raise ValueError("max_depth must be >= start_depth")


@dataclass(frozen=True)
class ReviewThresholds:
    """
    Score gaps (best - played) separating quality labels, ascending.

    brilliant_above is an absolute evaluation: the engine's own top move
    scoring above it is labelled brilliant instead of best.
    """

    best_below: int = 50
    good_below: int = 300
    inaccuracy_below: int = 1000
    brilliant_above: int = 1500

    def __post_init__(self):
        if not (0 < self.best_below < self.good_below < self.inaccuracy_below):
            raise ValueError("review thresholds must be positive and strictly ascending")


@dataclass(frozen=True)
class EngineConfig:
    """Complete engine configuration."""

    weights: EvalWeights = field(default_factory=EvalWeights)
    search: SearchConfig = field(default_factory=SearchConfig)
    review: ReviewThresholds = field(default_factory=ReviewThresholds)

    def with_budget(self, time_budget_ms: float) -> "EngineConfig":
        """Copy with a different Deep-tier time budget."""
        return replace(self, search=replace(self.search, time_budget_ms=time_budget_ms))


# Default configuration
DEFAULT_CONFIG = EngineConfig()
