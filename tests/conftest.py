"""
Shared test fixtures for ultimate_ttt tests.

Design principles:
- Positions are built directly from cell grids where a replayed move
  sequence would obscure what is being tested
- Seeded random playouts for property-style checks
- Minimal, focused fixtures
"""

import random
from types import SimpleNamespace
from typing import Callable, List, Optional

import pytest

from ultimate_ttt.core.types import Mark
from ultimate_ttt.games.game_state import BoardState
from ultimate_ttt.games.ultimate import apply_move, legal_move_list
from ultimate_ttt.utils.config import DEFAULT_CONFIG, EngineConfig


# =============================================================================
# Sub-board Templates (0 = empty, 1 = X, 2 = O)
# =============================================================================

EMPTY_BOARD = [0] * 9
X_WON = [1, 1, 1, 2, 2, 0, 0, 0, 0]
O_WON = [2, 2, 2, 1, 1, 0, 0, 0, 0]
DRAWN = [1, 2, 1, 1, 2, 2, 2, 1, 1]


def grid(**boards) -> List[List[int]]:
    """9x9 cell grid; keyword b0..b8 overrides an empty sub-board."""
    return [list(boards.get(f"b{i}", EMPTY_BOARD)) for i in range(9)]


def _playout(seed: int, max_moves: int = 81) -> List[BoardState]:
    rng = random.Random(seed)
    state = BoardState.initial()
    states = [state]
    while not state.is_over and len(state.move_log) < max_moves:
        move = rng.choice(legal_move_list(state))
        state = apply_move(state, move.board, move.cell)
        states.append(state)
    return states


# =============================================================================
# Playout Fixtures
# =============================================================================

@pytest.fixture
def playout() -> Callable[..., List[BoardState]]:
    """Seeded random game: every state from the empty board onwards."""
    return _playout


@pytest.fixture(params=[1, 7, 42, 1234])
def finished_game(request) -> List[BoardState]:
    """A complete random game for several seeds."""
    return _playout(request.param)


# =============================================================================
# Position Fixtures
# =============================================================================

@pytest.fixture
def initial() -> BoardState:
    return BoardState.initial()


@pytest.fixture
def macro_win_position() -> BoardState:
    """X owns boards 0 and 1 and completes board 2 (and the game) with 2,2."""
    return BoardState.from_cells(
        grid(b0=X_WON, b1=X_WON, b2=[1, 1, 0, 0, 0, 0, 2, 2, 0]),
        current_player=Mark.X,
        active_board=2,
    )


@pytest.fixture
def finished_position(macro_win_position: BoardState) -> BoardState:
    return apply_move(macro_win_position, 2, 2)


@pytest.fixture
def losing_send_position() -> BoardState:
    """
    O owns boards 3 and 4 and threatens to complete board 5 at cell 2.

    X must play in board 0. Cells 3 and 4 hand O a free choice and cell 5
    sends O straight to board 5; each lets O win the game next move.
    """
    return BoardState.from_cells(
        grid(b3=O_WON, b4=O_WON, b5=[2, 2, 0, 1, 0, 0, 0, 1, 0]),
        current_player=Mark.X,
        active_board=0,
    )


# =============================================================================
# Builder Fixtures
# =============================================================================

@pytest.fixture
def tpl() -> SimpleNamespace:
    """Sub-board templates."""
    return SimpleNamespace(empty=EMPTY_BOARD, x_won=X_WON, o_won=O_WON, drawn=DRAWN)


@pytest.fixture
def position() -> Callable[..., BoardState]:
    """Factory: position(current_player, active_board, b0=[...], ..., b8=[...])."""
    def _build(
        current_player: Mark = Mark.X,
        active_board: Optional[int] = None,
        **boards,
    ) -> BoardState:
        return BoardState.from_cells(grid(**boards), current_player, active_board)
    return _build


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def config() -> EngineConfig:
    return DEFAULT_CONFIG


@pytest.fixture
def fast_config() -> EngineConfig:
    """Deep tier with a short budget for quick tests."""
    return DEFAULT_CONFIG.with_budget(50)
