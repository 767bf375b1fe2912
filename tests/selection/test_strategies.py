"""
Tests for the shallow tiers and select_move dispatch.
"""

import random

import pytest

from ultimate_ttt.core.types import Choice, Difficulty, Mark, Move
from ultimate_ttt.games.game_state import BoardState
from ultimate_ttt.games.ultimate import apply_move, is_legal
from ultimate_ttt.selection import (
    STRATEGIES,
    heuristic_move,
    rank_moves,
    random_move,
    select_move,
    tactical_move,
)


# =============================================================================
# Random
# =============================================================================

class TestRandomMove:
    """random_move tests."""

    def test_returns_legal(self, playout):
        """Random picks are always legal."""
        for state in playout(11, max_moves=30):
            if state.is_over:
                continue
            choice = random_move(state, rng=random.Random(0))
            assert is_legal(state, *choice.move)

    def test_seeded(self, initial: BoardState):
        """The same seed gives the same move."""
        a = random_move(initial, rng=random.Random(5))
        b = random_move(initial, rng=random.Random(5))
        assert a == b

    def test_no_score(self, initial: BoardState):
        """Random picks carry no score."""
        assert random_move(initial, rng=random.Random(1)).score is None

    def test_finished_is_none(self, finished_position: BoardState):
        """A finished game has no move."""
        assert random_move(finished_position) is None


# =============================================================================
# Tactical
# =============================================================================

class TestTacticalMove:
    """tactical_move tests."""

    def test_takes_win(self, position):
        """A sub-board win is taken."""
        state = position(Mark.X, 0, b0=[1, 1, 0, 2, 2, 0, 0, 0, 0])
        assert tactical_move(state, rng=random.Random(0)).move == Move(0, 2)

    def test_blocks(self, position):
        """An opposing sub-board threat is blocked."""
        state = position(Mark.X, 0, b0=[1, 0, 0, 2, 2, 0, 0, 0, 0])
        assert tactical_move(state, rng=random.Random(0)).move == Move(0, 5)

    def test_win_preferred_over_block(self, position):
        """Winning comes before blocking."""
        state = position(Mark.O, 0, b0=[1, 1, 0, 2, 2, 0, 1, 0, 0])
        assert tactical_move(state, rng=random.Random(0)).move == Move(0, 5)

    @pytest.mark.parametrize("seed", range(8))
    def test_avoids_winnable_send(self, position, seed):
        """Cell 1 would send O into board 1, where O completes a line."""
        state = position(Mark.X, 0, b1=[2, 2, 0, 0, 0, 0, 0, 0, 0])
        choice = tactical_move(state, rng=random.Random(seed))
        assert choice.move.board == 0
        assert choice.move.cell != 1

    @pytest.mark.parametrize("seed", range(4))
    def test_only_safe_move(self, position, seed):
        """Every board but 0 holds an O threat, so only 0,0 is safe."""
        threat = [2, 2, 0, 0, 0, 0, 0, 0, 0]
        boards = {f"b{i}": threat for i in range(1, 9)}
        state = position(Mark.X, 0, b0=[0, 0, 0, 0, 0, 0, 0, 0, 0], **boards)
        choice = tactical_move(state, rng=random.Random(seed))
        assert choice.move == Move(0, 0)

    def test_finished_is_none(self, finished_position: BoardState):
        """A finished game has no move."""
        assert tactical_move(finished_position) is None


# =============================================================================
# Heuristic
# =============================================================================

class TestHeuristicMove:
    """rank_moves / heuristic_move tests."""

    def test_ranking_sorted(self, losing_send_position: BoardState):
        """Moves are ranked best first."""
        ranked = rank_moves(losing_send_position)
        scores = [s for _, s in ranked]
        assert scores == sorted(scores, reverse=True)
        assert len(ranked) == 9

    def test_stable_ties(self, losing_send_position: BoardState):
        """Equal scores keep board/cell order: the first corner wins the tie."""
        choice = heuristic_move(losing_send_position)
        assert choice.move == Move(0, 0)
        assert choice.depth == 1

    def test_avoids_losing_sends(self, losing_send_position: BoardState):
        """The three losing sends rank last."""
        ranked = [m for m, _ in rank_moves(losing_send_position)]
        assert set(m.cell for m in ranked[-3:]) == {3, 4, 5}

    def test_takes_game_win(self, macro_win_position: BoardState, config):
        """The game-winning move scores win."""
        choice = heuristic_move(macro_win_position, config)
        assert choice.move == Move(2, 2)
        assert choice.score == config.weights.win

    def test_finished_is_none(self, finished_position: BoardState):
        """A finished game has no move."""
        assert heuristic_move(finished_position) is None
        assert rank_moves(finished_position) == []


# =============================================================================
# Dispatch
# =============================================================================

class TestSelectMove:
    """select_move tests."""

    def test_every_tier_registered(self):
        """Every difficulty has a strategy."""
        assert set(STRATEGIES) == set(Difficulty)

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_every_tier_returns_legal(self, difficulty, fast_config):
        """Every tier returns a legal Choice."""
        state = BoardState.initial()
        for b, c in [(4, 4), (4, 0), (0, 8)]:
            state = apply_move(state, b, c)
        choice = select_move(state, difficulty, fast_config, random.Random(2))
        assert isinstance(choice, Choice)
        assert is_legal(state, *choice.move)

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_finished_is_none(self, difficulty, finished_position, fast_config):
        """A finished game has no move."""
        assert select_move(finished_position, difficulty, fast_config) is None

    @pytest.mark.parametrize("difficulty", [Difficulty.TACTICAL, Difficulty.HEURISTIC, Difficulty.DEEP])
    def test_non_random_tiers_take_game_win(self, difficulty, macro_win_position, fast_config):
        """All but the random tier find the winning move."""
        choice = select_move(macro_win_position, difficulty, fast_config, random.Random(0))
        assert choice.move == Move(2, 2)

    def test_does_not_mutate(self, losing_send_position: BoardState, fast_config):
        """Selecting a move never changes the state."""
        before = losing_send_position.fingerprint()
        for difficulty in Difficulty:
            select_move(losing_send_position, difficulty, fast_config, random.Random(0))
        assert losing_send_position.fingerprint() == before
