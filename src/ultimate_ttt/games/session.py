"""
GameSession - the caller-side holder of a match in progress.

Local moves, replicated remote moves, undo/redo and full-state resync all go
through here. The move log of the current state is the single source of
truth: undo replays a shorter prefix, redo replays the prefix plus the
entries that were undone.

Replays start from the session's base: the empty board, or the last snapshot
adopted with sync(). Moves inside a snapshot cannot be undone.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ultimate_ttt.core.types import Mark, MoveRecord
from ultimate_ttt.games.game_state import BoardState
from ultimate_ttt.games.ultimate import apply_move, replay

logger = logging.getLogger(__name__)


class GameSession:
    """Mutable wrapper around an immutable BoardState plus a redo stack."""

    def __init__(self, first_player: Mark = Mark.X, state: Optional[BoardState] = None):
        self._first_player = first_player
        self._base = state
        self._state = state if state is not None else BoardState.initial(first_player)
        self._undone: List[MoveRecord] = []

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def can_undo(self) -> bool:
        return len(self._played()) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._undone) > 0

    @property
    def redo_stack(self) -> List[MoveRecord]:
        return list(self._undone)

    # ------------------------------------------------------------------ moves

    def play(self, board: int, cell: int) -> BoardState:
        """
        Apply a local move. Clears the redo stack.

        Raises:
            IllegalMoveError: the move fails is_legal().
        """
        self._state = apply_move(self._state, board, cell)
        self._undone.clear()
        return self._state

    def apply_remote(self, board: int, cell: int) -> BoardState:
        """Apply a move received from the peer. Legality is still checked."""
        logger.debug("remote move %d,%d", board, cell)
        return self.play(board, cell)

    def sync(self, snapshot: BoardState) -> BoardState:
        """
        Adopt a peer's full state as the new source of truth.

        No legality check is made; the transport is trusted. The snapshot
        becomes the replay base, so undo never reaches behind it.
        """
        logger.info(
            "resynchronised to snapshot %s (%d moves)",
            snapshot.fingerprint(), len(snapshot.move_log),
        )
        self._base = snapshot
        self._state = snapshot
        self._undone.clear()
        return self._state

    def restart(self, first_player: Optional[Mark] = None) -> BoardState:
        if first_player is not None:
            self._first_player = first_player
        logger.info("new game, %s to move", self._first_player)
        self._base = None
        self._state = BoardState.initial(self._first_player)
        self._undone.clear()
        return self._state

    # -------------------------------------------------------------- undo/redo

    def undo(self, count: int = 1) -> BoardState:
        """Drop the last `count` moves (fewer if fewer were played since the base)."""
        played = self._played()
        count = max(0, min(count, len(played)))
        if count == 0:
            return self._state
        kept, dropped = played[:len(played) - count], played[len(played) - count:]
        self._state = replay(kept, self._initial())
        self._undone = list(dropped) + self._undone
        logger.debug("undid %d move(s), %d left", count, len(kept))
        return self._state

    def redo(self, count: int = 1) -> BoardState:
        """Reapply up to `count` previously undone moves in original order."""
        count = max(0, min(count, len(self._undone)))
        if count == 0:
            return self._state
        entries, self._undone = self._undone[:count], self._undone[count:]
        self._state = replay(self._played() + tuple(entries), self._initial())
        logger.debug("redid %d move(s)", count)
        return self._state

    def undo_count_for(self, human: Mark) -> int:
        """
        Moves to undo so `human` is back on move against the engine.

        If the engine has already replied, its reply and the human's move are
        both taken back.
        """
        if len(self._played()) >= 2 and self._state.current_player == human:
            return 2
        return 1

    def _played(self) -> Tuple[MoveRecord, ...]:
        """Log entries made on top of the base."""
        start = len(self._base.move_log) if self._base is not None else 0
        return self._state.move_log[start:]

    def _initial(self) -> BoardState:
        if self._base is not None:
            return self._base
        log = self._state.move_log
        first = log[0].player if log else self._first_player
        return BoardState.initial(first)
