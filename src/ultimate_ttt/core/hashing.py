"""
State hashing utilities - optimized for int8 arrays.
"""

from __future__ import annotations

import hashlib
from typing import Iterable, Optional

import numpy as np


def hash_board(board: np.ndarray) -> str:
    """
    Fast hash for a single int8 grid.

    Direct tobytes() on the contiguous array.
    """
    return hashlib.sha256(np.ascontiguousarray(board).tobytes()).hexdigest()[:16]


def hash_position(
    cells: np.ndarray,
    macro: np.ndarray,
    active_board: Optional[int],
    current_player: int,
    history: Iterable[tuple],
) -> str:
    """
    Stable digest of a full position including its move log.

    Each sub-board is digested with hash_board(). Two states built from the
    same log produce the same digest, which is what replay determinism is
    checked against.
    """
    h = hashlib.sha256()
    for board in np.asarray(cells, dtype=np.int8):
        h.update(hash_board(board).encode())
    h.update(np.ascontiguousarray(macro, dtype=np.int8).tobytes())
    h.update(bytes([9 if active_board is None else active_board, current_player]))
    for entry in history:
        h.update(bytes(int(x) for x in entry))
    return h.hexdigest()[:16]
