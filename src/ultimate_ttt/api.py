"""
Public API for playing and reviewing games.

Usage:
    from ultimate_ttt import BoardState, select_move, apply_move, Difficulty

    state = BoardState.initial()
    choice = select_move(state, Difficulty.DEEP)
    state = apply_move(state, *choice.move)
"""

from __future__ import annotations

import random
from typing import Iterable, List, Optional

from ultimate_ttt.core.types import Difficulty, Mark, Move, Quality
from ultimate_ttt.games.game_state import BoardState
from ultimate_ttt.games.session import GameSession
from ultimate_ttt.games.ultimate import IllegalMoveError, apply_move, is_legal, legal_moves, replay
from ultimate_ttt.evaluation import evaluate
from ultimate_ttt.review import MoveReview, classify, evaluation_bar, review_match
from ultimate_ttt.selection import select_move
from ultimate_ttt.utils.config import DEFAULT_CONFIG, EngineConfig


def parse_move(raw: str) -> Move:
    """
    Parse "board,cell" into a Move.

    Raises:
        ValueError: malformed input or indices outside 0-8.
    """
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Expected 'board,cell', got '{raw}'")
    board, cell = (int(p) for p in parts)
    if not (0 <= board <= 8 and 0 <= cell <= 8):
        raise ValueError(f"Indices must be 0-8, got '{raw}'")
    return Move(board, cell)


def parse_move_log(raw: str) -> List[Move]:
    """Parse a whitespace-separated list of "board,cell" moves."""
    return [parse_move(token) for token in raw.split()]


def _ai_turn(
    session: GameSession,
    difficulty: Difficulty,
    config: EngineConfig,
    rng: Optional[random.Random],
) -> Optional[Move]:
    """AI selects and applies move. Returns move or None if no valid moves."""
    choice = select_move(session.state, difficulty, config, rng)
    if choice is None:
        return None
    session.play(*choice.move)
    return choice.move


def _human_turn(session: GameSession) -> Optional[Move]:
    """Prompt human for move, apply it, return move. 'u' undoes, 'r' redoes."""
    state = session.state
    target = "any open board" if state.active_board is None else f"board {state.active_board}"
    print(f"\nYour turn ({state.current_player}), play in {target}")
    print("Format: board,cell (e.g., 4,4); 'u' to undo, 'r' to redo")

    while True:
        raw = input("Move: ").strip().lower()
        if raw == "u":
            if session.can_undo:
                session.undo(session.undo_count_for(state.current_player))
                return None
            print("Nothing to undo")
            continue
        if raw == "r":
            if session.can_redo:
                session.redo()
                return None
            print("Nothing to redo")
            continue
        try:
            move = parse_move(raw)
            session.play(*move)
            return move
        except IllegalMoveError as e:
            print(f"Illegal move: {e}")
        except ValueError as e:
            print(f"Invalid input: {e}")


def play_match(
    difficulty: Difficulty,
    human_players: Optional[Iterable[Mark]] = None,
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
    show_evaluation: bool = True,
) -> BoardState:
    """
    Interactive match loop on stdin/stdout.

    Parameters
    ----------
    difficulty : Difficulty
        Engine strength for every non-human side.
    human_players : Iterable[Mark], optional
        Marks controlled by human input. Empty or None = engine self-play.
    config : EngineConfig, optional
        Engine configuration.
    rng : random.Random, optional
        Random source for the shallow tiers.
    show_evaluation : bool
        Print the evaluation bar after every move.

    Returns
    -------
    BoardState
        The final position.
    """
    cfg = config or DEFAULT_CONFIG
    humans = set(human_players or [])
    session = GameSession()

    print(f"Ultimate Tic-Tac-Toe, engine: {difficulty.name.lower()}")
    print(session.state.state_string())

    try:
        while not session.state.is_over:
            current = session.state.current_player
            if current in humans:
                move = _human_turn(session)
                if move is not None:
                    print(f"\nYou played: {move}")
            else:
                move = _ai_turn(session, difficulty, cfg, rng)
                if move is None:
                    break
                print(f"\nEngine ({current}) played: {move}")

            print(session.state.state_string())
            if show_evaluation:
                print(f"eval (X): {evaluation_bar(session.state, Mark.X, cfg):.0f}%")

        print("\n" + "=" * 40)
        print("GAME OVER")
        print("=" * 40)
        result = session.state.result
        print("Draw" if result.winner is None else f"Winner: {result.winner}")

    except KeyboardInterrupt:
        print("\nInterrupted")
    except Exception:
        import logging
        logging.getLogger(__name__).exception("Fatal error in match loop")
        raise

    return session.state


__all__ = [
    "BoardState",
    "GameSession",
    "Difficulty",
    "Mark",
    "Move",
    "Quality",
    "MoveReview",
    "IllegalMoveError",
    "apply_move",
    "is_legal",
    "legal_moves",
    "replay",
    "evaluate",
    "select_move",
    "classify",
    "review_match",
    "evaluation_bar",
    "parse_move",
    "parse_move_log",
    "play_match",
]
