"""
State keys, side-swap symmetry and serialization for Kalah.

The text notation is a single line for logs, tests and the CLI:

    turn|p1_pits,p2_pits|store1,store2|winner|history|flags

e.g. ``1|4-4-4-4-4-4,4-4-4-4-4-4|0,0|-|-|-`` for the opening position.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from .kalah import Board, Capture, GameState, Move, settle
from .topology import (
    BOARD_SIZE,
    NUM_PITS_PER_SIDE,
    TOTAL_STONES,
    Outcome,
    Player,
    own_pits,
    own_store,
    pit_owner,
)


_TURN_CODES = {Player.PLAYER1: "1", Player.PLAYER2: "2"}
_WINNER_CODES = {None: "-", Outcome.PLAYER1: "1", Outcome.PLAYER2: "2", Outcome.DRAW: "="}


def state_key(state: GameState) -> Tuple:
    """Hashable key for repetition detection and caches.

    Includes the side to move so that (board, player) is unique.
    """
    return (state.board.slots, state.current_turn)


# ------------------------------- Symmetry -------------------------------- #
def mirror_index(index: int) -> int:
    """Map a slot to the same slot on the other player's side."""
    return (index + NUM_PITS_PER_SIDE + 1) % BOARD_SIZE


def _mirror_move(move: Optional[Move]) -> Optional[Move]:
    if move is None:
        return None
    return Move(pit_index=mirror_index(move.pit_index), player=move.player.opponent, sequence=move.sequence)


def mirror_state(state: GameState) -> GameState:
    """Swap sides so that the players exchange roles.

    - Player 1 pits and store become player 2's and vice versa
    - Pit order is preserved relative to each player's own side
    - Turn, winner, history and capture owner flip
    """
    slots = [0] * BOARD_SIZE
    for i, count in enumerate(state.board):
        slots[mirror_index(i)] = count

    if state.winner is None or state.winner is Outcome.DRAW:
        winner = state.winner
    else:
        winner = Outcome.PLAYER2 if state.winner is Outcome.PLAYER1 else Outcome.PLAYER1

    capture = state.captured_stones
    if capture is not None:
        capture = Capture(player=capture.player.opponent, count=capture.count)

    return GameState(
        board=Board(tuple(slots)),
        current_turn=state.current_turn.opponent,
        move_history=tuple(_mirror_move(m) for m in state.move_history),
        winner=winner,
        last_move=_mirror_move(state.last_move),
        extra_turn=state.extra_turn,
        captured_stones=capture,
    )


# ------------------------------- Notation -------------------------------- #
def serialize_notation(state: GameState) -> str:
    """Serialize to the one-line notation described in the module docstring.

    History lists pit indices only; the mover of each entry is the pit's
    owner and its sequence number is its position.
    """
    pits = ",".join("-".join(str(x) for x in state.pits_of(p)) for p in Player)
    stores = ",".join(str(state.board[own_store(p)]) for p in Player)
    history = ".".join(str(m.pit_index) for m in state.move_history) or "-"
    if state.extra_turn:
        flags = "x"
    elif state.captured_stones is not None:
        flags = f"c{state.captured_stones.count}"
    else:
        flags = "-"
    return "|".join(
        [
            _TURN_CODES[state.current_turn],
            pits,
            stores,
            _WINNER_CODES[state.winner],
            history,
            flags,
        ]
    )


def deserialize_notation(text: str) -> GameState:
    """Parse the one-line notation. Raises ValueError on malformed input.

    The position must be one the rules can reach: 48 stones in total, and a
    winner exactly when one side has no stones left in its pits.
    """
    parts = text.strip().split("|")
    if len(parts) != 6:
        raise ValueError(f"Expected 6 '|'-separated fields, got {len(parts)}")
    turn_s, pits_s, stores_s, winner_s, history_s, flags_s = parts

    turns = {code: player for player, code in _TURN_CODES.items()}
    winners = {code: outcome for outcome, code in _WINNER_CODES.items()}
    if turn_s not in turns:
        raise ValueError(f"Unknown turn {turn_s!r}")
    if winner_s not in winners:
        raise ValueError(f"Unknown winner {winner_s!r}")

    sides = pits_s.split(",")
    stores = stores_s.split(",")
    if len(sides) != 2 or len(stores) != 2:
        raise ValueError("Expected two pit rows and two stores")

    slots = [0] * BOARD_SIZE
    for player, side_s, store_s in zip(Player, sides, stores):
        counts = [int(x) for x in side_s.split("-")]
        if len(counts) != NUM_PITS_PER_SIDE:
            raise ValueError(f"Expected {NUM_PITS_PER_SIDE} pits per side, got {len(counts)}")
        for index, count in zip(own_pits(player), counts):
            slots[index] = count
        slots[own_store(player)] = int(store_s)
    board = Board(tuple(slots))
    if board.total() != TOTAL_STONES:
        raise ValueError(f"Board holds {board.total()} stones, expected {TOTAL_STONES}")
    _, settled_winner = settle(board)
    if settled_winner is not winners[winner_s]:
        raise ValueError(f"Winner {winner_s!r} does not match the board")

    history = []
    if history_s != "-":
        for sequence, pit_s in enumerate(history_s.split("."), start=1):
            pit_index = int(pit_s)
            owner = pit_owner(pit_index)
            if owner is None:
                raise ValueError(f"History entry {pit_s!r} is not a pit")
            history.append(Move(pit_index=pit_index, player=owner, sequence=sequence))
    last_move = history[-1] if history else None

    extra_turn = False
    capture = None
    if flags_s == "x":
        extra_turn = True
    elif flags_s.startswith("c"):
        if last_move is None:
            raise ValueError("Capture flag needs a last move")
        count = int(flags_s[1:])
        if count < 2:
            raise ValueError(f"Capture of {count} stones is impossible")
        capture = Capture(player=last_move.player, count=count)
    elif flags_s != "-":
        raise ValueError(f"Unknown flags {flags_s!r}")

    return GameState(
        board=board,
        current_turn=turns[turn_s],
        move_history=tuple(history),
        winner=winners[winner_s],
        last_move=last_move,
        extra_turn=extra_turn,
        captured_stones=capture,
    )


def _move_to_dict(move: Optional[Move]) -> Optional[Dict[str, Any]]:
    if move is None:
        return None
    return {"pitIndex": move.pit_index, "player": move.player.value, "sequence": move.sequence}


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """JSON-ready view of every public field of ``state``."""
    capture = state.captured_stones
    return {
        "board": list(state.board),
        "currentTurn": state.current_turn.value,
        "moveHistory": [_move_to_dict(m) for m in state.move_history],
        "winner": None if state.winner is None else state.winner.value,
        "lastMove": _move_to_dict(state.last_move),
        "extraTurn": state.extra_turn,
        "capturedStones": None if capture is None else {"player": capture.player.value, "count": capture.count},
    }
