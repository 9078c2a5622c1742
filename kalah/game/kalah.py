"""
Core rules engine for 6-pit Kalah (Mancala).

This module implements:
- Immutable board and game state
- Move validation with first-class rejections
- Sowing that skips the opponent's store
- Extra turn when the last stone lands in the mover's store
- Capture from a previously empty own pit
- Terminal detection, sweeping of remaining stones and scoring

Board indices follow ``kalah.game.topology``: 0..5 and 6 for player 1's
pits and store, 7..12 and 13 for player 2's.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from .topology import (
    BOARD_SIZE,
    INITIAL_STONES_PER_PIT,
    PLAYER1_STORE,
    PLAYER2_STORE,
    Outcome,
    Player,
    opponent_store,
    opposite_pit,
    own_pits,
    own_store,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Board:
    """Stone counts for the 14 board slots.

    Attributes:
        slots: Counts indexed by board position (pits and both stores).
    """

    slots: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.slots) != BOARD_SIZE:
            raise ValueError(f"Board needs {BOARD_SIZE} slots, got {len(self.slots)}")
        if any(count < 0 for count in self.slots):
            raise ValueError("Board slots cannot hold a negative count")

    @staticmethod
    def initial() -> "Board":
        slots = [INITIAL_STONES_PER_PIT] * BOARD_SIZE
        slots[PLAYER1_STORE] = 0
        slots[PLAYER2_STORE] = 0
        return Board(tuple(slots))

    def __getitem__(self, index: int) -> int:
        return self.slots[index]

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[int]:
        return iter(self.slots)

    def total(self) -> int:
        return sum(self.slots)

    def side_empty(self, player: Player) -> bool:
        return all(self.slots[i] == 0 for i in own_pits(player))


@dataclass(frozen=True)
class Move:
    pit_index: int
    player: Player
    sequence: int


@dataclass(frozen=True)
class Capture:
    player: Player
    count: int


class RejectReason(Enum):
    MALFORMED = "malformed"
    GAME_OVER = "game_over"
    NOT_YOUR_TURN = "not_your_turn"
    NOT_OWN_PIT = "not_own_pit"
    EMPTY_PIT = "empty_pit"


@dataclass(frozen=True)
class GameState:
    """Immutable Kalah game state.

    Attributes:
        board: Stone counts for every pit and store.
        current_turn: Player to move. Frozen at the last mover once the game ends.
        move_history: Every applied move, oldest first.
        winner: Outcome once the game is over, otherwise None.
        last_move: Most recently applied move, None at game start.
        extra_turn: True when the last mover moves again.
        captured_stones: Capture made by the last move, if any.
    """

    board: Board
    current_turn: Player = Player.PLAYER1
    move_history: Tuple[Move, ...] = field(default_factory=tuple)
    winner: Optional[Outcome] = None
    last_move: Optional[Move] = None
    extra_turn: bool = False
    captured_stones: Optional[Capture] = None

    # ------------------------- Construction helpers ------------------------- #
    @staticmethod
    def initial() -> "GameState":
        return GameState(board=Board.initial())

    # ----------------------------- Query methods ---------------------------- #
    def is_terminal(self) -> bool:
        return self.winner is not None

    def legal_moves(self) -> List[int]:
        return legal_moves(self)

    def pits_of(self, player: Player) -> Tuple[int, ...]:
        return tuple(self.board[i] for i in own_pits(player))

    def scores(self) -> Tuple[int, int]:
        return self.board[PLAYER1_STORE], self.board[PLAYER2_STORE]

    def apply_move(
        self, pit_index: int, player: Optional[Player] = None
    ) -> Union["GameState", "Rejected"]:
        """Apply a move for ``player`` (default: the side to move)."""
        return apply_move(self, pit_index, self.current_turn if player is None else player)


@dataclass(frozen=True)
class Rejected:
    """An illegal move. ``state`` is the untouched state the move was tried on."""

    state: GameState
    reason: RejectReason


def create_initial_state() -> GameState:
    return GameState.initial()


# ------------------------------- Validation ------------------------------- #
def rejection_reason(state: GameState, pit_index: int, player: Player) -> Optional[RejectReason]:
    """Return why a move is illegal, or None when it may be applied."""
    if (
        not isinstance(player, Player)
        or isinstance(pit_index, bool)
        or not isinstance(pit_index, int)
        or not 0 <= pit_index < BOARD_SIZE
    ):
        return RejectReason.MALFORMED
    if state.winner is not None:
        return RejectReason.GAME_OVER
    if player is not state.current_turn:
        return RejectReason.NOT_YOUR_TURN
    if pit_index not in own_pits(player):
        return RejectReason.NOT_OWN_PIT
    if state.board[pit_index] == 0:
        return RejectReason.EMPTY_PIT
    return None


def is_valid_move(state: GameState, pit_index: int, player: Player) -> bool:
    return rejection_reason(state, pit_index, player) is None


def legal_moves(state: GameState) -> List[int]:
    """Return the non-empty pits the side to move may sow from."""
    if state.winner is not None:
        return []
    return [i for i in own_pits(state.current_turn) if state.board[i] > 0]


# ------------------------------ Rule stages ------------------------------- #
def sow(board: Board, pit_index: int, player: Player) -> Tuple[Board, int]:
    """Sow every stone of ``pit_index`` and return (new board, landing index).

    Stones go one per slot in increasing index order, wrapping after 13,
    never into the opponent's store.
    """
    slots = list(board.slots)
    stones = slots[pit_index]
    slots[pit_index] = 0
    skip = opponent_store(player)

    index = pit_index
    while stones > 0:
        index = (index + 1) % BOARD_SIZE
        if index == skip:
            continue
        slots[index] += 1
        stones -= 1
    return Board(tuple(slots)), index


def resolve_landing(board: Board, landing: int, player: Player) -> Tuple[Board, bool, Optional[Capture]]:
    """Evaluate extra turn and capture for the slot the last stone fell in.

    Returns (board after any capture, extra turn flag, capture or None).
    """
    store = own_store(player)
    if landing == store:
        return board, True, None

    # Only a pit that was empty before this sow captures
    if landing not in own_pits(player) or board[landing] != 1:
        return board, False, None
    facing = opposite_pit(landing)
    if board[facing] == 0:
        return board, False, None

    captured = board[facing] + 1
    slots = list(board.slots)
    slots[store] += captured
    slots[landing] = 0
    slots[facing] = 0
    return Board(tuple(slots)), False, Capture(player=player, count=captured)


def settle(board: Board) -> Tuple[Board, Optional[Outcome]]:
    """Finish the game if either side has no stones left in its pits.

    The side that still holds stones sweeps them into its own store, then the
    larger store wins. Returns the board unchanged and None otherwise.
    """
    if board.side_empty(Player.PLAYER1):
        sweeper = Player.PLAYER2
    elif board.side_empty(Player.PLAYER2):
        sweeper = Player.PLAYER1
    else:
        return board, None

    slots = list(board.slots)
    store = own_store(sweeper)
    for i in own_pits(sweeper):
        slots[store] += slots[i]
        slots[i] = 0

    p1_score, p2_score = slots[PLAYER1_STORE], slots[PLAYER2_STORE]
    if p1_score > p2_score:
        outcome = Outcome.PLAYER1
    elif p2_score > p1_score:
        outcome = Outcome.PLAYER2
    else:
        outcome = Outcome.DRAW
    return Board(tuple(slots)), outcome


# --------------------------- Move application --------------------------- #
def apply_move(state: GameState, pit_index: int, player: Player) -> Union[GameState, Rejected]:
    """Apply a move and return the next state, or a Rejected result.

    The input state is never modified; an illegal or malformed move comes
    back as ``Rejected`` carrying that same state.
    """
    reason = rejection_reason(state, pit_index, player)
    if reason is not None:
        logger.debug("Rejected pit %r for %s: %s", pit_index, player, reason.value)
        return Rejected(state=state, reason=reason)

    board, landing = sow(state.board, pit_index, player)
    board, extra_turn, capture = resolve_landing(board, landing, player)
    board, winner = settle(board)

    move = Move(pit_index=pit_index, player=player, sequence=len(state.move_history) + 1)
    if winner is not None:
        logger.debug(
            "Game over after move %d: %s, stores %d-%d",
            move.sequence,
            winner.value,
            board[PLAYER1_STORE],
            board[PLAYER2_STORE],
        )
        next_turn = state.current_turn
    elif extra_turn:
        next_turn = player
    else:
        next_turn = player.opponent

    return GameState(
        board=board,
        current_turn=next_turn,
        move_history=state.move_history + (move,),
        winner=winner,
        last_move=move,
        extra_turn=extra_turn and winner is None,
        captured_stones=capture,
    )
