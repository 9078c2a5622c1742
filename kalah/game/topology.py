"""
Board topology for 6-pit Kalah.

The board is a ring of 14 slots walked in increasing index order:

    indices 0..5   player 1 pits      index 6   player 1 store
    indices 7..12  player 2 pits      index 13  player 2 store

Pit ``i`` faces pit ``12 - i`` across the board.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


NUM_PITS_PER_SIDE: int = 6
BOARD_SIZE: int = 14
INITIAL_STONES_PER_PIT: int = 4
TOTAL_STONES: int = 48

PLAYER1_STORE: int = 6
PLAYER2_STORE: int = 13


class Player(Enum):
    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @property
    def opponent(self) -> "Player":
        return Player.PLAYER2 if self is Player.PLAYER1 else Player.PLAYER1


class Outcome(Enum):
    """Final result of a game: a winning player or a draw."""

    PLAYER1 = "player1"
    PLAYER2 = "player2"
    DRAW = "draw"

    @staticmethod
    def for_player(player: Player) -> "Outcome":
        return Outcome.PLAYER1 if player is Player.PLAYER1 else Outcome.PLAYER2


def own_pits(player: Player) -> range:
    if player is Player.PLAYER1:
        return range(0, PLAYER1_STORE)
    return range(PLAYER1_STORE + 1, PLAYER2_STORE)


def own_store(player: Player) -> int:
    return PLAYER1_STORE if player is Player.PLAYER1 else PLAYER2_STORE


def opponent_store(player: Player) -> int:
    return own_store(player.opponent)


def is_store(index: int) -> bool:
    return index == PLAYER1_STORE or index == PLAYER2_STORE


def pit_owner(index: int) -> Optional[Player]:
    """Return the player owning pit ``index``, or None for a store."""
    if index in own_pits(Player.PLAYER1):
        return Player.PLAYER1
    if index in own_pits(Player.PLAYER2):
        return Player.PLAYER2
    return None


def opposite_pit(pit_index: int) -> int:
    """Return the pit directly across the board from ``pit_index``.

    Stores have no opposite and are outside the domain; they raise ValueError.
    """
    if is_store(pit_index) or not 0 <= pit_index < BOARD_SIZE:
        raise ValueError(f"No opposite pit for index {pit_index}")
    return 2 * NUM_PITS_PER_SIDE - pit_index
