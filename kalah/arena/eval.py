from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Tuple

from kalah.game.kalah import GameState, Rejected, create_initial_state
from kalah.game.topology import Outcome, Player


logger = logging.getLogger(__name__)

Policy = Callable[[GameState], int]


@dataclass
class ArenaConfig:
    games: int = 50
    max_moves: int = 1000


def random_policy(rng: random.Random) -> Policy:
    """Policy picking uniformly among the legal pits."""

    def choose(state: GameState) -> int:
        return rng.choice(state.legal_moves())

    return choose


def first_legal_policy(state: GameState) -> int:
    return state.legal_moves()[0]


def play_game(policy_p1: Policy, policy_p2: Policy, max_moves: int = 1000) -> GameState:
    """Play one game from the initial position and return the final state.

    Stops early (winner still None) if ``max_moves`` is reached.
    """
    state = create_initial_state()
    for _ in range(max_moves):
        if state.is_terminal():
            break
        policy = policy_p1 if state.current_turn is Player.PLAYER1 else policy_p2
        result = state.apply_move(policy(state))
        if isinstance(result, Rejected):
            raise ValueError(f"Policy chose an illegal move: {result.reason.value}")
        state = result
    return state


def arena(policy_a: Policy, policy_b: Policy, cfg: ArenaConfig) -> Tuple[int, int, int, float]:
    """Play matches alternating seats; return (wins, draws, losses, win_rate) for ``policy_a``."""
    wins = draws = losses = 0
    for i in range(cfg.games):
        if i % 2 == 0:
            final = play_game(policy_a, policy_b, cfg.max_moves)
            seat = Player.PLAYER1
        else:
            final = play_game(policy_b, policy_a, cfg.max_moves)
            seat = Player.PLAYER2
        if final.winner is None or final.winner is Outcome.DRAW:
            draws += 1
        elif final.winner is Outcome.for_player(seat):
            wins += 1
        else:
            losses += 1
    win_rate = (wins + 0.5 * draws) / max(1, cfg.games)
    logger.info("Arena: %d games, %d-%d-%d (W-D-L), win rate %.3f", cfg.games, wins, draws, losses, win_rate)
    return wins, draws, losses, win_rate
