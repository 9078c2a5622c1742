from __future__ import annotations

import argparse
import json
import logging
import random
from typing import List, Optional

from kalah.arena.eval import ArenaConfig, arena, random_policy
from kalah.game.encoding import deserialize_notation, serialize_notation, state_to_dict
from kalah.game.kalah import GameState, Rejected, create_initial_state


def play_moves(state: GameState, moves: List[int]) -> dict:
    """Apply ``moves`` in order as the side to move; stop at the first rejection."""
    rejected = None
    for pit_index in moves:
        result = state.apply_move(pit_index)
        if isinstance(result, Rejected):
            rejected = result.reason.name
            break
        state = result
    return {"state": state_to_dict(state), "notation": serialize_notation(state), "rejected": rejected}


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Kalah rules engine")
    parser.add_argument("notation", type=str, nargs="?", default=None, help="Position notation (default: opening)")
    parser.add_argument("--move", type=int, nargs="*", default=[], help="Pit indices to play in order")
    parser.add_argument("--arena", type=int, default=0, help="Play N random-vs-random games instead")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for --arena")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.arena > 0:
        rng = random.Random(args.seed)
        wins, draws, losses, win_rate = arena(random_policy(rng), random_policy(rng), ArenaConfig(games=args.arena))
        print(json.dumps({"wins": wins, "draws": draws, "losses": losses, "winRate": win_rate}))
        return

    if args.notation is None:
        state = create_initial_state()
    else:
        try:
            state = deserialize_notation(args.notation)
        except ValueError as exc:
            parser.error(f"invalid notation: {exc}")
    print(json.dumps(play_moves(state, args.move)))


if __name__ == "__main__":
    main()
