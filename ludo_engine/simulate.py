import argparse
import os
import time
from typing import Optional

import numpy as np
from loguru import logger

from .config import config
from .game import Game
from .types import Color, Difficulty, GameConfig, PlayerType, SeatConfig

# Seats in board order so that opponents sit across from each other
_SEAT_ORDER = {
    2: [Color.RED, Color.BLUE],
    3: [Color.RED, Color.GREEN, Color.BLUE],
    4: [Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW],
}


def parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play headless all-computer Ludo matches"
    )
    parser.add_argument(
        "--num-players",
        type=int,
        default=int(os.getenv("NUM_PLAYERS", 4)),
        choices=sorted(_SEAT_ORDER),
        help="Number of seats in each match",
    )
    parser.add_argument("--games", type=int, default=10, help="Matches to play")
    parser.add_argument(
        "--difficulty",
        type=str,
        default=Difficulty.MEDIUM.value,
        choices=[d.value for d in Difficulty],
        help="Difficulty used by every computer seat",
    )
    parser.add_argument("--seed", type=int, default=config.SEED)
    parser.add_argument(
        "--max-steps",
        type=int,
        default=200_000,
        help="Safety cap on engine steps per match",
    )
    return parser.parse_args(args=args)


def build_config(
    num_players: int, difficulty: Difficulty | str, seed: Optional[int] = None
) -> GameConfig:
    seats = [
        SeatConfig(color=c, type=PlayerType.COMPUTER, name=f"CPU {c.name.title()}")
        for c in _SEAT_ORDER[num_players]
    ]
    return GameConfig(seats=seats, difficulty=difficulty, seed=seed)


def play_match(game: Game, max_steps: int = 200_000) -> Game:
    """Drive an all-computer match to its end."""
    for _ in range(max_steps):
        if game.is_over:
            break
        if not game.play_computer_turn():
            raise RuntimeError(
                f"Match stalled in {game.phase.value} for {game.current_player.name}"
            )
    else:
        logger.warning(f"Match stopped after {max_steps} steps without finishing")
    return game


def main(args: Optional[list[str]] = None) -> None:
    ns = parse_args(args)
    start_time = time.time()

    winners: dict[str, int] = {}
    turns: list[int] = []
    for i in range(ns.games):
        seed = None if ns.seed is None else ns.seed + i
        game = Game.start(build_config(ns.num_players, ns.difficulty, seed))
        play_match(game, max_steps=ns.max_steps)
        turns.append(game.turn)
        if game.winners:
            name = game.winners[0].name
            winners[name] = winners.get(name, 0) + 1
        logger.info(
            f"Game {i + 1}: "
            + ", ".join(f"{r}. {c.name}" for r, c in enumerate(game.standings, 1))
            + f" after {game.turn} turns"
        )

    turn_arr = np.asarray(turns, dtype=np.int64)
    logger.info(f"Played {ns.games} games in {time.time() - start_time:.2f}s")
    if turn_arr.size:
        logger.info(
            f"Turns per game: mean {turn_arr.mean():.1f}, "
            f"min {turn_arr.min()}, max {turn_arr.max()}"
        )
    for color, count in sorted(winners.items(), key=lambda kv: -kv[1]):
        logger.info(f"{color}: {count} wins ({count / ns.games:.0%})")


if __name__ == "__main__":
    main()
