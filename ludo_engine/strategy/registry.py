from __future__ import annotations

import random
from typing import TYPE_CHECKING, Dict, Optional, Sequence, Type

from loguru import logger

from ..config import ai_config
from ..types import Difficulty
from .base import BaseStrategy
from .heuristic import EasyStrategy, HardStrategy, WeightedStrategy

if TYPE_CHECKING:
    from ..player import Player
    from ..token import Token

STRATEGY_REGISTRY: Dict[Difficulty, Type[WeightedStrategy]] = {
    Difficulty.EASY: EasyStrategy,
    Difficulty.MEDIUM: WeightedStrategy,
    Difficulty.HARD: HardStrategy,
}


def create(difficulty: Difficulty | str) -> BaseStrategy:
    cls = STRATEGY_REGISTRY[Difficulty.parse(difficulty)]
    return cls.from_config(ai_config)


def available() -> Dict[str, Type[WeightedStrategy]]:
    return {level.value: cls for level, cls in STRATEGY_REGISTRY.items()}


def choose_move(
    player: "Player",
    dice_roll: int,
    players: Sequence["Player"],
    difficulty: Difficulty | str = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
) -> Optional["Token"]:
    """Pick the token a computer-controlled ``player`` should move.

    Returns None when no token can legally move; the caller treats that as a
    forced pass. Only EASY draws from ``rng``, every other difficulty is a
    deterministic function of the board.
    """
    strategy = create(difficulty)
    token = strategy.decide(player, dice_roll, players, rng=rng)
    if token is None:
        logger.debug(f"{player.name} has no legal move for a {dice_roll}")
    else:
        logger.debug(
            f"{player.name} ({strategy.name}) picks {token.id} for a {dice_roll}"
        )
    return token
