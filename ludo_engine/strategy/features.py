from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from .. import board, rules
from ..config import config
from .types import MoveOption, StrategyContext

if TYPE_CHECKING:  # avoid runtime import to prevent circular deps
    from ..player import Player
    from ..token import Token


def _create_move_option(
    token: "Token", dice_roll: int, players: Sequence["Player"]
) -> MoveOption:
    # Simulate on a clone so the live board is never touched
    simulated = token.clone()
    simulated.step_count = rules.destination(token, dice_roll)
    capture = rules.detect_capture(simulated, players)
    ring_idx = board.global_ring_index(simulated)

    leaves_base = token.in_base
    finishes = simulated.has_arrived
    return MoveOption(
        token=token,
        current_step=token.step_count,
        new_step=simulated.step_count,
        dice_roll=dice_roll,
        progress=_compute_progress(token.step_count, simulated.step_count),
        ring_index=ring_idx,
        can_capture=capture.captured,
        leaves_base=leaves_base,
        enters_home_stretch=simulated.step_count > config.LAST_RING_STEP,
        enters_safe_zone=ring_idx != board.OFF_RING and board.is_safe(ring_idx),
        finishes=finishes,
        extra_turn=dice_roll == config.BONUS_ROLL,
    )


def build_move_options(
    player: "Player", dice_roll: int, players: Sequence["Player"]
) -> StrategyContext:
    """Convert the player's legal tokens into a strategy context."""
    dice = int(dice_roll)
    moves = [
        _create_move_option(tok, dice, players)
        for tok in rules.legal_tokens(player, dice)
    ]
    return StrategyContext(player=player, players=players, dice_roll=dice, moves=moves)


def _compute_progress(current_step: int, new_step: int) -> int:
    if current_step == config.BASE_STEP:
        return 1  # entering the board
    return max(new_step - current_step, 0)
