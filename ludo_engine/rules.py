from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

from . import board
from .config import config
from .types import CaptureResult

if TYPE_CHECKING:
    from .player import Player
    from .token import Token


# --- Rules: destinations and legality ---
def can_move(token: "Token", dice: int) -> bool:
    if token.in_base:
        return dice == config.EXIT_ROLL
    return token.step_count + dice <= config.FINISH_STEP


def destination(token: "Token", dice: int) -> int | None:
    """Step count reached by moving ``token`` by ``dice``, None when illegal."""
    if not can_move(token, dice):
        return None
    if token.in_base:
        return 0
    return token.step_count + dice


def legal_tokens(player: "Player", dice: int) -> List["Token"]:
    return [t for t in player.tokens if can_move(t, dice)]


def has_any_legal_move(player: "Player", dice: int) -> bool:
    return any(can_move(t, dice) for t in player.tokens)


# --- Captures ---
def detect_capture(moved: "Token", players: Sequence["Player"]) -> CaptureResult:
    """Report the enemy token captured by ``moved`` landing where it is.

    Only ring cells outside the safe set can capture. When several enemy
    tokens share the cell, the first in turn order then token index is the
    single victim. Nothing is mutated here.
    """
    ring_idx = board.global_ring_index(moved)
    if ring_idx == board.OFF_RING or board.is_safe(ring_idx):
        return CaptureResult()
    occupants = board.tokens_at_ring(ring_idx, players, exclude_color=moved.color)
    if not occupants:
        return CaptureResult()
    victim_player, victim_token = occupants[0]
    return CaptureResult(
        captured=True, victim_token=victim_token, victim_player=victim_player
    )
