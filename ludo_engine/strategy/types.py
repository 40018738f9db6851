from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Sequence

if TYPE_CHECKING:
    from ..player import Player
    from ..token import Token


@dataclass(slots=True)
class MoveOption:
    """Structured metadata about a legal move, computed on a cloned token."""

    token: "Token"  # the real token, never mutated during evaluation
    current_step: int
    new_step: int
    dice_roll: int
    progress: int
    ring_index: int
    can_capture: bool
    leaves_base: bool
    enters_home_stretch: bool
    enters_safe_zone: bool
    finishes: bool
    extra_turn: bool


@dataclass(slots=True)
class StrategyContext:
    """Input payload shared by scoring strategies."""

    player: "Player"
    players: Sequence["Player"]
    dice_roll: int
    moves: List[MoveOption]

    def iter_legal(self) -> Iterable[MoveOption]:
        return iter(self.moves)
