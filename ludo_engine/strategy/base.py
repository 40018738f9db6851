from __future__ import annotations

import random
from typing import TYPE_CHECKING, ClassVar, Optional, Sequence

from .features import build_move_options
from .types import MoveOption, StrategyContext

if TYPE_CHECKING:
    from ..player import Player
    from ..token import Token


class BaseStrategy:
    """Base class for scoring strategies with shared move selection."""

    name: ClassVar[str] = "base"

    def decide(
        self,
        player: "Player",
        dice_roll: int,
        players: Sequence["Player"],
        rng: random.Random | None = None,
    ) -> Optional["Token"]:
        ctx = build_move_options(player, int(dice_roll), players)
        if not ctx.moves:
            return None
        if len(ctx.moves) == 1:
            return ctx.moves[0].token
        move = self.select_move(ctx, rng or random)
        return move.token if move is not None else None

    def select_move(
        self, ctx: StrategyContext, rng: random.Random
    ) -> Optional[MoveOption]:
        best: Optional[MoveOption] = None
        best_score = float("-inf")
        # Strict comparison keeps the earliest token on ties
        for move in ctx.iter_legal():
            score = self._score_move(ctx, move)
            if score > best_score:
                best, best_score = move, score
        return best

    def _score_move(
        self, ctx: StrategyContext, move: MoveOption
    ) -> float:  # pragma: no cover - abstract
        raise NotImplementedError
