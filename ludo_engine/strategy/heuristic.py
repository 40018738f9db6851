from __future__ import annotations

import random
from dataclasses import dataclass
from typing import ClassVar, Optional

from ..config import AIConfig, ai_config
from .base import BaseStrategy
from .types import MoveOption, StrategyContext


@dataclass(slots=True)
class WeightedStrategy(BaseStrategy):
    """Scores each candidate on captures, base exits, home stretch, safety and progress."""

    name: ClassVar[str] = "medium"

    capture_weight: float = ai_config.medium_capture
    leave_base_weight: float = ai_config.medium_leave_base
    home_stretch_weight: float = ai_config.medium_home_stretch
    safe_bonus: float = ai_config.medium_safe
    progress_weight: float = ai_config.medium_progress

    def _score_move(self, ctx: StrategyContext, move: MoveOption) -> float:
        score = 0.0
        if move.can_capture:
            score += self.capture_weight
        if move.leaves_base:
            score += self.leave_base_weight
        if move.enters_home_stretch:
            score += self.home_stretch_weight
        if move.enters_safe_zone:
            score += self.safe_bonus
        score += move.new_step * self.progress_weight
        return score

    @classmethod
    def from_config(cls, cfg: AIConfig = ai_config) -> "WeightedStrategy":
        return cls(
            capture_weight=cfg.medium_capture,
            leave_base_weight=cfg.medium_leave_base,
            home_stretch_weight=cfg.medium_home_stretch,
            safe_bonus=cfg.medium_safe,
            progress_weight=cfg.medium_progress,
        )


@dataclass(slots=True)
class HardStrategy(WeightedStrategy):
    """Same heuristic with every weight scaled up, much keener on captures and safety."""

    name: ClassVar[str] = "hard"

    capture_weight: float = ai_config.hard_capture
    leave_base_weight: float = ai_config.hard_leave_base
    home_stretch_weight: float = ai_config.hard_home_stretch
    safe_bonus: float = ai_config.hard_safe
    progress_weight: float = ai_config.hard_progress

    @classmethod
    def from_config(cls, cfg: AIConfig = ai_config) -> "HardStrategy":
        return cls(
            capture_weight=cfg.hard_capture,
            leave_base_weight=cfg.hard_leave_base,
            home_stretch_weight=cfg.hard_home_stretch,
            safe_bonus=cfg.hard_safe,
            progress_weight=cfg.hard_progress,
        )


@dataclass(slots=True)
class EasyStrategy(WeightedStrategy):
    """Often plays a random legal token to imitate a beginner."""

    name: ClassVar[str] = "easy"

    mistake_rate: float = ai_config.easy_mistake_rate

    def select_move(
        self, ctx: StrategyContext, rng: random.Random
    ) -> Optional[MoveOption]:
        if ctx.moves and rng.random() < self.mistake_rate:
            return rng.choice(ctx.moves)
        return WeightedStrategy.select_move(self, ctx, rng)

    @classmethod
    def from_config(cls, cfg: AIConfig = ai_config) -> "EasyStrategy":
        return cls(
            capture_weight=cfg.medium_capture,
            leave_base_weight=cfg.medium_leave_base,
            home_stretch_weight=cfg.medium_home_stretch,
            safe_bonus=cfg.medium_safe,
            progress_weight=cfg.medium_progress,
            mistake_rate=cfg.easy_mistake_rate,
        )
