"""Computer-controlled move selection for Ludo."""

from .base import BaseStrategy
from .features import build_move_options
from .heuristic import EasyStrategy, HardStrategy, WeightedStrategy
from .registry import available, choose_move, create
from .types import MoveOption, StrategyContext

__all__ = [
    "MoveOption",
    "StrategyContext",
    "build_move_options",
    "BaseStrategy",
    "WeightedStrategy",
    "EasyStrategy",
    "HardStrategy",
    "available",
    "create",
    "choose_move",
]
