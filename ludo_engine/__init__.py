"""
Ludo rules engine.
Board topology, move rules, turn sequencing and computer move selection.
"""

from .board import cell_for, global_ring_index, is_safe, path_cells
from .config import ai_config, config
from .errors import ConfigurationError, LudoEngineError
from .game import Game, start_game
from .player import Player
from .rules import can_move, detect_capture, has_any_legal_move, legal_tokens
from .session import Session
from .strategy import choose_move
from .token import Token
from .types import (
    CaptureResult,
    Color,
    Coordinates,
    Difficulty,
    GameConfig,
    GameSnapshot,
    MoveEvents,
    MoveResult,
    Phase,
    PlayerType,
    SeatConfig,
)

__all__ = [
    "Game",
    "start_game",
    "Session",
    "Player",
    "Token",
    "Color",
    "PlayerType",
    "Difficulty",
    "Phase",
    "Coordinates",
    "SeatConfig",
    "GameConfig",
    "GameSnapshot",
    "CaptureResult",
    "MoveEvents",
    "MoveResult",
    "cell_for",
    "global_ring_index",
    "is_safe",
    "path_cells",
    "can_move",
    "has_any_legal_move",
    "legal_tokens",
    "detect_capture",
    "choose_move",
    "config",
    "ai_config",
    "ConfigurationError",
    "LudoEngineError",
]
