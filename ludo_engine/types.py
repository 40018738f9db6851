from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, List, NamedTuple, Optional

import numpy as np

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .player import Player
    from .token import Token


class Color(IntEnum):
    RED = 0
    GREEN = 1
    YELLOW = 2
    BLUE = 3

    @classmethod
    def parse(cls, value: "Color | str | int") -> "Color":
        if isinstance(value, cls):
            return value
        try:
            if isinstance(value, str):
                return cls[value.strip().upper()]
            return cls(int(value))
        except (KeyError, ValueError) as e:
            raise ConfigurationError(f"Unknown color '{value}'") from e


class PlayerType(str, Enum):
    HUMAN = "HUMAN"
    COMPUTER = "COMPUTER"

    @classmethod
    def parse(cls, value: "PlayerType | str") -> "PlayerType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            raise ConfigurationError(f"Unknown control type '{value}'") from e


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            raise ConfigurationError(f"Unknown difficulty '{value}'") from e


class Phase(str, Enum):
    AWAITING_ROLL = "AWAITING_ROLL"
    ROLLING = "ROLLING"
    AWAITING_MOVE = "AWAITING_MOVE"
    AUTO_ADVANCING = "AUTO_ADVANCING"
    MATCH_OVER = "MATCH_OVER"


class Coordinates(NamedTuple):
    x: int
    y: int


@dataclass(slots=True)
class SeatConfig:
    color: Color | str
    type: PlayerType | str = PlayerType.HUMAN
    name: str = ""
    avatar: str = ""


@dataclass(slots=True)
class GameConfig:
    seats: List[SeatConfig]
    starting_color: Color | str | None = None
    difficulty: Difficulty | str = Difficulty.MEDIUM
    seed: Optional[int] = None


@dataclass(slots=True)
class CaptureResult:
    captured: bool = False
    victim_token: Optional["Token"] = None
    victim_player: Optional["Player"] = None


@dataclass(slots=True)
class MoveEvents:
    exited_base: bool = False
    entered_home_stretch: bool = False
    finished: bool = False
    knockouts: List[dict[str, int | str]] = field(default_factory=list)
    player_finished: bool = False


@dataclass(slots=True)
class MoveResult:
    token_id: str
    old_step: int
    new_step: int
    dice_roll: int
    events: MoveEvents
    extra_turn: bool


@dataclass(slots=True)
class GameSnapshot:
    """Read-only view of the match handed to the presentation layer."""

    phase: Phase
    current_player_index: int
    current_color: Color
    dice_value: Optional[int]
    waiting_for_move: bool
    is_rolling: bool
    consecutive_sixes: int
    winners: List[Color]
    standings: List[Color]
    step_counts: dict[str, int]
    positions: np.ndarray  # shape (players, tokens_per_player)
    last_moved_token_id: Optional[str]
    turn: int
    log: List[str]

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.MATCH_OVER
