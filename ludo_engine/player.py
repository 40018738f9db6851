from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .config import config
from .token import Token
from .types import Color, PlayerType


@dataclass(slots=True)
class Player:
    color: Color
    type: PlayerType = PlayerType.HUMAN
    name: str = ""
    avatar: str = ""
    tokens: list[Token] = field(init=False)
    has_finished: bool = field(default=False, init=False)
    rank: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.color = Color(self.color)
        if not self.name:
            self.name = self.color.name.title()
        color_val = int(self.color)
        self.tokens = [
            Token(color=color_val, index=i) for i in range(config.TOKENS_PER_PLAYER)
        ]

    @property
    def id(self) -> str:
        return self.color.name

    @property
    def is_computer(self) -> bool:
        return self.type is PlayerType.COMPUTER

    def step_counts(self) -> list[int]:
        return [t.step_count for t in self.tokens]

    def token(self, token_id: str) -> Token | None:
        return next((t for t in self.tokens if t.id == token_id), None)

    def all_arrived(self) -> bool:
        return all(t.has_arrived for t in self.tokens)

    def mark_finished(self, rank: int) -> bool:
        """Record the finish once. Returns False if already finished."""
        if self.has_finished:
            return False
        self.has_finished = True
        self.rank = rank
        return True
