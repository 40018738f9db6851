from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from loguru import logger

from . import board
from .config import config
from .game import Game
from .strategy import choose_move
from .types import GameConfig, GameSnapshot, MoveResult, Phase


@dataclass
class Session:
    """Owns the live match and applies cosmetic pacing around its transitions.

    Every paced transition holds the session busy; roll or move requests that
    arrive meanwhile (typically from an ``on_change`` listener) are rejected,
    never queued. ``new_game`` swaps in a fully built match, and any paced
    transition still running against the old one stops at its next check.
    """

    game_config: GameConfig
    roll_delay: float = config.ROLL_DELAY
    step_delay: float = config.STEP_DELAY
    turn_delay: float = config.TURN_DELAY
    think_delay: float = config.THINK_DELAY
    sleep: Callable[[float], None] = time.sleep
    on_change: Optional[Callable[[GameSnapshot], None]] = None
    game: Game = field(init=False)
    _busy: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.game = Game.start(self.game_config, auto_advance=False)

    @classmethod
    def headless(cls, game_config: GameConfig, **kwargs) -> "Session":
        """Session with every delay set to zero."""
        return cls(
            game_config,
            roll_delay=0.0,
            step_delay=0.0,
            turn_delay=0.0,
            think_delay=0.0,
            **kwargs,
        )

    @property
    def busy(self) -> bool:
        return self._busy

    def snapshot(self) -> GameSnapshot:
        return self.game.snapshot()

    def new_game(self, game_config: GameConfig | None = None) -> GameSnapshot:
        if game_config is not None:
            self.game_config = game_config
        fresh = Game.start(self.game_config, auto_advance=False)
        self.game = fresh
        self._busy = False
        self._notify(fresh)
        return fresh.snapshot()

    # --- Human actions ---
    def roll(self) -> int | None:
        if self._busy:
            logger.debug("Roll rejected, a transition is still pending")
            return None
        if self.game.current_player.is_computer:
            logger.debug("Roll rejected, the computer is on turn")
            return None
        return self._paced_roll(self.game)

    def move(self, token_id: str) -> MoveResult | None:
        if self._busy:
            logger.debug(f"Move of {token_id} rejected, a transition is still pending")
            return None
        if self.game.current_player.is_computer:
            logger.debug(f"Move of {token_id} rejected, the computer is on turn")
            return None
        return self._paced_move(self.game, token_id)

    # --- Computer turns ---
    def step_computer(self) -> bool:
        """Let a computer actor perform its next owed step after thinking."""
        game = self.game
        if self._busy or game.is_over or not game.current_player.is_computer:
            return False
        self.sleep(self.think_delay)
        if self.game is not game:
            return False
        if game.phase is Phase.AWAITING_ROLL:
            return self._paced_roll(game) is not None
        if game.phase is Phase.AWAITING_MOVE:
            token = choose_move(
                game.current_player,
                game.dice_value,
                game.players,
                game.difficulty,
                rng=game.rng,
            )
            if token is None:
                return False
            return self._paced_move(game, token.id) is not None
        return False

    def run_until_human(self, max_steps: int = 100_000) -> GameSnapshot:
        """Drive computer turns until a human must act or the match ends."""
        for _ in range(max_steps):
            if not self.step_computer():
                break
        else:
            logger.warning(f"Stopped driving computer turns after {max_steps} steps")
        return self.snapshot()

    # --- Paced transitions ---
    @contextmanager
    def _pending(self) -> Iterator[None]:
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _paced_roll(self, game: Game) -> int | None:
        with self._pending():
            if not game.begin_roll():
                return None
            self._notify(game)
            self.sleep(self.roll_delay)
            if self.game is not game:
                return None
            value = game.complete_roll()
            self._notify(game)
            self._settle(game)
            return value

    def _paced_move(self, game: Game, token_id: str) -> MoveResult | None:
        with self._pending():
            result = game.request_move(token_id)
            if result is None:
                return None
            token = game.find_token(token_id)
            cells = board.path_cells(
                token.color, result.old_step, result.new_step, token.index
            )
            for _ in cells:
                self.sleep(self.step_delay)
                if self.game is not game:
                    return result
            self._notify(game)
            self._settle(game)
            return result

    def _settle(self, game: Game) -> None:
        if game.phase is not Phase.AUTO_ADVANCING:
            return
        # A bonus roll is granted straight away, a hand-off waits
        bonus = (
            game.dice_value == config.BONUS_ROLL
            and game.consecutive_sixes < config.MAX_CONSECUTIVE_SIXES
            and not game.current_player.has_finished
        )
        if not bonus:
            self.sleep(self.turn_delay)
            if self.game is not game:
                return
        game.advance()
        self._notify(game)

    def _notify(self, game: Game) -> None:
        if self.on_change is not None and self.game is game:
            self.on_change(game.snapshot())
