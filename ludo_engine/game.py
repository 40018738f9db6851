from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from loguru import logger

from . import board, rules
from .config import config
from .errors import ConfigurationError
from .player import Player
from .strategy import choose_move
from .token import Token
from .types import (
    Color,
    Difficulty,
    GameConfig,
    GameSnapshot,
    MoveEvents,
    MoveResult,
    Phase,
    PlayerType,
)


@dataclass(slots=True)
class Game:
    """Match/turn state for one game, mutated only through its transitions.

    ``request_roll`` and ``request_move`` are the player actions; both are
    silent no-ops outside their phase. With ``auto_advance`` off the caller
    must call ``advance`` itself, which lets a pacing wrapper insert delays.
    """

    players: List[Player]
    current_player_index: int = 0
    difficulty: Difficulty = Difficulty.MEDIUM
    auto_advance: bool = True
    rng: random.Random = field(default_factory=random.Random)
    phase: Phase = field(default=Phase.AWAITING_ROLL, init=False)
    dice_value: Optional[int] = field(default=None, init=False)
    consecutive_sixes: int = field(default=0, init=False)
    winners: List[Color] = field(default_factory=list, init=False)
    last_moved_token_id: Optional[str] = field(default=None, init=False)
    turn: int = field(default=0, init=False)
    log: List[str] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        _validate_players(self.players)
        if not 0 <= self.current_player_index < len(self.players):
            raise ConfigurationError(
                f"current_player_index {self.current_player_index} is not a seat"
            )
        self.difficulty = Difficulty.parse(self.difficulty)

    @classmethod
    def start(cls, game_config: GameConfig, *, auto_advance: bool = True) -> "Game":
        """Build a fresh match from seat configuration.

        Raises ConfigurationError before any state exists when the seats are
        invalid. An unknown first mover falls back to seat 0.
        """
        seats = list(game_config.seats)
        if not config.MIN_PLAYERS <= len(seats) <= config.MAX_PLAYERS:
            raise ConfigurationError(
                f"A game needs {config.MIN_PLAYERS}-{config.MAX_PLAYERS} seats, got {len(seats)}"
            )
        players = [
            Player(
                color=Color.parse(seat.color),
                type=PlayerType.parse(seat.type),
                name=seat.name,
                avatar=seat.avatar,
            )
            for seat in seats
        ]
        _validate_players(players)

        start_index = 0
        if game_config.starting_color is not None:
            wanted = Color.parse(game_config.starting_color)
            found = next(
                (i for i, p in enumerate(players) if p.color == wanted), None
            )
            if found is None:
                logger.warning(
                    f"Starting color {wanted.name} is not seated, seat 0 starts instead"
                )
            else:
                start_index = found

        seed = game_config.seed if game_config.seed is not None else config.SEED
        game = cls(
            players=players,
            current_player_index=start_index,
            difficulty=Difficulty.parse(game_config.difficulty),
            auto_advance=auto_advance,
            rng=random.Random(seed),
        )
        game._record("Game Started!")
        logger.info(
            f"New game: {', '.join(p.color.name for p in players)}, "
            f"{players[start_index].name} starts"
        )
        return game

    # --- Queries ---
    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def is_rolling(self) -> bool:
        return self.phase is Phase.ROLLING

    @property
    def waiting_for_move(self) -> bool:
        return self.phase is Phase.AWAITING_MOVE

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.MATCH_OVER

    @property
    def standings(self) -> List[Color]:
        """Colors in rank order; includes the last place once the match is over."""
        ranked = sorted(
            (p for p in self.players if p.rank is not None), key=lambda p: p.rank
        )
        return [p.color for p in ranked]

    def player_for(self, color: Color | str) -> Player | None:
        color = Color.parse(color)
        return next((p for p in self.players if p.color == color), None)

    def find_token(self, token_id: str) -> Token | None:
        for player in self.players:
            tok = player.token(token_id)
            if tok is not None:
                return tok
        return None

    def movable_tokens(self) -> List[Token]:
        if self.phase is not Phase.AWAITING_MOVE or self.dice_value is None:
            return []
        return rules.legal_tokens(self.current_player, self.dice_value)

    # --- Dice ---
    def roll_dice(self) -> int:
        return self.rng.randint(config.DICE_MIN, config.DICE_MAX)

    # --- Transitions ---
    def begin_roll(self) -> bool:
        if self.phase is not Phase.AWAITING_ROLL:
            logger.debug(f"Roll rejected during {self.phase.value}")
            return False
        self.phase = Phase.ROLLING
        return True

    def complete_roll(self, value: int | None = None) -> int | None:
        if self.phase is not Phase.ROLLING:
            logger.debug(f"No roll in progress during {self.phase.value}")
            return None
        if value is None:
            value = self.roll_dice()
        elif not config.DICE_MIN <= value <= config.DICE_MAX:
            raise ValueError(f"Die value {value} is not between 1 and 6")

        player = self.current_player
        self.dice_value = value
        if value == config.BONUS_ROLL:
            self.consecutive_sixes += 1
        else:
            self.consecutive_sixes = 0
        self._record(f"{player.name} rolled a {value}")

        if rules.has_any_legal_move(player, value):
            self.phase = Phase.AWAITING_MOVE
        else:
            self._record(f"{player.name} has no legal move")
            self._enter_auto_advance()
        return value

    def request_roll(self, value: int | None = None) -> int | None:
        """Roll for the current player; returns the die or None when rejected."""
        if value is not None and not config.DICE_MIN <= value <= config.DICE_MAX:
            raise ValueError(f"Die value {value} is not between 1 and 6")
        if not self.begin_roll():
            return None
        return self.complete_roll(value)

    def request_move(self, token_id: str) -> MoveResult | None:
        if self.phase is not Phase.AWAITING_MOVE or self.dice_value is None:
            logger.debug(f"Move of {token_id} rejected during {self.phase.value}")
            return None
        player = self.current_player
        token = player.token(token_id)
        if token is None:
            logger.debug(f"{token_id} does not belong to {player.name}, ignored")
            return None
        dice = self.dice_value
        if not rules.can_move(token, dice):
            logger.debug(f"{token_id} cannot move {dice}, ignored")
            return None
        return self._apply_move(player, token, dice)

    def advance(self) -> bool:
        """Hand the turn on, or grant the bonus roll after a six."""
        if self.phase is not Phase.AUTO_ADVANCING:
            logger.debug(f"Advance ignored during {self.phase.value}")
            return False
        player = self.current_player
        self.turn += 1
        previous = self.dice_value
        self.dice_value = None
        if (
            previous == config.BONUS_ROLL
            and self.consecutive_sixes < config.MAX_CONSECUTIVE_SIXES
            and not player.has_finished
        ):
            self.phase = Phase.AWAITING_ROLL
            self._record(f"{player.name} rolls again")
            return True
        if previous == config.BONUS_ROLL and not player.has_finished:
            self._record(f"Third six in a row, {player.name} loses the bonus")
        self._next_turn()
        return True

    def play_computer_turn(self) -> bool:
        """Perform the next owed step for a computer-controlled actor.

        Returns False when nothing was done (human actor, rolling or over).
        """
        if self.is_over or not self.current_player.is_computer:
            return False
        if self.phase is Phase.AWAITING_ROLL:
            return self.request_roll() is not None
        if self.phase is Phase.AWAITING_MOVE:
            token = choose_move(
                self.current_player,
                self.dice_value,
                self.players,
                self.difficulty,
                rng=self.rng,
            )
            if token is None:
                self._enter_auto_advance()
                return True
            return self.request_move(token.id) is not None
        if self.phase is Phase.AUTO_ADVANCING:
            return self.advance()
        return False

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            phase=self.phase,
            current_player_index=self.current_player_index,
            current_color=self.current_player.color,
            dice_value=self.dice_value,
            waiting_for_move=self.waiting_for_move,
            is_rolling=self.is_rolling,
            consecutive_sixes=self.consecutive_sixes,
            winners=list(self.winners),
            standings=self.standings,
            step_counts={t.id: t.step_count for p in self.players for t in p.tokens},
            positions=np.asarray(
                [p.step_counts() for p in self.players], dtype=np.int64
            ),
            last_moved_token_id=self.last_moved_token_id,
            turn=self.turn,
            log=list(self.log),
        )

    # --- Internals ---
    def _apply_move(self, player: Player, token: Token, dice: int) -> MoveResult:
        events = MoveEvents()
        old = token.step_count
        new = rules.destination(token, dice)

        events.exited_base = token.in_base
        token.move_to(new)
        events.entered_home_stretch = (
            old <= config.LAST_RING_STEP < new and token.in_home_stretch
        )
        events.finished = token.has_arrived

        capture = rules.detect_capture(token, self.players)
        if capture.captured:
            victim = capture.victim_token
            victim.send_to_base()
            events.knockouts.append(
                {
                    "player": capture.victim_player.color.name,
                    "token_id": victim.id,
                    "ring_index": board.global_ring_index(token),
                }
            )
            self._record(f"{player.name} captured {victim.id}")

        if player.all_arrived() and player.mark_finished(len(self.winners) + 1):
            self.winners.append(player.color)
            events.player_finished = True
            self._record(f"{player.name} finished in place {player.rank}")
            logger.info(f"{player.name} finished in place {player.rank}")

        self.last_moved_token_id = token.id
        self._check_match_over()
        extra = (
            not self.is_over
            and dice == config.BONUS_ROLL
            and self.consecutive_sixes < config.MAX_CONSECUTIVE_SIXES
            and not player.has_finished
        )
        if not self.is_over:
            self._enter_auto_advance()
        return MoveResult(
            token_id=token.id,
            old_step=old,
            new_step=new,
            dice_roll=dice,
            events=events,
            extra_turn=extra,
        )

    def _enter_auto_advance(self) -> None:
        self.phase = Phase.AUTO_ADVANCING
        if self.auto_advance:
            self.advance()

    def _next_turn(self) -> None:
        total = len(self.players)
        idx = self.current_player_index
        for _ in range(total):
            idx = (idx + 1) % total
            if not self.players[idx].has_finished:
                break
        self.current_player_index = idx
        self.consecutive_sixes = 0
        self.dice_value = None
        self.phase = Phase.AWAITING_ROLL
        logger.debug(f"Turn passes to {self.current_player.name}")

    def _check_match_over(self) -> None:
        if len(self.winners) < len(self.players) - 1:
            return
        for player in self.players:
            if not player.has_finished:
                player.rank = len(self.winners) + 1
        self.phase = Phase.MATCH_OVER
        self._record("Game Over!")
        logger.info(
            "Final standings: "
            + ", ".join(f"{i}. {c.name}" for i, c in enumerate(self.standings, 1))
        )

    def _record(self, message: str) -> None:
        self.log.append(message)
        if len(self.log) > config.LOG_SIZE:
            del self.log[: len(self.log) - config.LOG_SIZE]
        logger.debug(message)


def _validate_players(players: List[Player]) -> None:
    if not config.MIN_PLAYERS <= len(players) <= config.MAX_PLAYERS:
        raise ConfigurationError(
            f"A game needs {config.MIN_PLAYERS}-{config.MAX_PLAYERS} players, got {len(players)}"
        )
    colors = [p.color for p in players]
    if len(set(colors)) != len(colors):
        raise ConfigurationError(
            f"Duplicate colors among seats: {[c.name for c in colors]}"
        )


def start_game(game_config: GameConfig, *, auto_advance: bool = True) -> Game:
    return Game.start(game_config, auto_advance=auto_advance)
