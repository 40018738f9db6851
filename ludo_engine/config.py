import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(slots=True)
class Config:
    # --- Constants ---
    RING_LENGTH: int = 52
    HOME_STRETCH_SIZE: int = 6
    TOKENS_PER_PLAYER: int = 4
    MIN_PLAYERS: int = 2
    MAX_PLAYERS: int = 4

    # Step counts: -1 = base, 0..50 = ring, 51..56 = home stretch, 56 = arrived
    BASE_STEP: int = -1
    EXIT_ROLL: int = 6
    BONUS_ROLL: int = 6
    MAX_CONSECUTIVE_SIXES: int = 3
    DICE_MIN: int = 1
    DICE_MAX: int = 6

    # Ring index where each color enters (Red, Green, Yellow, Blue by Color id)
    ENTRY_OFFSETS: list[int] = field(default_factory=lambda: [0, 13, 39, 26])
    SAFE_SQUARES: list[int] = field(
        default_factory=lambda: [0, 8, 13, 21, 26, 34, 39, 47]
    )
    STAR_SQUARES: list[int] = field(default_factory=lambda: [8, 21, 34, 47])

    # Derived (populated in __post_init__ due to slots)
    LAST_RING_STEP: int = 0
    HOME_STRETCH_START: int = 0
    FINISH_STEP: int = 0

    # Pacing (seconds), only used by the Session wrapper
    ROLL_DELAY: float = float(os.getenv("LUDO_ROLL_DELAY", 0.6))
    STEP_DELAY: float = float(os.getenv("LUDO_STEP_DELAY", 0.0))
    TURN_DELAY: float = float(os.getenv("LUDO_TURN_DELAY", 0.8))
    THINK_DELAY: float = float(os.getenv("LUDO_THINK_DELAY", 1.0))

    LOG_SIZE: int = int(os.getenv("LUDO_LOG_SIZE", 20))
    SEED: int | None = (
        int(os.environ["LUDO_SEED"]) if os.getenv("LUDO_SEED") else None
    )

    def __post_init__(self):
        # Ring covers steps 0..50, home stretch 51..56
        self.LAST_RING_STEP = self.RING_LENGTH - 2
        self.HOME_STRETCH_START = self.LAST_RING_STEP + 1
        self.FINISH_STEP = self.HOME_STRETCH_START + self.HOME_STRETCH_SIZE - 1

        if len(set(self.ENTRY_OFFSETS)) != self.MAX_PLAYERS:
            raise ValueError("ENTRY_OFFSETS must hold one distinct offset per color")
        spacing = self.RING_LENGTH // self.MAX_PLAYERS
        if sorted(self.ENTRY_OFFSETS) != [i * spacing for i in range(self.MAX_PLAYERS)]:
            raise ValueError(f"ENTRY_OFFSETS must be spaced {spacing} apart")
        if not set(self.ENTRY_OFFSETS) <= set(self.SAFE_SQUARES):
            raise ValueError("Every entry point must be a safe square")
        if min(self.ROLL_DELAY, self.STEP_DELAY, self.TURN_DELAY, self.THINK_DELAY) < 0:
            raise ValueError("Pacing delays must be non-negative")


@dataclass(slots=True)
class AIConfig:
    # EASY picks a random legal token this often before falling back to scoring
    easy_mistake_rate: float = float(os.getenv("LUDO_EASY_MISTAKE_RATE", 0.7))

    # Weights per difficulty (MEDIUM is also EASY's fallback)
    medium_capture: float = 100.0
    medium_leave_base: float = 50.0
    medium_home_stretch: float = 40.0
    medium_safe: float = 20.0
    medium_progress: float = 1.0

    hard_capture: float = 500.0
    hard_leave_base: float = 200.0
    hard_home_stretch: float = 150.0
    hard_safe: float = 100.0
    hard_progress: float = 2.0

    def __post_init__(self):
        if not 0.0 <= self.easy_mistake_rate <= 1.0:
            raise ValueError("easy_mistake_rate must be within [0, 1]")


config = Config()
ai_config = AIConfig()
