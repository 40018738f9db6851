from dataclasses import dataclass, replace

from .config import config
from .types import Color


@dataclass(slots=True)
class Token:
    """Lightweight token model. Holds state only.

    Rule logic (legality, captures, finishing) is handled by ``rules`` and the
    game, not the token. Ring/cell mapping is performed by ``board``.
    """

    color: int  # Color value 0..3
    index: int  # 0..3 per player, also selects the base slot
    step_count: int = config.BASE_STEP  # -1 base; 0..50 ring; 51..56 home stretch

    @property
    def id(self) -> str:
        return f"{Color(self.color).name}_{self.index}"

    @property
    def in_base(self) -> bool:
        return self.step_count == config.BASE_STEP

    @property
    def on_ring(self) -> bool:
        return 0 <= self.step_count <= config.LAST_RING_STEP

    @property
    def in_home_stretch(self) -> bool:
        return self.step_count >= config.HOME_STRETCH_START

    @property
    def has_arrived(self) -> bool:
        return self.step_count == config.FINISH_STEP

    def move_to(self, new_step: int) -> None:
        if new_step < self.step_count:
            raise ValueError(
                f"{self.id} cannot move backwards ({self.step_count} -> {new_step})"
            )
        if new_step > config.FINISH_STEP:
            raise ValueError(f"{self.id} cannot move past {config.FINISH_STEP}")
        self.step_count = new_step

    def send_to_base(self) -> None:
        self.step_count = config.BASE_STEP

    def clone(self) -> "Token":
        return replace(self)
