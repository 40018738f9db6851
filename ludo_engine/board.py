"""Board topology: maps a color's step count to ring indices and board cells.

Everything here is a pure function of ``(color, step_count)``. Cells use a
15x15 grid numbered from 1, with each color's base in one corner quadrant
and the arrival slots around the center hub.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Sequence, Tuple

from .config import config
from .types import Color, Coordinates

if TYPE_CHECKING:
    from .player import Player
    from .token import Token

OFF_RING = -1
BOARD_SIZE = 15

_C = Coordinates

# fmt: off
# Shared ring, index 0 is Red's entry cell, running clockwise
GLOBAL_PATH: Tuple[Coordinates, ...] = (
    _C(2, 7), _C(3, 7), _C(4, 7), _C(5, 7), _C(6, 7),
    _C(7, 6), _C(7, 5), _C(7, 4), _C(7, 3), _C(7, 2), _C(7, 1),
    _C(8, 1), _C(9, 1),
    _C(9, 2), _C(9, 3), _C(9, 4), _C(9, 5), _C(9, 6),
    _C(10, 7), _C(11, 7), _C(12, 7), _C(13, 7), _C(14, 7), _C(15, 7),
    _C(15, 8), _C(15, 9),
    _C(14, 9), _C(13, 9), _C(12, 9), _C(11, 9), _C(10, 9),
    _C(9, 10), _C(9, 11), _C(9, 12), _C(9, 13), _C(9, 14), _C(9, 15),
    _C(8, 15), _C(7, 15),
    _C(7, 14), _C(7, 13), _C(7, 12), _C(7, 11), _C(7, 10),
    _C(6, 9), _C(5, 9), _C(4, 9), _C(3, 9), _C(2, 9), _C(1, 9),
    _C(1, 8), _C(1, 7),
)

# Private home stretches; the last cell of each is that color's arrival slot
HOME_PATHS: Dict[Color, Tuple[Coordinates, ...]] = {
    Color.RED: (_C(2, 8), _C(3, 8), _C(4, 8), _C(5, 8), _C(6, 8), _C(7, 8)),
    Color.GREEN: (_C(8, 2), _C(8, 3), _C(8, 4), _C(8, 5), _C(8, 6), _C(8, 7)),
    Color.BLUE: (_C(14, 8), _C(13, 8), _C(12, 8), _C(11, 8), _C(10, 8), _C(9, 8)),
    Color.YELLOW: (_C(8, 14), _C(8, 13), _C(8, 12), _C(8, 11), _C(8, 10), _C(8, 9)),
}

BASE_SLOTS: Dict[Color, Tuple[Coordinates, ...]] = {
    Color.RED: (_C(2, 2), _C(5, 2), _C(2, 5), _C(5, 5)),
    Color.GREEN: (_C(11, 2), _C(14, 2), _C(11, 5), _C(14, 5)),
    Color.BLUE: (_C(11, 11), _C(14, 11), _C(11, 14), _C(14, 14)),
    Color.YELLOW: (_C(2, 11), _C(5, 11), _C(2, 14), _C(5, 14)),
}
# fmt: on

SAFE_SQUARES = frozenset(config.SAFE_SQUARES)


def entry_offset(color: int | Color) -> int:
    return config.ENTRY_OFFSETS[int(color)]


def ring_index(color: int | Color, step_count: int) -> int:
    """Map a color's step count to the shared ring (0..51), or OFF_RING."""
    if not 0 <= step_count <= config.LAST_RING_STEP:
        return OFF_RING
    return (entry_offset(color) + step_count) % config.RING_LENGTH


def global_ring_index(token: "Token") -> int:
    return ring_index(token.color, token.step_count)


def is_safe(ring_idx: int) -> bool:
    return ring_idx in SAFE_SQUARES


def cell_for(color: int | Color, step_count: int, token_index: int = 0) -> Coordinates:
    """Board cell for a token of ``color`` at ``step_count``.

    Base tokens sit in a fixed slot chosen by ``token_index``; ring steps wrap
    around the shared path from the color's entry point; steps 51..56 walk the
    color's home stretch, 56 being the arrival slot.
    """
    color = Color(color)
    if step_count == config.BASE_STEP:
        return BASE_SLOTS[color][token_index % config.TOKENS_PER_PLAYER]
    if 0 <= step_count <= config.LAST_RING_STEP:
        return GLOBAL_PATH[ring_index(color, step_count)]
    if config.HOME_STRETCH_START <= step_count <= config.FINISH_STEP:
        return HOME_PATHS[color][step_count - config.HOME_STRETCH_START]
    raise ValueError(f"Step count {step_count} is outside the board")


def token_cell(token: "Token") -> Coordinates:
    return cell_for(token.color, token.step_count, token.index)


def path_cells(
    color: int | Color, from_step: int, to_step: int, token_index: int = 0
) -> List[Coordinates]:
    """Cells visited one step at a time when moving from ``from_step`` to ``to_step``.

    Leaving base is a single hop onto the entry cell.
    """
    if to_step < from_step:
        raise ValueError("Tokens never move backwards")
    if from_step == config.BASE_STEP:
        return [cell_for(color, to_step, token_index)]
    return [cell_for(color, s, token_index) for s in range(from_step + 1, to_step + 1)]


def tokens_at_ring(
    ring_idx: int,
    players: Sequence["Player"],
    *,
    exclude_color: int | None = None,
) -> list[tuple["Player", "Token"]]:
    """Tokens on a ring cell, scanned in turn order then token index."""
    out: list[tuple["Player", "Token"]] = []
    if ring_idx == OFF_RING:
        return out
    for player in players:
        if exclude_color is not None and int(player.color) == exclude_color:
            continue
        for tok in player.tokens:
            if global_ring_index(tok) == ring_idx:
                out.append((player, tok))
    return out


def occupied_cells(players: Iterable["Player"]) -> Dict[Coordinates, List[str]]:
    """Group token ids by the cell they are drawn on."""
    cells: Dict[Coordinates, List[str]] = {}
    for player in players:
        for tok in player.tokens:
            cells.setdefault(token_cell(tok), []).append(tok.id)
    return cells
