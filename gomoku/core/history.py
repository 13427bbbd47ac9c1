"""Move history as returned by the engine, and the colors derived from it."""

from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from gomoku.core.coords import BOARD_CAPACITY, Cell, cell_of_index
from gomoku.core.errors import SnapshotError


class Color(str, Enum):
    FIRST = "first-player"
    SECOND = "second-player"


class MarkerTint(str, Enum):
    """Last-move marker tints. Keyed on history parity, not on the stone's color."""

    LIGHT = "light"  # odd history length
    DARK = "dark"  # even history length


def validate_snapshot(snapshot: Iterable[int]) -> Tuple[int, ...]:
    """Return the snapshot as a tuple, or raise SnapshotError if it cannot be a board."""
    moves = tuple(snapshot)
    if len(moves) > BOARD_CAPACITY:
        raise SnapshotError(f"snapshot has {len(moves)} moves, board holds {BOARD_CAPACITY}")
    seen = set()
    for pos, m in enumerate(moves):
        if not isinstance(m, int) or isinstance(m, bool):
            raise SnapshotError(f"move #{pos} is not an integer: {m!r}")
        if not 0 <= m < BOARD_CAPACITY:
            raise SnapshotError(f"move #{pos} out of range: {m}")
        if m in seen:
            raise SnapshotError(f"move #{pos} repeats cell {m}")
        seen.add(m)
    return moves


class MoveHistory:
    """Ordered moves of the current game. Replaced wholesale, never patched."""

    def __init__(self, snapshot: Sequence[int] = ()):
        self._moves: Tuple[int, ...] = tuple(snapshot)

    def replace(self, snapshot: Iterable[int]) -> None:
        """Adopt ``snapshot`` as the current truth. No validation here."""
        self._moves = tuple(snapshot)

    @property
    def moves(self) -> Tuple[int, ...]:
        return self._moves

    @property
    def is_empty(self) -> bool:
        return not self._moves

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[int]:
        return iter(self._moves)

    def __repr__(self) -> str:
        return f"MoveHistory({list(self._moves)})"

    @staticmethod
    def color_at(index: int) -> Color:
        return Color.FIRST if index % 2 == 0 else Color.SECOND

    def cell_of(self, index: int) -> Cell:
        """Cell of the ``index``-th move played."""
        return cell_of_index(self._moves[index])

    def last_move(self) -> Optional[int]:
        return self._moves[-1] if self._moves else None

    def next_color(self) -> Color:
        """Color of the stone that would be played next."""
        return self.color_at(len(self._moves))

    def marker_color(self) -> MarkerTint:
        return MarkerTint.LIGHT if len(self._moves) % 2 == 1 else MarkerTint.DARK
