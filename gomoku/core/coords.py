"""Pixel <-> cell conversion and move-index encoding for the 15x15 board.

Display cells are 1-based ``(column, row)`` pairs. Moves are 0-based indices
``row * 15 + column``; engine requests take 0-based ``(x, y)`` = ``(column, row)``.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple

BOARD_SIZE = 15
BOARD_CAPACITY = BOARD_SIZE * BOARD_SIZE
FILES = "abcdefghijklmno"


class Cell(NamedTuple):
    column: int
    row: int


@dataclass(frozen=True)
class Rect:
    """Viewport rectangle in pixels (the area the 15x15 grid is stretched over)."""

    left: float
    top: float
    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"viewport must have a positive size, got {self.width}x{self.height}")


def pixels_to_cell(x: float, y: float, rect: Rect) -> Cell:
    """Pointer position → display cell. Not clamped: edges and outside points may give 0 or >15."""
    column = math.ceil((x - rect.left) * BOARD_SIZE / rect.width)
    row = math.ceil((y - rect.top) * BOARD_SIZE / rect.height)
    return Cell(column, row)


def cell_to_request(cell: Cell) -> Tuple[int, int]:
    """Display cell → 0-based (x, y) request coordinates."""
    return cell.column - 1, cell.row - 1


def cell_of_index(index: int) -> Cell:
    row, column = divmod(index, BOARD_SIZE)
    return Cell(column + 1, row + 1)


def index_of(cell: Cell) -> int:
    return (cell.row - 1) * BOARD_SIZE + (cell.column - 1)


def is_on_board(cell: Cell) -> bool:
    return 1 <= cell.column <= BOARD_SIZE and 1 <= cell.row <= BOARD_SIZE


def clamp_cell(cell: Cell) -> Cell:
    return Cell(
        min(max(cell.column, 1), BOARD_SIZE),
        min(max(cell.row, 1), BOARD_SIZE),
    )


def cell_label(cell: Cell) -> str:
    """Console notation: file letter plus 0-based row, e.g. ``h 7`` for (8, 8)."""
    return f"{FILES[cell.column - 1]} {cell.row - 1}"


def parse_cell_label(text: str) -> Cell:
    """Parse console notation (``"h 7"``) into a display cell. Raises ValueError."""
    parts = text.strip().lower().split()
    if len(parts) != 2 or len(parts[0]) != 1 or parts[0] not in FILES:
        raise ValueError(f"expected '<file a-o> <row 0-14>', got {text!r}")
    try:
        row = int(parts[1])
    except ValueError:
        raise ValueError(f"row must be a number, got {parts[1]!r}") from None
    cell = Cell(FILES.index(parts[0]) + 1, row + 1)
    if not is_on_board(cell):
        raise ValueError(f"row out of range: {row}")
    return cell
