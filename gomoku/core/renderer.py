"""Render plans: a declarative description of the dynamic stone layer.

The plan is rebuilt from scratch on every state change (at most 225 stones),
so drawing adapters clear their stone layer and replay it in order.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from gomoku.core.coords import BOARD_SIZE, FILES, Cell
from gomoku.core.history import Color, MarkerTint, MoveHistory


@dataclass(frozen=True)
class CursorPreview:
    """Translucent ghost stone following the pointer. Not part of the game state."""

    cell: Optional[Cell] = None
    opacity: float = 0.0
    color: Color = Color.FIRST


@dataclass(frozen=True)
class StoneOp:
    cell: Cell
    color: Color


@dataclass(frozen=True)
class MarkerOp:
    cell: Cell
    tint: MarkerTint


@dataclass(frozen=True)
class GhostOp:
    cell: Cell
    color: Color
    opacity: float


DrawOp = Union[StoneOp, MarkerOp, GhostOp]


@dataclass(frozen=True)
class RenderPlan:
    ops: Tuple[DrawOp, ...] = ()

    @property
    def stones(self) -> Tuple[StoneOp, ...]:
        return tuple(op for op in self.ops if isinstance(op, StoneOp))

    @property
    def marker(self) -> Optional[MarkerOp]:
        return next((op for op in self.ops if isinstance(op, MarkerOp)), None)

    @property
    def ghost(self) -> Optional[GhostOp]:
        return next((op for op in self.ops if isinstance(op, GhostOp)), None)

    def __len__(self) -> int:
        return len(self.ops)


class BoardRenderer:
    """Turns a MoveHistory and the cursor state into a RenderPlan."""

    def plan(self, history: MoveHistory, cursor: CursorPreview) -> RenderPlan:
        ops = [StoneOp(history.cell_of(i), history.color_at(i)) for i in range(len(history))]
        if not history.is_empty:
            ops.append(MarkerOp(history.cell_of(len(history) - 1), history.marker_color()))
        if cursor.cell is not None:
            ops.append(GhostOp(cursor.cell, cursor.color, cursor.opacity))
        return RenderPlan(tuple(ops))


_GLYPHS = {Color.FIRST: "X", Color.SECOND: "O"}


def render_text(plan: RenderPlan) -> str:
    """ASCII board for the console: X/O stones, ``_`` empty, ``*`` after the last move."""
    grid = [["_ "] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    for op in plan.stones:
        grid[op.cell.row - 1][op.cell.column - 1] = _GLYPHS[op.color] + " "
    marker = plan.marker
    if marker is not None:
        r, c = marker.cell.row - 1, marker.cell.column - 1
        grid[r][c] = grid[r][c][0] + "*"
    lines = ["   " + " ".join(FILES)]
    for row, line in enumerate(grid):
        lines.append(f"{row:2} " + "".join(line))
    return "\n".join(lines)
