"""15x15 Gomoku board painted from a RenderPlan; forwards pointer gestures to the controller."""

from typing import Dict, Optional

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QPoint, QPointF
from PySide6.QtGui import (
    QPainter,
    QBrush,
    QPen,
    QPixmap,
    QMouseEvent,
    QPaintEvent,
    QLinearGradient,
    QPolygonF,
    QContextMenuEvent,
)

from gomoku.core.coords import BOARD_SIZE, Cell, Rect
from gomoku.core.controller import InputController
from gomoku.core.history import Color
from gomoku.core.renderer import GhostOp, MarkerOp, RenderPlan, StoneOp
from gui.helpers import (
    _STONES,
    MIN_BOARD_PX,
    BOARD_WOOD,
    BOARD_WOOD_DARK,
    GRID_LINE,
    STAR_POINTS,
    STONE_FILL,
    STONE_EDGE,
    MARKER_TINTS,
)


class GomokuBoardWidget(QWidget):
    """QPainter board. The stone layer is cleared and replayed from the plan on every paint."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumSize(MIN_BOARD_PX, MIN_BOARD_PX)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMouseTracking(True)

        self.controller: Optional[InputController] = None
        self._plan = RenderPlan()

        # Scaled pixmap cache (invalidated on resize)
        self._cached_sz: int = 0
        self._scaled: Dict[Color, QPixmap] = {}

    def set_plan(self, plan: RenderPlan):
        """Drawing adapter entry point: adopt a new plan and repaint."""
        self._plan = plan
        self.update()

    # ── Geometry ────────────────────────────────────────────

    @property
    def sq_size(self) -> int:
        return min(self.width(), self.height()) // BOARD_SIZE

    @property
    def origin(self) -> QPoint:
        sz = self.sq_size * BOARD_SIZE
        return QPoint((self.width() - sz) // 2, (self.height() - sz) // 2)

    def viewport(self) -> Rect:
        """Board area in widget pixels, as the coordinate mapper expects it."""
        o, side = self.origin, max(1, self.sq_size * BOARD_SIZE)
        return Rect(o.x(), o.y(), side, side)

    def _center(self, cell: Cell) -> QPointF:
        o, sz = self.origin, self.sq_size
        return QPointF(o.x() + (cell.column - 0.5) * sz, o.y() + (cell.row - 0.5) * sz)

    def _ensure_cache(self):
        sz = int(self.sq_size * 0.94)
        if sz != self._cached_sz and sz > 0:
            self._cached_sz = sz
            self._scaled = {
                k: v.scaled(sz, sz, Qt.KeepAspectRatio, Qt.SmoothTransformation)
                for k, v in _STONES.items()
            }

    # ── Painting ────────────────────────────────────────────

    def paintEvent(self, event: QPaintEvent):
        self._ensure_cache()
        pr = QPainter(self)
        pr.setRenderHint(QPainter.Antialiasing)
        pr.setRenderHint(QPainter.SmoothPixmapTransform)
        self._paint_board(pr)
        for op in self._plan.ops:
            if isinstance(op, StoneOp):
                self._paint_stone(pr, op.cell, op.color)
            elif isinstance(op, MarkerOp):
                self._paint_marker(pr, op)
            elif isinstance(op, GhostOp) and op.opacity > 0:
                pr.setOpacity(op.opacity)
                self._paint_stone(pr, op.cell, op.color)
                pr.setOpacity(1.0)
        pr.end()

    def _paint_board(self, pr: QPainter):
        """Wood background, grid through cell centers, star points."""
        o, sz = self.origin, self.sq_size
        side = sz * BOARD_SIZE

        grad = QLinearGradient(o.x(), o.y(), o.x() + side, o.y() + side)
        grad.setColorAt(0.0, BOARD_WOOD)
        grad.setColorAt(1.0, BOARD_WOOD_DARK)
        pr.setPen(Qt.NoPen)
        pr.setBrush(QBrush(grad))
        pr.drawRoundedRect(o.x(), o.y(), side, side, 4, 4)

        pr.setPen(QPen(GRID_LINE, 1))
        first, last = o.x() + sz // 2, o.x() + sz // 2 + (BOARD_SIZE - 1) * sz
        top, bottom = o.y() + sz // 2, o.y() + sz // 2 + (BOARD_SIZE - 1) * sz
        for i in range(BOARD_SIZE):
            x = o.x() + sz // 2 + i * sz
            y = o.y() + sz // 2 + i * sz
            pr.drawLine(x, top, x, bottom)
            pr.drawLine(first, y, last, y)

        pr.setPen(Qt.NoPen)
        pr.setBrush(QBrush(GRID_LINE))
        for c, r in STAR_POINTS:
            pr.drawEllipse(self._center(Cell(c + 1, r + 1)), sz * 0.1, sz * 0.1)

    def _paint_stone(self, pr: QPainter, cell: Cell, color: Color):
        center = self._center(cell)
        pix = self._scaled.get(color)
        if pix:
            pr.drawPixmap(
                QPoint(int(center.x() - pix.width() / 2), int(center.y() - pix.height() / 2)),
                pix,
            )
            return
        r = self.sq_size * 0.47
        pr.setPen(QPen(STONE_EDGE[color], 1))
        pr.setBrush(QBrush(STONE_FILL[color]))
        pr.drawEllipse(center, r, r)

    def _paint_marker(self, pr: QPainter, op: MarkerOp):
        """Half-square triangle over the last stone, tinted against its fill."""
        c, h = self._center(op.cell), self.sq_size * 0.18
        tri = QPolygonF(
            [
                QPointF(c.x() - h, c.y() - h),
                QPointF(c.x() - h, c.y() + h),
                QPointF(c.x() + h, c.y() + h),
            ]
        )
        pr.setPen(Qt.NoPen)
        pr.setBrush(QBrush(MARKER_TINTS[op.tint]))
        pr.drawPolygon(tri)

    # ── Mouse events ────────────────────────────────────────

    def mousePressEvent(self, ev: QMouseEvent):
        if self.controller is None:
            return
        pos = ev.position()
        if ev.button() == Qt.LeftButton:
            self.controller.primary_click(pos.x(), pos.y(), self.viewport())
        elif ev.button() == Qt.RightButton:
            self.controller.secondary_click()

    def contextMenuEvent(self, ev: QContextMenuEvent):
        # right click is undo; no native menu
        ev.accept()

    def mouseMoveEvent(self, ev: QMouseEvent):
        if self.controller is not None:
            pos = ev.position()
            self.controller.pointer_move(pos.x(), pos.y(), self.viewport())

    def leaveEvent(self, ev):
        if self.controller is not None:
            self.controller.pointer_leave()
