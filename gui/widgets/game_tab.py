"""GameTab — one game session: board, status panel and Step / Undo / Restart actions."""

from typing import Optional

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QFrame,
)
from PySide6.QtCore import Qt, QTimer, Signal

from gomoku.config import CONFIG
from gomoku.core.controller import InputController
from gomoku.core.errors import GomokuError
from gomoku.core.gateway import EngineGateway, EngineWorker, LocalSession
from gomoku.core.history import Color, MoveHistory
from gomoku.core.renderer import BoardRenderer, RenderPlan
from gui.helpers import TXT_BRIGHT, TXT_DIM, TXT_ERROR
from gui.widgets.board import GomokuBoardWidget

_SIDE_NAMES = {Color.FIRST: "Black", Color.SECOND: "White"}


class GameTab(QWidget):
    """Wires the board widget to an InputController and polls engine responses."""

    title_changed = Signal(str)

    def __init__(self, gateway: Optional[EngineGateway] = None, parent=None):
        super().__init__(parent)
        self.history = MoveHistory()
        self.renderer = BoardRenderer()
        self.worker = EngineWorker(gateway or LocalSession())
        self.worker.start()

        self._build_ui()

        self.controller = InputController(
            self.history,
            self.renderer,
            self.worker,
            draw=self._draw,
            on_error=self._show_error,
        )
        self.bw.controller = self.controller

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._poll)
        self._timer.start(CONFIG.ui.poll_interval_ms)

        self.controller.redraw()
        self.controller.start()

    # ── UI construction ─────────────────────────────────────

    def _build_ui(self):
        root = QHBoxLayout(self)
        root.setContentsMargins(6, 6, 6, 4)
        root.setSpacing(6)

        self.bw = GomokuBoardWidget()
        root.addWidget(self.bw, stretch=3)

        panel = QFrame()
        panel.setObjectName("panel")
        pl = QVBoxLayout(panel)
        pl.setContentsMargins(16, 14, 16, 14)
        pl.setSpacing(8)

        title = QLabel(CONFIG.ui.app_name)
        title.setStyleSheet(f"color:{TXT_BRIGHT.name()};font-size:16px;font-weight:bold;")
        pl.addWidget(title)

        self.lbl_status = QLabel("Black to Move")
        self.lbl_status.setStyleSheet(f"color:{TXT_BRIGHT.name()};font-size:14px;font-weight:bold;")
        pl.addWidget(self.lbl_status)

        self.lbl_moves = QLabel("Move 1")
        self.lbl_moves.setStyleSheet(f"color:{TXT_DIM.name()};font-size:12px;")
        pl.addWidget(self.lbl_moves)

        self.lbl_error = QLabel("")
        self.lbl_error.setWordWrap(True)
        self.lbl_error.setStyleSheet(f"color:{TXT_ERROR.name()};font-size:12px;")
        self.lbl_error.hide()
        pl.addWidget(self.lbl_error)
        pl.addStretch()

        row = QHBoxLayout()
        row.setSpacing(6)
        for text, slot in (("↩  Undo", self.undo), ("▶  Step", self.step)):
            btn = QPushButton(text)
            btn.setObjectName("nav_btn")
            btn.setFixedHeight(36)
            btn.clicked.connect(slot)
            row.addWidget(btn, stretch=1)
        pl.addLayout(row)

        restart = QPushButton("⟲  Restart")
        restart.setFixedHeight(36)
        restart.clicked.connect(self.restart)
        pl.addWidget(restart)

        panel.setMinimumWidth(220)
        panel.setMaximumWidth(320)
        root.addWidget(panel, stretch=1)

    # ── Actions (external triggers) ─────────────────────────

    def step(self):
        self.controller.step()

    def undo(self):
        self.controller.secondary_click()

    def restart(self):
        self.controller.restart()

    # ── Controller callbacks ────────────────────────────────

    def _poll(self):
        if self.controller.pending:
            self.controller.poll()

    def _draw(self, plan: RenderPlan):
        self.bw.set_plan(plan)
        n = len(self.history)
        self.lbl_status.setText(f"{_SIDE_NAMES[self.history.next_color()]} to Move")
        self.lbl_moves.setText(f"Move {n + 1}")
        if self.controller.last_error is None:
            self.lbl_error.hide()
        self.title_changed.emit(f"{CONFIG.ui.app_name} · Move {n + 1}")

    def _show_error(self, exc: GomokuError):
        self.lbl_error.setText(str(exc))
        self.lbl_error.show()

    def dispose(self):
        """Stop polling and drop pending engine work (called on close)."""
        self._timer.stop()
        self.worker.shutdown()
