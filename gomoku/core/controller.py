"""Pointer gestures → engine requests → history replace → render plan → draw."""

import logging
from concurrent.futures import Future, wait
from typing import Callable, List, Optional, Tuple

from gomoku.config import CONFIG
from gomoku.core.coords import Cell, Rect, cell_to_request, is_on_board, pixels_to_cell
from gomoku.core.errors import CellOutOfRange, EngineError, GomokuError
from gomoku.core.gateway import EngineWorker
from gomoku.core.history import MoveHistory, validate_snapshot
from gomoku.core.renderer import BoardRenderer, CursorPreview, RenderPlan

logger = logging.getLogger(__name__)


class InputController:
    """Drives engine requests from UI gestures and redraws on every accepted snapshot.

    Requests run on ``worker``; their results are applied by ``poll()`` on the
    caller's loop, so history, cursor and ``draw`` are only touched from there.

    Overlapping requests: each one gets a sequence number. An
    ``EngineWorker`` runs them in that order, so the last action wins. For
    workers that finish out of order, ``discard_stale`` drops a response (or
    failure) older than the last applied one; without it finished responses
    apply as they are polled.
    """

    def __init__(
        self,
        history: MoveHistory,
        renderer: BoardRenderer,
        worker: EngineWorker,
        draw: Optional[Callable[[RenderPlan], None]] = None,
        on_error: Optional[Callable[[GomokuError], None]] = None,
        hover_opacity: Optional[float] = None,
        discard_stale: Optional[bool] = None,
    ):
        self.history = history
        self.renderer = renderer
        self.worker = worker
        self.draw = draw
        self.on_error = on_error
        self.hover_opacity = (
            CONFIG.ui.hover_opacity if hover_opacity is None else hover_opacity
        )
        self.discard_stale = (
            CONFIG.ui.discard_stale_responses if discard_stale is None else discard_stale
        )
        self.last_error: Optional[GomokuError] = None

        self._cursor_cell: Optional[Cell] = None
        self._cursor_opacity: float = 0.0
        self._pending: List[Tuple[int, str, Future]] = []
        self._seq = 0
        self._applied_seq = 0

    # ── State ───────────────────────────────────────────────

    @property
    def cursor(self) -> CursorPreview:
        return CursorPreview(self._cursor_cell, self._cursor_opacity, self.history.next_color())

    @property
    def pending(self) -> int:
        return len(self._pending)

    def plan(self) -> RenderPlan:
        return self.renderer.plan(self.history, self.cursor)

    def redraw(self) -> RenderPlan:
        plan = self.plan()
        if self.draw:
            self.draw(plan)
        return plan

    # ── Gestures ────────────────────────────────────────────

    def start(self) -> Optional[Future]:
        return self._request("init_game")

    def primary_click(self, x: float, y: float, rect: Rect) -> Optional[Future]:
        return self.place(pixels_to_cell(x, y, rect))

    def place(self, cell: Cell) -> Optional[Future]:
        """Request a stone on a display cell; off-board cells never reach the engine."""
        if not is_on_board(cell):
            self._report(CellOutOfRange(cell))
            return None
        return self._request("click", *cell_to_request(cell))

    def secondary_click(self) -> Optional[Future]:
        return self._request("undo")

    def step(self) -> Optional[Future]:
        return self._request("step")

    def restart(self) -> Optional[Future]:
        return self._request("restart")

    def pointer_move(self, x: float, y: float, rect: Rect) -> RenderPlan:
        cell = pixels_to_cell(x, y, rect)
        if is_on_board(cell):
            self._cursor_cell = cell
            self._cursor_opacity = self.hover_opacity
        else:
            self._cursor_opacity = 0.0
        return self.redraw()

    def pointer_leave(self) -> RenderPlan:
        self._cursor_opacity = 0.0
        return self.redraw()

    # ── Responses ───────────────────────────────────────────

    def poll(self) -> int:
        """Apply every finished response. Returns how many replaced the history."""
        done, waiting = [], []
        for item in self._pending:
            (done if item[2].done() else waiting).append(item)
        # callbacks below may issue new requests
        self._pending = waiting
        return sum(1 for seq, op, fut in done if self._resolve(seq, op, fut))

    def drain(self, timeout: Optional[float] = None) -> int:
        """Block until in-flight requests finish (console use), then poll."""
        if self._pending:
            wait([fut for _, _, fut in self._pending], timeout=timeout)
        return self.poll()

    def _request(self, op: str, *args) -> Optional[Future]:
        self._seq += 1
        logger.debug("Request #%d %s%s", self._seq, op, args)
        try:
            fut = self.worker.submit(op, *args)
        except GomokuError as exc:
            self._report(exc)
            return None
        self._pending.append((self._seq, op, fut))
        return fut

    def _resolve(self, seq: int, op: str, fut: Future) -> bool:
        if fut.cancelled():
            return False
        if self.discard_stale and seq < self._applied_seq:
            logger.warning("Dropping stale %s response #%d (applied #%d)", op, seq, self._applied_seq)
            return False
        try:
            snapshot = validate_snapshot(fut.result())
        except GomokuError as exc:
            self._report(exc)
            return False
        except Exception as exc:
            err = EngineError(f"{op} failed: {exc}")
            err.__cause__ = exc
            self._report(err)
            return False

        self._applied_seq = max(self._applied_seq, seq)
        self.history.replace(snapshot)
        self.last_error = None
        logger.debug("Applied #%d %s: %d moves", seq, op, len(snapshot))
        self.redraw()
        return True

    def _report(self, exc: GomokuError):
        self.last_error = exc
        logger.warning("%s", exc)
        if self.on_error:
            self.on_error(exc)
