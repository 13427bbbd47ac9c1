"""
Integration test suite for the Gomoku board front end.

Tests components working together end-to-end:
- Controller + engine worker + local session (click, undo, step, restart)
- Cursor preview on pointer move / leave
- Recoverable errors (failed calls, malformed snapshots, off-board clicks)
- Overlapping requests (stale-response policy)
- FastAPI command API
- Terminal front end
- Config loading
- GUI helpers (stone assets, stylesheet, panel colors)
"""

import logging
import os
import threading
from concurrent.futures import Future

import pytest

from gomoku.config import Config, configure_logging
from gomoku.core.controller import InputController
from gomoku.core.coords import Cell, Rect
from gomoku.core.errors import CellOutOfRange, EngineError, SnapshotError
from gomoku.core.gateway import EngineWorker, LocalSession
from gomoku.core.history import Color, MarkerTint, MoveHistory
from gomoku.core.renderer import BoardRenderer, GhostOp, MarkerOp, StoneOp

RECT = Rect(0, 0, 450, 450)  # 30 px cells


def _px(column: int, row: int):
    """Pixel at the center of a 1-based display cell."""
    return (column - 0.5) * 30, (row - 0.5) * 30


class ManualWorker:
    """Worker whose futures are resolved by the test, in any order."""

    def __init__(self):
        self.calls = []

    def submit(self, op, *args):
        fut = Future()
        self.calls.append((op, args, fut))
        return fut


class SlowClickSession(LocalSession):
    """Click stalls until an undo has run, or a short timeout passes."""

    def __init__(self):
        super().__init__()
        self.undone = threading.Event()
        self.order = []

    def click(self, x, y):
        self.undone.wait(0.3)
        self.order.append("click")
        return super().click(x, y)

    def undo(self):
        self.order.append("undo")
        result = super().undo()
        self.undone.set()
        return result


def _controller(worker, **kw):
    draws, errors = [], []
    ctrl = InputController(
        MoveHistory(),
        BoardRenderer(),
        worker,
        draw=draws.append,
        on_error=errors.append,
        hover_opacity=0.5,
        **kw,
    )
    return ctrl, draws, errors


@pytest.fixture
def live():
    """Controller driving a real worker over a LocalSession."""
    session = LocalSession(lambda moves: 0 if 0 not in moves else 224)
    worker = EngineWorker(session)
    worker.start()
    ctrl, draws, errors = _controller(worker, discard_stale=True)
    ctrl.start()
    ctrl.drain(5)
    yield ctrl, draws, errors
    worker.shutdown()


# ════════════════════════════════════════════════════════════════════════════
#  GESTURES → ENGINE → RENDER
# ════════════════════════════════════════════════════════════════════════════


class TestGestureFlow:
    def test_start_draws_empty_board(self, live):
        ctrl, draws, _ = live
        assert len(ctrl.history) == 0
        assert draws and draws[-1].stones == ()

    def test_click_scenario(self, live):
        ctrl, draws, _ = live
        ctrl.primary_click(*_px(8, 8), RECT)
        ctrl.drain(5)
        assert ctrl.history.moves == (112,)
        plan = draws[-1]
        assert plan.stones == (StoneOp(Cell(8, 8), Color.FIRST),)
        assert plan.marker == MarkerOp(Cell(8, 8), MarkerTint.LIGHT)

    def test_undo_scenario(self, live):
        ctrl, draws, _ = live
        ctrl.place(Cell(8, 8))
        ctrl.drain(5)
        ctrl.place(Cell(9, 8))
        ctrl.drain(5)
        assert ctrl.history.moves == (112, 113)
        ctrl.secondary_click()
        ctrl.drain(5)
        plan = draws[-1]
        assert ctrl.history.moves == (112,)
        assert len(plan.stones) == 1
        assert plan.marker.tint == MarkerTint.LIGHT

    def test_undo_on_empty_history(self, live):
        ctrl, draws, _ = live
        ctrl.secondary_click()
        ctrl.drain(5)
        assert ctrl.history.moves == ()
        assert draws[-1].stones == ()
        assert draws[-1].marker is None

    def test_occupied_click_keeps_history(self, live):
        ctrl, _, errors = live
        ctrl.place(Cell(8, 8))
        ctrl.drain(5)
        ctrl.place(Cell(8, 8))
        ctrl.drain(5)
        assert ctrl.history.moves == (112,)
        assert errors == []

    def test_step_and_restart(self, live):
        ctrl, draws, _ = live
        ctrl.step()
        ctrl.drain(5)
        assert ctrl.history.moves == (0,)
        ctrl.step()
        ctrl.drain(5)
        assert ctrl.history.moves == (0, 224)
        assert draws[-1].marker.tint == MarkerTint.DARK
        ctrl.restart()
        ctrl.drain(5)
        assert ctrl.history.moves == ()

    def test_stone_ops_follow_every_replace(self, live):
        ctrl, draws, _ = live
        for cell in (Cell(1, 1), Cell(2, 2), Cell(3, 3)):
            ctrl.place(cell)
            ctrl.drain(5)
            assert len(draws[-1].stones) == len(ctrl.history)


# ════════════════════════════════════════════════════════════════════════════
#  CURSOR PREVIEW
# ════════════════════════════════════════════════════════════════════════════


class TestCursorPreview:
    def test_move_shows_ghost(self):
        worker = ManualWorker()
        ctrl, draws, _ = _controller(worker)
        plan = ctrl.pointer_move(*_px(4, 5), RECT)
        assert ctrl.cursor.opacity == 0.5
        assert ctrl.cursor.cell == Cell(4, 5)
        assert plan.ghost == GhostOp(Cell(4, 5), Color.FIRST, 0.5)
        assert draws[-1] == plan
        assert worker.calls == []

    def test_leave_hides_ghost(self):
        ctrl, _, _ = _controller(ManualWorker())
        ctrl.pointer_move(*_px(4, 5), RECT)
        plan = ctrl.pointer_leave()
        assert ctrl.cursor.opacity == 0
        assert plan.ghost.opacity == 0
        assert ctrl.cursor.cell == Cell(4, 5)

    def test_move_outside_board_hides_ghost(self):
        ctrl, _, _ = _controller(ManualWorker())
        ctrl.pointer_move(*_px(4, 5), RECT)
        ctrl.pointer_move(0, 0, RECT)
        assert ctrl.cursor.opacity == 0
        ctrl.pointer_move(500, 10, RECT)
        assert ctrl.cursor.opacity == 0

    def test_ghost_color_is_next_move(self):
        worker = ManualWorker()
        ctrl, _, _ = _controller(worker)
        ctrl.place(Cell(8, 8))
        worker.calls[-1][2].set_result([112])
        ctrl.poll()
        plan = ctrl.pointer_move(*_px(1, 1), RECT)
        assert plan.ghost.color == Color.SECOND

    def test_no_ghost_before_first_move(self):
        ctrl, _, _ = _controller(ManualWorker())
        assert ctrl.plan().ghost is None


# ════════════════════════════════════════════════════════════════════════════
#  ERROR HANDLING
# ════════════════════════════════════════════════════════════════════════════


class TestErrorHandling:
    def test_off_board_click_rejected_locally(self):
        worker = ManualWorker()
        ctrl, _, errors = _controller(worker)
        assert ctrl.primary_click(0, 0, RECT) is None
        assert ctrl.primary_click(460, 20, RECT) is None
        assert worker.calls == []
        assert len(errors) == 2
        assert all(isinstance(e, CellOutOfRange) for e in errors)
        assert isinstance(ctrl.last_error, CellOutOfRange)

    def test_click_request_coordinates(self):
        worker = ManualWorker()
        ctrl, _, _ = _controller(worker)
        ctrl.primary_click(*_px(8, 8), RECT)
        op, args, _ = worker.calls[-1]
        assert (op, args) == ("click", (7, 7))

    def test_failed_call_keeps_history(self):
        worker = ManualWorker()
        ctrl, draws, errors = _controller(worker)
        ctrl.history.replace([112])
        ctrl.secondary_click()
        worker.calls[-1][2].set_exception(RuntimeError("engine crashed"))
        assert ctrl.poll() == 0
        assert ctrl.history.moves == (112,)
        assert isinstance(ctrl.last_error, EngineError)
        assert "engine crashed" in str(ctrl.last_error)
        assert errors == [ctrl.last_error]
        assert draws == []

    def test_engine_error_passed_through(self):
        worker = ManualWorker()
        ctrl, _, _ = _controller(worker)
        err = EngineError("board is full")
        ctrl.step()
        worker.calls[-1][2].set_exception(err)
        ctrl.poll()
        assert ctrl.last_error is err

    def test_malformed_snapshot_rejected(self):
        worker = ManualWorker()
        ctrl, _, errors = _controller(worker)
        ctrl.history.replace([112])
        ctrl.step()
        worker.calls[-1][2].set_result([112, 112])
        assert ctrl.poll() == 0
        assert ctrl.history.moves == (112,)
        assert isinstance(errors[-1], SnapshotError)

    def test_success_clears_last_error(self):
        worker = ManualWorker()
        ctrl, _, _ = _controller(worker)
        ctrl.primary_click(0, 0, RECT)
        assert ctrl.last_error is not None
        ctrl.secondary_click()
        worker.calls[-1][2].set_result([])
        ctrl.poll()
        assert ctrl.last_error is None

    def test_worker_not_running(self):
        ctrl, _, errors = _controller(EngineWorker(LocalSession()))
        assert ctrl.step() is None
        assert isinstance(errors[-1], EngineError)
        assert ctrl.pending == 0

    def test_cancelled_request_is_ignored(self):
        worker = ManualWorker()
        ctrl, _, errors = _controller(worker)
        ctrl.step()
        worker.calls[-1][2].cancel()
        assert ctrl.poll() == 0
        assert errors == []
        assert ctrl.pending == 0


# ════════════════════════════════════════════════════════════════════════════
#  OVERLAPPING REQUESTS
# ════════════════════════════════════════════════════════════════════════════


class TestOverlappingRequests:
    def test_pending_until_resolved(self):
        worker = ManualWorker()
        ctrl, _, _ = _controller(worker)
        ctrl.place(Cell(8, 8))
        ctrl.secondary_click()
        assert ctrl.pending == 2
        assert ctrl.poll() == 0
        assert ctrl.pending == 2

    def test_in_order_responses_all_apply(self):
        worker = ManualWorker()
        ctrl, _, _ = _controller(worker, discard_stale=True)
        ctrl.place(Cell(8, 8))
        ctrl.place(Cell(9, 8))
        worker.calls[0][2].set_result([112])
        worker.calls[1][2].set_result([112, 113])
        assert ctrl.poll() == 2
        assert ctrl.history.moves == (112, 113)

    def test_stale_response_dropped(self):
        worker = ManualWorker()
        ctrl, _, _ = _controller(worker, discard_stale=True)
        ctrl.place(Cell(8, 8))
        ctrl.restart()
        worker.calls[1][2].set_result([])
        assert ctrl.poll() == 1
        worker.calls[0][2].set_result([112])
        assert ctrl.poll() == 0
        assert ctrl.history.moves == ()

    def test_last_response_wins_when_not_discarding(self):
        worker = ManualWorker()
        ctrl, _, _ = _controller(worker, discard_stale=False)
        ctrl.place(Cell(8, 8))
        ctrl.restart()
        worker.calls[1][2].set_result([])
        ctrl.poll()
        worker.calls[0][2].set_result([112])
        assert ctrl.poll() == 1
        assert ctrl.history.moves == (112,)

    def test_request_issued_from_draw_callback_is_kept(self):
        worker = ManualWorker()
        issued = []

        def draw(plan):
            if not issued:
                issued.append(ctrl.step())

        ctrl = InputController(MoveHistory(), BoardRenderer(), worker, draw=draw)
        ctrl.place(Cell(8, 8))
        worker.calls[0][2].set_result([112])
        ctrl.poll()
        assert ctrl.pending == 1
        assert worker.calls[-1][0] == "step"

    def test_stale_failure_not_reported(self):
        worker = ManualWorker()
        ctrl, _, errors = _controller(worker, discard_stale=True)
        ctrl.place(Cell(8, 8))
        ctrl.restart()
        worker.calls[1][2].set_result([])
        ctrl.poll()
        worker.calls[0][2].set_exception(EngineError("click failed"))
        assert ctrl.poll() == 0
        assert errors == []
        assert ctrl.last_error is None

    @pytest.mark.parametrize("discard_stale", [True, False])
    def test_display_matches_engine_when_click_is_slow(self, discard_stale):
        session = SlowClickSession()
        worker = EngineWorker(session)
        worker.start()
        try:
            ctrl, _, errors = _controller(worker, discard_stale=discard_stale)
            ctrl.place(Cell(8, 8))
            ctrl.secondary_click()
            ctrl.drain(5)
            assert session.order == ["click", "undo"]
            assert list(ctrl.history.moves) == session.snapshot()
            assert errors == []
        finally:
            worker.shutdown()


# ════════════════════════════════════════════════════════════════════════════
#  REST API INTEGRATION
# ════════════════════════════════════════════════════════════════════════════


class TestAPIIntegration:
    """Tests FastAPI command endpoints."""

    @pytest.fixture(autouse=True)
    def setup_client(self, monkeypatch):
        from fastapi.testclient import TestClient
        from interface.api import app, session

        self.client = TestClient(app)
        monkeypatch.setattr(session, "move_picker", lambda moves: 5 if 5 not in moves else 6)
        session.restart()

    def test_history_initially_empty(self):
        r = self.client.get("/history")
        assert r.status_code == 200
        assert r.json() == {"history": []}

    def test_click(self):
        r = self.client.post("/click", json={"x": 7, "y": 7})
        assert r.status_code == 200
        assert r.json()["history"] == [112]

    def test_click_occupied_unchanged(self):
        self.client.post("/click", json={"x": 7, "y": 7})
        r = self.client.post("/click", json={"x": 7, "y": 7})
        assert r.json()["history"] == [112]

    def test_click_out_of_bounds(self):
        r = self.client.post("/click", json={"x": 15, "y": 0})
        assert r.status_code == 400

    def test_click_missing_field(self):
        r = self.client.post("/click", json={"x": 1})
        assert r.status_code == 422

    def test_undo(self):
        self.client.post("/click", json={"x": 7, "y": 7})
        self.client.post("/click", json={"x": 8, "y": 7})
        r = self.client.post("/undo")
        assert r.json()["history"] == [112]

    def test_undo_empty(self):
        r = self.client.post("/undo")
        assert r.status_code == 200
        assert r.json()["history"] == []

    def test_step_and_restart(self):
        assert self.client.post("/step").json()["history"] == [5]
        assert self.client.post("/step").json()["history"] == [5, 6]
        assert self.client.post("/restart").json()["history"] == []
        assert self.client.get("/history").json()["history"] == []

    def test_init_game(self):
        self.client.post("/click", json={"x": 0, "y": 0})
        r = self.client.post("/init_game")
        assert r.json()["history"] == []


# ════════════════════════════════════════════════════════════════════════════
#  TERMINAL FRONT END
# ════════════════════════════════════════════════════════════════════════════


class TestCLI:
    def _run(self, lines, picker=lambda moves: 0):
        from interface.cli import run

        feed = iter(lines)
        out = []

        def read(prompt):
            try:
                return next(feed)
            except StopIteration:
                raise EOFError

        history = run(LocalSession(picker), read=read, write=out.append, timeout=5)
        return history, out

    def test_play_undo_quit(self):
        history, out = self._run(["h 7", "step", "undo", "quit", "a 0"])
        assert history.moves == (112,)
        assert any(" 7 " + "_ " * 7 + "X*" in line for line in out)

    def test_invalid_input_reprompts(self):
        history, out = self._run(["zz", "h 7"])
        assert history.moves == (112,)
        assert any(line.startswith("error input") for line in out)

    def test_restart(self):
        history, _ = self._run(["h 7", "i 7", "restart"])
        assert history.moves == ()

    def test_engine_error_reported(self):
        def picker(moves):
            return 112

        history, out = self._run(["h 7", "step"], picker=picker)
        assert history.moves == (112,)
        assert any(line.startswith("error:") for line in out)


# ════════════════════════════════════════════════════════════════════════════
#  CONFIG
# ════════════════════════════════════════════════════════════════════════════


class TestConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = Config.load_from_toml(str(tmp_path / "nope.toml"))
        assert cfg.ui.hover_opacity == 0.5
        assert cfg.ui.discard_stale_responses is True
        assert cfg.gateway.seed is None

    def test_load_from_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            'log_level = "DEBUG"\n'
            "[ui]\n"
            "discard_stale_responses = false\n"
            "poll_interval_ms = 20\n"
            "unknown_key = 1\n"
            "[gateway]\n"
            "workers = 4\n"
            "seed = 3\n"
        )
        cfg = Config.load_from_toml(str(path))
        assert cfg.log_level == "DEBUG"
        assert cfg.ui.discard_stale_responses is False
        assert cfg.ui.poll_interval_ms == 20
        assert not hasattr(cfg.ui, "unknown_key")
        assert not hasattr(cfg.gateway, "workers")
        assert cfg.gateway.seed == 3

    def test_configure_logging_sets_level(self):
        root = logging.getLogger()
        old = root.level
        try:
            configure_logging("DEBUG")
            assert root.level == logging.DEBUG
            configure_logging("warning")
            assert root.level == logging.WARNING
        finally:
            root.setLevel(old)


# ════════════════════════════════════════════════════════════════════════════
#  GUI HELPERS
# ════════════════════════════════════════════════════════════════════════════


class TestGuiHelpers:
    @pytest.fixture(autouse=True)
    def helpers(self):
        pytest.importorskip("PySide6.QtGui")
        from gui import helpers

        self.helpers = helpers

    def test_every_color_has_a_stone_asset(self):
        for color in Color:
            assert os.path.exists(self.helpers.stone_asset_path(color))

    def test_stone_asset_accepts_identifier_string(self):
        path = self.helpers.stone_asset_path("second-player")
        assert path.endswith("white_stone.svg")

    def test_stylesheet_only_targets_built_widgets(self):
        qss = self.helpers.QSS
        for selector in ("QMainWindow", "QPushButton#nav_btn", "QFrame#panel", "QMenuBar"):
            assert selector in qss
        assert "QStatusBar" not in qss

    def test_panel_text_colors(self):
        assert self.helpers.TXT_ERROR.name() == "#e07a5f"
        assert self.helpers.TXT_DIM.name() == "#9b9892"
