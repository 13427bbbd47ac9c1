"""Terminal front end: ASCII board, moves typed as '<file> <row>' (e.g. 'h 7')."""

from typing import Callable, Optional

from gomoku.config import CONFIG, configure_logging
from gomoku.core.controller import InputController
from gomoku.core.coords import parse_cell_label
from gomoku.core.gateway import EngineGateway, EngineWorker, LocalSession
from gomoku.core.history import MoveHistory
from gomoku.core.renderer import BoardRenderer, render_text

HELP = "commands: '<file> <row>' (e.g. 'h 7'), undo, step, restart, quit"


def run(
    gateway: Optional[EngineGateway] = None,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    timeout: Optional[float] = 30.0,
) -> MoveHistory:
    """Play until 'quit' or end of input. Returns the final history."""
    history = MoveHistory()
    worker = EngineWorker(gateway or LocalSession())
    worker.start()
    controller = InputController(
        history,
        BoardRenderer(),
        worker,
        draw=lambda plan: write(render_text(plan)),
        on_error=lambda exc: write(f"error: {exc}"),
    )
    actions = {
        "undo": controller.secondary_click,
        "step": controller.step,
        "restart": controller.restart,
    }
    try:
        controller.start()
        controller.drain(timeout)
        write(HELP)
        while True:
            try:
                line = read("enter a move (e.g. \"h 7\"): ").strip().lower()
            except EOFError:
                break
            if line in ("quit", "q", "exit"):
                break
            if not line:
                controller.redraw()
                continue
            if line in actions:
                actions[line]()
            else:
                try:
                    cell = parse_cell_label(line)
                except ValueError as e:
                    write(f"error input, re enter: {e}")
                    continue
                controller.place(cell)
            controller.drain(timeout)
    finally:
        worker.shutdown()
    return history


def main():
    configure_logging(CONFIG.log_level)
    run()


if __name__ == "__main__":
    main()
