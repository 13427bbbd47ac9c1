"""Widget package — re-exports all GUI widgets for convenient importing."""

from gui.widgets.board import GomokuBoardWidget
from gui.widgets.game_tab import GameTab

__all__ = [
    "GomokuBoardWidget",
    "GameTab",
]
