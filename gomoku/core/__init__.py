"""Core board model: coordinates, move history, render plans, controller, engine boundary."""

from .coords import BOARD_SIZE, Cell, Rect, pixels_to_cell
from .history import Color, MarkerTint, MoveHistory
from .renderer import BoardRenderer, CursorPreview, RenderPlan
from .gateway import EngineGateway, EngineWorker, LocalSession
from .controller import InputController
