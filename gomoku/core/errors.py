"""Exceptions raised by the board model and the engine boundary."""


class GomokuError(Exception):
    """Base class for recoverable front-end errors."""


class EngineError(GomokuError):
    """An engine request failed or was refused."""


class SnapshotError(GomokuError, ValueError):
    """A move-history snapshot is malformed (bad value, duplicate, too long)."""


class CellOutOfRange(GomokuError, ValueError):
    """A cell lies outside the 15x15 board."""

    def __init__(self, cell):
        super().__init__(f"cell {tuple(cell)} is outside the board")
        self.cell = cell
