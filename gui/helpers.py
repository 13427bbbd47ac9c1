"""Shared helpers for the Gomoku GUI — palette, stone assets, stylesheet."""

import os
from typing import Dict

from PySide6.QtGui import QColor, QPixmap

from gomoku.config import CONFIG
from gomoku.core.history import Color, MarkerTint

# ── Board colors (kaya wood) ────────────────────────────────
BOARD_WOOD = QColor("#DCB35C")
BOARD_WOOD_DARK = QColor("#C49A45")
GRID_LINE = QColor("#3a2a1a")
MIN_BOARD_PX = CONFIG.ui.min_board_px

# Star points (0-based column, row)
STAR_POINTS = [(3, 3), (3, 11), (7, 7), (11, 3), (11, 11)]

# ── Stone fallback colors (used when an asset is missing) ───
STONE_FILL = {
    Color.FIRST: QColor("#111111"),
    Color.SECOND: QColor("#f2f2f2"),
}
STONE_EDGE = {
    Color.FIRST: QColor("#000000"),
    Color.SECOND: QColor("#9b9892"),
}

# ── Last-move marker tints ──────────────────────────────────
MARKER_TINTS = {
    MarkerTint.LIGHT: QColor("#ffffff"),
    MarkerTint.DARK: QColor("#000000"),
}

# ── Text colors ─────────────────────────────────────────────
TXT_BRIGHT = QColor("#ffffff")
TXT_DIM = QColor("#9b9892")
TXT_ERROR = QColor("#e07a5f")

# ── QSS Stylesheet ──────────────────────────────────────────
QSS = """
QMainWindow { background: #262522; }

QPushButton {
    background: qlineargradient(x1:0,y1:0,x2:0,y2:1,
        stop:0 #8ece52, stop:1 #73a83e);
    color: #ffffff; border: none;
    padding: 10px 22px; border-radius: 6px;
    font-size: 13px; font-weight: bold;
}
QPushButton:hover {
    background: qlineargradient(x1:0,y1:0,x2:0,y2:1,
        stop:0 #9ddb62, stop:1 #81b64c);
}
QPushButton:pressed { background: #6a9a3c; }

QPushButton#nav_btn {
    background: #3c3a36; color: #c3c1bf;
    padding: 7px 14px; border-radius: 5px;
    font-size: 14px; border: 1px solid #48463f;
}
QPushButton#nav_btn:hover { background: #48463f; border-color: #555350; }
QPushButton#nav_btn:pressed { background: #302e2b; }

QLabel { color: #c3c1bf; }

QFrame#panel {
    background: #302e2b; border-radius: 10px;
    border: 1px solid #3c3a36;
}

QMenuBar {
    background: #1b1a18; color: #c3c1bf;
    padding: 3px; font-size: 13px;
    border-bottom: 1px solid #302e2b;
}
QMenuBar::item { padding: 6px 14px; border-radius: 4px; }
QMenuBar::item:selected { background: #3c3a36; }
QMenu {
    background: #302e2b; color: #c3c1bf;
    border: 1px solid #48463f; border-radius: 6px; padding: 4px;
}
QMenu::item { padding: 8px 24px; border-radius: 4px; }
QMenu::item:selected { background: #81b64c; color: white; }
QMenu::separator { height: 1px; background: #48463f; margin: 4px 8px; }
"""

# ── Stone assets ────────────────────────────────────────────
ASSETS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets")

STONE_ASSETS = {
    Color.FIRST: "black_stone.svg",
    Color.SECOND: "white_stone.svg",
}


def stone_asset_path(color: Color) -> str:
    """Resolve a stone color identifier to its image file."""
    return os.path.join(ASSETS_DIR, STONE_ASSETS[Color(color)])


# Loaded after QApplication init
_STONES: Dict[Color, QPixmap] = {}


def load_stone_pixmaps():
    """Load stone images from assets. Must be called after QApplication is created."""
    for color in STONE_ASSETS:
        path = stone_asset_path(color)
        if os.path.exists(path):
            pix = QPixmap(path)
            if not pix.isNull():
                _STONES[color] = pix
