"""Gomoku desktop window: board tab plus a Game menu for step, undo and restart."""

import logging
import random
import sys

from PySide6.QtWidgets import QApplication, QMainWindow
from PySide6.QtGui import QAction, QKeySequence

from gomoku.config import CONFIG, configure_logging
from gomoku.core.gateway import LocalSession, random_picker
from gui.helpers import QSS, load_stone_pixmaps
from gui.widgets import GameTab

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(CONFIG.ui.app_name)
        self.resize(980, 720)

        rng = random.Random(CONFIG.gateway.seed)
        self.tab = GameTab(LocalSession(random_picker(rng)))
        self.tab.title_changed.connect(self.setWindowTitle)
        self.setCentralWidget(self.tab)
        self._build_menu()

    def _build_menu(self):
        menu = self.menuBar().addMenu("&Game")
        for text, shortcut, slot in (
            ("&Step", "Space", self.tab.step),
            ("&Undo", QKeySequence.Undo, self.tab.undo),
            ("&Restart", "Ctrl+N", self.tab.restart),
        ):
            act = QAction(text, self)
            act.setShortcut(QKeySequence(shortcut))
            act.triggered.connect(slot)
            menu.addAction(act)
        menu.addSeparator()
        quit_act = QAction("&Quit", self)
        quit_act.setShortcut(QKeySequence.Quit)
        quit_act.triggered.connect(self.close)
        menu.addAction(quit_act)

    def closeEvent(self, ev):
        self.tab.dispose()
        super().closeEvent(ev)


def main() -> int:
    configure_logging()
    app = QApplication(sys.argv)
    app.setStyleSheet(QSS)
    load_stone_pixmaps()
    win = MainWindow()
    win.show()
    logger.info("%s started", CONFIG.ui.app_name)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
