from __future__ import annotations

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication

import sys
import os

import pyqtgraph as pg

ORG_ID = "beliefgraph"
APP_ID = "beliefgraph"

VISIBLE_APP_NAME = "BeliefGraph"


def create_app(argv: list[str] | None = None) -> QApplication:
    """Create and configure the QApplication instance (or reuse the running one)."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv if argv is None else argv)

    app.setApplicationDisplayName(VISIBLE_APP_NAME)

    pg.setConfigOptions(antialias=True, foreground="#cbd5e1")

    return app
