#!/usr/bin/env python3
"""
Driftboard - Main Entry Point

This is the main entry point for the Driftboard application.
Run with: python -m driftboard.main
"""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt

from . import __version__

LOG_LEVEL_ENV = "DRIFTBOARD_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level_name: str = None) -> int:
    """
    Configure the root logger.

    Args:
        level_name: Level name such as "DEBUG"; defaults to $DRIFTBOARD_LOG_LEVEL or INFO

    Returns:
        The numeric level in effect
    """
    name = (level_name or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level


def main():
    """Main entry point for Driftboard application."""
    configure_logging()
    try:
        # Enable high DPI scaling
        QApplication.setHighDpiScaleFactorRoundingPolicy(
            Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
        )

        # Create application
        app = QApplication(sys.argv)
        app.setApplicationName("Driftboard")
        app.setApplicationVersion(__version__)
        app.setOrganizationName("Driftboard")

        # Import here so the window (and its exporters) load after QApplication exists
        from .ui.mainwindow import MainWindow

        # Create and show main window
        window = MainWindow()
        window.show()

        # Run event loop
        return app.exec()
    except Exception:
        logger.exception("Fatal error")
        return 1


if __name__ == "__main__":
    sys.exit(main())
