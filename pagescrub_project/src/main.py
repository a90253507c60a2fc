#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PageScrub - PDF viewer with a page scrubber

This is the main entry point for the PageScrub application. An optional
PDF path on the command line is opened on start-up.
"""

import logging
import sys
from pathlib import Path

from .utils.logging_utils import setup_logging


def main() -> int:
    """
    Main entry point for the PageScrub application.
    Sets up logging, creates the Qt application and shows the viewer.

    Returns:
        int: Exit code (0 for success)
    """
    log_file_path = Path.home() / ".pagescrub" / "pagescrub.log"
    setup_logging(log_file=str(log_file_path))
    logger = logging.getLogger(__name__)
    logger.info("Starting PageScrub")

    try:
        # Import Qt modules here so logging is configured first
        from PySide6.QtWidgets import QApplication

        from .ui.main_window import MainWindow

        app = QApplication(sys.argv)
        app.setApplicationName("PageScrub")

        window = MainWindow()
        window.show()
        if len(sys.argv) > 1:
            window.open_pdf(sys.argv[1])

        exit_code = app.exec()
        logger.info("Application exited with code %s", exit_code)
        return exit_code

    except Exception as e:
        logger.exception("Fatal error in main application: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
