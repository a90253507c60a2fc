#!/usr/bin/env python3
"""Main window for the PageScrub viewer.

A minimal single-page PDF viewer hosting the :class:`PageScrubber`: the
page area shows the current page, the scrubber at the bottom navigates.
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QAction, QKeySequence, QResizeEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from ..core.layout_calculator import is_compact_width
from ..services.page_navigation_service import PageNavigationService
from ..services.settings_service import SettingsService
from .dialogs.go_to_page_dialog import GoToPageDialog
from .widgets.page_scrubber import PageScrubber

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Viewer window: page display on top, page scrubber below."""

    def __init__(self, navigation: Optional[PageNavigationService] = None):
        super().__init__()
        self.setWindowTitle("PageScrub")

        self.settings = SettingsService()
        self.navigation = navigation or PageNavigationService(
            max_cached_pages=self.settings.cache_page_limit(), parent=self,
        )

        self._init_ui()
        self._create_actions()
        self._create_menus()
        self._connect_signals()
        self._sync_scrubber()
        self.statusBar().showMessage("Ready")

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _init_ui(self):
        self.page_label = QLabel("Open a PDF to start (Ctrl+O)", self)
        self.page_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setAlignment(Qt.AlignmentFlag.AlignCenter)
        scroll.setWidget(self.page_label)

        self.scrubber = PageScrubber(self.settings.scrubber_style(self._is_compact()), self)

        central = QWidget(self)
        lay = QVBoxLayout(central)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.setSpacing(0)
        lay.addWidget(scroll, 1)
        lay.addWidget(self.scrubber)
        self.setCentralWidget(central)
        self.resize(1024, 768)

    def _create_actions(self):
        self.open_action = QAction("&Open PDF...", self)
        self.open_action.setShortcut(QKeySequence.StandardKey.Open)
        self.open_action.setStatusTip("Open a PDF document.")
        self.open_action.triggered.connect(self.on_open_pdf)

        self.go_to_action = QAction("&Go to Page...", self)
        self.go_to_action.setShortcut(QKeySequence("Ctrl+G"))
        self.go_to_action.triggered.connect(self.on_show_page_selector)

        self.exit_action = QAction("E&xit", self)
        self.exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        self.exit_action.triggered.connect(self.close)

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("&File")
        file_menu.addAction(self.open_action)
        file_menu.addSeparator()
        file_menu.addAction(self.exit_action)

        nav_menu = self.menuBar().addMenu("&Navigate")
        nav_menu.addAction(self.go_to_action)

    def _connect_signals(self):
        nav = self.navigation
        nav.currentPageChanged.connect(self._on_current_page_changed)
        nav.cachedPagesChanged.connect(self._sync_scrubber)
        nav.documentLoaded.connect(lambda _total: self._sync_scrubber())

        sc = self.scrubber
        sc.pageSelected.connect(nav.go_to_page)
        sc.pageChanged.connect(self._on_preview_page)
        sc.firstPageRequested.connect(nav.first_page)
        sc.previousPageRequested.connect(nav.previous_page)
        sc.nextPageRequested.connect(nav.next_page)
        sc.lastPageRequested.connect(nav.last_page)
        sc.pageSelectorRequested.connect(self.on_show_page_selector)

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    @Slot()
    def on_open_pdf(self):
        filename, _ = QFileDialog.getOpenFileName(
            self,
            "Open PDF",
            self.settings.last_opened_dir(),
            "PDF Files (*.pdf);;All Files (*)",
        )
        if not filename:
            self.statusBar().showMessage("Open cancelled.", 3000)
            return
        self.open_pdf(filename)

    def open_pdf(self, filename: str) -> bool:
        doc = self.navigation.load_pdf(filename)
        if doc is None:
            QMessageBox.critical(self, "PDF Load Error", f"Failed to open PDF:\n{filename}")
            self.statusBar().showMessage("Failed to open PDF.", 5000)
            return False

        self.settings.set_last_opened_dir(Path(filename).parent)
        self.setWindowTitle(f"PageScrub – {Path(filename).name}")
        self.statusBar().showMessage(f"Loaded '{Path(filename).name}' ({doc.page_count} pages).", 5000)
        self._show_page(self.navigation.current_page)
        return True

    @Slot()
    def on_show_page_selector(self):
        nav = self.navigation
        page = GoToPageDialog.get_page(nav.current_page, nav.total_pages, len(nav.cached_pages), self)
        if page is not None:
            logger.info("Navigating to page: %d", page)
            nav.go_to_page(page)

    @Slot(int)
    def _on_current_page_changed(self, page: int):
        self._sync_scrubber()
        self._show_page(page)

    @Slot(int)
    def _on_preview_page(self, page: int):
        self.statusBar().showMessage(f"Page {page} of {self.navigation.total_pages}", 1500)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _show_page(self, page: int) -> None:
        if page <= 0:
            return
        pix = self.navigation.render_page(page, self.settings.thumbnail_width_px())
        if pix is not None and not pix.isNull():
            self.page_label.setPixmap(pix)

    def _sync_scrubber(self) -> None:
        nav = self.navigation
        self.scrubber.set_pages(nav.current_page, nav.total_pages, nav.cached_pages)

    def _is_compact(self) -> bool:
        return is_compact_width(self.width(), self.settings.compact_breakpoint_px())

    def resizeEvent(self, event: QResizeEvent):  # noqa: N802
        super().resizeEvent(event)
        if hasattr(self, "scrubber"):
            self.scrubber.set_compact_mode(self._is_compact())
            self.scrubber.set_landscape(self.width() > self.height())

    def closeEvent(self, event):  # noqa: N802
        logger.info("Closing viewer.")
        self.scrubber.dispose()
        event.accept()
