#!/usr/bin/env python3
"""
Dialog for jumping to a page number.

Opened from the scrubber's "current / total" indicator. Offers a spin box
limited to the document's page range plus quick First / Previous / Next /
Last shortcuts that accept the dialog immediately.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

logger = logging.getLogger(__name__)


class GoToPageDialog(QDialog):
    """Modal dialog returning a one‑based page number (or *None* if cancelled)."""

    def __init__(
        self,
        current_page: int,
        total_pages: int,
        loaded_pages: int = 0,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Go to Page")
        self.setModal(True)

        self._total = max(1, int(total_pages))
        self._current = min(max(int(current_page), 1), self._total)
        self._selected: Optional[int] = None

        # --- Page spin-box ------------------------------------------------
        self._spin = QSpinBox(self)
        self._spin.setRange(1, self._total)
        self._spin.setValue(self._current)
        self._spin.selectAll()

        form = QFormLayout()
        form.addRow("Page Number:", self._spin)

        hint = QLabel(f"Enter a page number (1 to {self._total})", self)
        hint.setEnabled(False)

        # --- Info lines ---------------------------------------------------
        self._info_current = QLabel(f"Currently on page {self._current} of {self._total}", self)
        self._info_loaded = QLabel(f"{loaded_pages} pages loaded in memory", self)

        # --- Quick buttons -----------------------------------------------
        self._btn_first = QPushButton("First", self)
        self._btn_prev = QPushButton("Previous", self)
        self._btn_next = QPushButton("Next", self)
        self._btn_last = QPushButton("Last", self)
        self._btn_prev.setEnabled(self._current > 1)
        self._btn_next.setEnabled(self._current < self._total)
        self._btn_first.clicked.connect(lambda: self._choose(1))
        self._btn_prev.clicked.connect(lambda: self._choose(self._current - 1))
        self._btn_next.clicked.connect(lambda: self._choose(self._current + 1))
        self._btn_last.clicked.connect(lambda: self._choose(self._total))

        quick = QHBoxLayout()
        for btn in (self._btn_first, self._btn_prev, self._btn_next, self._btn_last):
            btn.setAutoDefault(False)
            quick.addWidget(btn)

        # --- Dialog buttons ---------------------------------------------
        self._buttonbox = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel,
            Qt.Orientation.Horizontal,
            self,
        )
        self._buttonbox.button(QDialogButtonBox.StandardButton.Ok).setText("Go")
        self._buttonbox.accepted.connect(self._on_accept)
        self._buttonbox.rejected.connect(self.reject)

        lay = QVBoxLayout(self)
        lay.addLayout(form)
        lay.addWidget(hint)
        lay.addWidget(self._info_current)
        lay.addWidget(self._info_loaded)
        lay.addLayout(quick)
        lay.addWidget(self._buttonbox)
        self.setLayout(lay)

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def selected_page(self) -> Optional[int]:
        """Page chosen by the user, *None* until the dialog is accepted."""
        return self._selected

    @classmethod
    def get_page(
        cls,
        current_page: int,
        total_pages: int,
        loaded_pages: int = 0,
        parent: Optional[QWidget] = None,
    ) -> Optional[int]:
        """Run the dialog modally and return the chosen page or *None*."""
        if total_pages <= 0:
            return None
        dlg = cls(current_page, total_pages, loaded_pages, parent)
        if dlg.exec() == QDialog.DialogCode.Accepted:
            return dlg.selected_page()
        return None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _on_accept(self) -> None:
        self._choose(self._spin.value())

    def _choose(self, page: int) -> None:
        if page < 1 or page > self._total:
            logger.warning("Ignoring out-of-range page %s (1-%d)", page, self._total)
            return
        self._selected = page
        logger.debug("Go to page dialog accepted: %d", page)
        self.accept()
