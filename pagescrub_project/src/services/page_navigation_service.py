from __future__ import annotations

"""pagescrub_project.services.page_navigation_service

Host‑side document model for the page scrubber: owns the loaded
:class:`PdfDocument`, the current page and an LRU cache of rendered pages,
and announces changes through Qt signals the viewer binds to.

The keys of the render cache are exactly the "cached pages" shown on the
scrubber track.
"""

import logging
from collections import OrderedDict
from pathlib import Path
from typing import FrozenSet, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QPixmap

from ..models.page_state import PageSnapshot
from ..models.pdf_document import PdfDocument

__all__ = ["PageNavigationService"]

logger = logging.getLogger(__name__)


class PageNavigationService(QObject):
    """Current page / cached pages bookkeeping with Qt signals."""

    # Signals -----------------------------------------------------------------------------------
    documentLoaded: Signal = Signal(int)      # total_pages
    currentPageChanged: Signal = Signal(int)  # one‑based page
    cachedPagesChanged: Signal = Signal()

    def __init__(self, max_cached_pages: int = 10, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._document: Optional[PdfDocument] = None
        self._total_pages: int = 0
        self._current_page: int = 0
        self._max_cached = max(1, int(max_cached_pages))
        # Cache key is (page, width); order = least recently used first
        self._pixmaps: OrderedDict[tuple[int, int], QPixmap] = OrderedDict()
        self._cached: set[int] = set()

    # -----------------------------------------------------------------------------------------
    # Properties
    # -----------------------------------------------------------------------------------------
    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def cached_pages(self) -> FrozenSet[int]:
        return frozenset(self._cached)

    @property
    def document(self) -> Optional[PdfDocument]:
        return self._document

    def snapshot(self) -> PageSnapshot:
        return PageSnapshot.create(self._current_page, self._total_pages, self._cached)

    # -----------------------------------------------------------------------------------------
    # Document lifecycle
    # -----------------------------------------------------------------------------------------
    def load_pdf(self, path: str | Path) -> Optional[PdfDocument]:
        """Load *path*, reset to page 1 and emit :pyattr:`documentLoaded`.

        Returns the loaded document or *None* on failure (state untouched).
        """
        pdf = PdfDocument()
        if not pdf.load(path):
            return None

        if self._document is not None:
            self._document.close()
        self._document = pdf
        self.set_page_count(pdf.page_count)
        return pdf

    def set_page_count(self, total_pages: int) -> None:
        """Start over with a document of *total_pages* pages (no PDF attached)."""
        self._total_pages = max(0, int(total_pages))
        self._current_page = 1 if self._total_pages > 0 else 0
        self._clear_cache()
        self.documentLoaded.emit(self._total_pages)
        self.currentPageChanged.emit(self._current_page)

    # -----------------------------------------------------------------------------------------
    # Navigation
    # -----------------------------------------------------------------------------------------
    def go_to_page(self, page: int) -> bool:
        """Make *page* current. Pages outside ``[1, total]`` are rejected."""
        if self._total_pages <= 0:
            logger.error("Cannot go to page %s – no document loaded", page)
            return False
        if page < 1 or page > self._total_pages:
            logger.error("Invalid page number: %s (total: %d)", page, self._total_pages)
            return False
        if page == self._current_page:
            return True

        logger.debug("Going to page %d", page)
        self._current_page = page
        self.currentPageChanged.emit(page)
        return True

    def first_page(self) -> bool:
        return self.go_to_page(1)

    def previous_page(self) -> bool:
        if self._current_page <= 1:
            return False
        return self.go_to_page(self._current_page - 1)

    def next_page(self) -> bool:
        if self._current_page >= self._total_pages:
            return False
        return self.go_to_page(self._current_page + 1)

    def last_page(self) -> bool:
        return self.go_to_page(self._total_pages)

    # -----------------------------------------------------------------------------------------
    # Page cache
    # -----------------------------------------------------------------------------------------
    def mark_cached(self, page: int) -> None:
        """Record *page* as available without a pixmap (e.g. prefetched elsewhere)."""
        if page < 1 or page > self._total_pages or page in self._cached:
            return
        self._cached.add(page)
        self.cachedPagesChanged.emit()

    def evict(self, page: int) -> None:
        removed = page in self._cached
        self._cached.discard(page)
        for key in [k for k in self._pixmaps if k[0] == page]:
            del self._pixmaps[key]
        if removed:
            self.cachedPagesChanged.emit()

    def render_page(self, page: int, width: int) -> Optional[QPixmap]:
        """Return the pixmap for one‑based *page*, rendering it if needed."""
        if self._document is None:
            return None

        key = (page, width)
        pix = self._pixmaps.get(key)
        if pix is not None:
            self._pixmaps.move_to_end(key)
            return pix

        try:
            pix = self._document.render_page(page, width)
        except ValueError as exc:
            logger.warning("Cannot render page %s: %s", page, exc)
            return None

        self._pixmaps[key] = pix
        self._cached.add(page)
        self._trim_cache()
        self.cachedPagesChanged.emit()
        return pix

    def _trim_cache(self) -> None:
        while len(self._pixmaps) > self._max_cached:
            victim = next((k for k in self._pixmaps if k[0] != self._current_page), None)
            if victim is None:
                break
            del self._pixmaps[victim]
            if not any(k[0] == victim[0] for k in self._pixmaps):
                self._cached.discard(victim[0])

    def _clear_cache(self) -> None:
        self._pixmaps.clear()
        if self._cached:
            self._cached.clear()
            self.cachedPagesChanged.emit()
