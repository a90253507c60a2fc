from __future__ import annotations

"""pagescrub_project.models.pdf_document

Thin synchronous wrapper around :class:`QPdfDocument` used by the demo
viewer to count and render pages.

Pages are addressed *one‑based* here, matching the scrubber and the
navigation service; the conversion to Qt's zero‑based indices happens only
inside this class.
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, QSize
from PySide6.QtGui import QPixmap
from PySide6.QtPdf import QPdfDocument

__all__ = ["PdfDocument"]

logger = logging.getLogger(__name__)


class PdfDocument(QObject):
    """Blocking load/render façade over :class:`QPdfDocument`.

    Derives from :class:`~PySide6.QtCore.QObject` so the wrapped
    ``QPdfDocument`` can take *this* as its parent and share its lifetime.
    """

    def __init__(self) -> None:
        super().__init__()
        self._doc: QPdfDocument = QPdfDocument(self)
        self._path: Optional[Path] = None

    # ---------------------------------------------------------------------
    # Loading
    # ---------------------------------------------------------------------
    def load(self, path: str | Path) -> bool:
        """Load *path*; return *True* on success."""
        pdf_path = Path(path)
        self._doc.close()
        self._path = None
        if not pdf_path.is_file():
            logger.warning("PDF file not found: %s", pdf_path)
            return False

        # The Qt enum value for "no error" is *None_* (trailing underscore).
        if self._doc.load(str(pdf_path)) != QPdfDocument.Error.None_:
            logger.error("QPdfDocument could not load %s", pdf_path)
            self._doc.close()
            return False

        self._path = pdf_path
        logger.info("Loaded %s (%d pages)", pdf_path.name, self.page_count)
        return True

    def close(self) -> None:
        self._doc.close()
        self._path = None

    # ---------------------------------------------------------------------
    # Properties
    # ---------------------------------------------------------------------
    @property
    def is_loaded(self) -> bool:
        return self._path is not None

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def page_count(self) -> int:
        """Number of pages, ``0`` when nothing is loaded."""
        if not self.is_loaded:
            return 0
        return int(self._doc.pageCount())

    # ---------------------------------------------------------------------
    # Rendering
    # ---------------------------------------------------------------------
    def render_page(self, page: int, width: int) -> QPixmap:
        """Render one‑based *page* at *width* pixels, keeping the aspect ratio.

        Raises
        ------
        RuntimeError
            If no document is loaded.
        ValueError
            If *page* is out of range or *width* is not positive.
        """
        if not self.is_loaded:
            raise RuntimeError("PDF not loaded – call `load()` first.")
        if page < 1 or page > self.page_count:
            raise ValueError(f"Page {page} out of range (1‑{self.page_count}).")
        if width <= 0:
            raise ValueError("Width must be positive.")

        # Page size is in points (1/72 inch); only the ratio matters here.
        size_pts = self._doc.pagePointSize(page - 1)
        if size_pts.isEmpty():
            return QPixmap()

        height = max(1, int(round(width * size_pts.height() / size_pts.width())))
        image = self._doc.render(page - 1, QSize(width, height))
        return QPixmap.fromImage(image)
