from __future__ import annotations

"""PageScrubber – horizontal page scrubber with navigation buttons.

Layout (left to right): first, previous, page track, page indicator, next,
last. Dragging or tapping on the track previews a page in a floating bubble
and jumps there on release.

Signals
-------
pageChanged(int)
    Live preview page while dragging (advisory, may fire often).
pageSelected(int)
    Page to navigate to; fired once per gesture and only when it differs
    from the current page.
firstPageRequested / previousPageRequested / nextPageRequested / lastPageRequested
    Navigation buttons.
pageSelectorRequested
    The "current / total" indicator was clicked.
"""

import logging
from typing import Iterable, Optional

from PySide6.QtCore import QEvent, QPoint, QPointF, QSize, Qt, Signal
from PySide6.QtGui import QColor, QKeyEvent, QMouseEvent, QPainter, QPaintEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QSizePolicy,
    QStyle,
    QToolButton,
    QWidget,
)

from ...controllers.scrub_controller import ScrubInteractionController
from ...core.layout_calculator import (
    metrics_for,
    preview_box_geometry,
    scrubber_height,
    thumb_geometry,
)
from ...models.page_state import PageSnapshot, ScrubberStyle
from ...visualization.track_renderer import TrackRenderer

__all__ = ["ScrubberTrack", "PreviewBubble", "PageScrubber"]

logger = logging.getLogger(__name__)

THUMB_HALO_OPACITY = 0.4


class ScrubberTrack(QWidget):
    """Interactive track: paints bar + thumb and forwards pointer input."""

    interactionChanged = Signal()

    def __init__(self, controller: ScrubInteractionController, parent: QWidget | None = None):
        super().__init__(parent)
        self._controller = controller
        self._renderer = TrackRenderer()

        self.setMouseTracking(False)
        self.setFocusPolicy(Qt.FocusPolicy.ClickFocus)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    # ------------------------------------------------------------------
    @property
    def renderer(self) -> TrackRenderer:
        return self._renderer

    @property
    def controller(self) -> ScrubInteractionController:
        return self._controller

    def set_inputs(self, snapshot: PageSnapshot, style: ScrubberStyle) -> bool:
        """Push new host inputs; schedules a repaint only if they matter."""
        self._controller.update_snapshot(snapshot)
        dirty = self._renderer.update(snapshot, style)
        if dirty:
            self.update()
        return dirty

    def sizeHint(self) -> QSize:  # noqa: N802
        return QSize(240, int(metrics_for(self._renderer.style.is_compact_mode).button_size))

    def minimumSizeHint(self) -> QSize:  # noqa: N802
        return QSize(40, 16)

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------
    def mousePressEvent(self, event: QMouseEvent):  # noqa: N802
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        if self._controller.drag_start(event.position().x(), float(self.width())):
            self._after_interaction()
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):  # noqa: N802
        if not self._controller.is_dragging:
            super().mouseMoveEvent(event)
            return
        if self._controller.drag_update(event.position().x(), float(self.width())):
            self._after_interaction()
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent):  # noqa: N802
        if event.button() != Qt.MouseButton.LeftButton or not self._controller.is_dragging:
            super().mouseReleaseEvent(event)
            return
        self._controller.drag_end()
        self._after_interaction()
        event.accept()

    def keyPressEvent(self, event: QKeyEvent):  # noqa: N802
        if event.key() == Qt.Key.Key_Escape and self._controller.is_dragging:
            self.cancel_drag()
            event.accept()
            return
        super().keyPressEvent(event)

    def leaveEvent(self, event: QEvent):  # noqa: N802
        self.cancel_drag()
        super().leaveEvent(event)

    def hideEvent(self, event):  # noqa: N802
        self.cancel_drag()
        super().hideEvent(event)

    def cancel_drag(self) -> None:
        if self._controller.state.is_idle:
            return
        self._controller.drag_cancel()
        self._after_interaction()

    def _after_interaction(self) -> None:
        self.update()
        self.interactionChanged.emit()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, event: QPaintEvent):  # noqa: N802
        painter = QPainter(self)
        try:
            self._paint(painter)
        except Exception:
            logger.exception("Failed to paint scrubber track – skipping frame")
        finally:
            painter.end()

    def _paint(self, painter: QPainter) -> None:
        width, height = float(self.width()), float(self.height())
        if width <= 0 or height <= 0:
            return

        style = self._renderer.style
        metrics = metrics_for(style.is_compact_mode)
        track_top = (height - metrics.track_height) / 2.0

        painter.save()
        painter.translate(0.0, track_top)
        self._renderer.paint(painter, width, metrics.track_height)
        painter.restore()

        thumb = thumb_geometry(
            width,
            self._renderer.snapshot.total_pages,
            self._controller.display_page,
            self._controller.is_dragging,
            style.is_compact_mode,
        )
        if thumb is not None:
            self._paint_thumb(painter, thumb.center_x, height / 2.0, thumb.size)

    def _paint_thumb(self, painter: QPainter, cx: float, cy: float, size: float) -> None:
        style = self._renderer.style
        compact = style.is_compact_mode
        dragging = self._controller.is_dragging
        blur = (8.0 if compact else 12.0) if dragging else (6.0 if compact else 8.0)
        spread = (1.0 if compact else 2.0) if dragging else 1.0

        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setPen(Qt.PenStyle.NoPen)

        halo = QColor(style.primary_color)
        halo.setAlphaF(THUMB_HALO_OPACITY)
        halo_radius = size / 2.0 + spread + blur / 4.0
        painter.setBrush(halo)
        painter.drawEllipse(QPointF(cx, cy), halo_radius, halo_radius)

        painter.setBrush(QColor(style.primary_color))
        painter.drawEllipse(QPointF(cx, cy), size / 2.0, size / 2.0)

        # drag grip: two columns of three dots
        painter.setBrush(QColor("#ffffff"))
        icon = metrics_for(compact).thumb_icon_size
        dot = icon / 10.0
        for col in (-1, 1):
            for row in (-1, 0, 1):
                painter.drawEllipse(QPointF(cx + col * icon / 6.0, cy + row * icon / 4.0), dot, dot)
        painter.restore()


class PreviewBubble(QLabel):
    """Floating "Page N / of M" bubble shown above the thumb while dragging."""

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent, Qt.WindowType.ToolTip | Qt.WindowType.FramelessWindowHint)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating, True)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setTextFormat(Qt.TextFormat.RichText)
        self._page: Optional[int] = None
        self.hide()

    @property
    def page(self) -> Optional[int]:
        return self._page

    def show_page(self, page: int, total_pages: int, is_cached: bool, style: ScrubberStyle) -> None:
        compact = style.is_compact_mode
        glyph = "&#9638;" if is_cached else "&#9633;"  # filled vs outline document
        title_pt, sub_pt = (13, 10) if compact else (15, 11)
        self.setText(
            f"<div><span style='font-size:{title_pt}px; font-weight:bold'>{glyph} Page {page}</span>"
            f"<br/><span style='font-size:{sub_pt}px'>of {total_pages}</span></div>"
        )
        pad_h, pad_v = (10, 6) if compact else (12, 8)
        self.setStyleSheet(
            f"background:{style.cached_color}; border-radius:12px; padding:{pad_v}px {pad_h}px;"
        )
        self._page = page

    def clear(self) -> None:
        self._page = None
        super().clear()
        self.hide()


class PageScrubber(QWidget):
    """Scrubber bar: navigation buttons around an interactive page track."""

    pageChanged = Signal(int)
    pageSelected = Signal(int)
    firstPageRequested = Signal()
    previousPageRequested = Signal()
    nextPageRequested = Signal()
    lastPageRequested = Signal()
    pageSelectorRequested = Signal()

    def __init__(self, style: Optional[ScrubberStyle] = None, parent: QWidget | None = None):
        super().__init__(parent)
        self.setObjectName("PageScrubber")

        self._snapshot = PageSnapshot()
        self._style = style or ScrubberStyle()
        self._landscape = False

        self._controller = ScrubInteractionController(
            on_page_changed=self.pageChanged.emit,
            on_page_selected=self.pageSelected.emit,
        )

        # Buttons ------------------------------------------------------
        qstyle = self.style()
        self._btn_first = self._make_nav_button(QStyle.StandardPixmap.SP_MediaSkipBackward, "First Page")
        self._btn_prev = self._make_nav_button(QStyle.StandardPixmap.SP_ArrowLeft, "Previous Page")
        self._btn_next = self._make_nav_button(QStyle.StandardPixmap.SP_ArrowRight, "Next Page")
        self._btn_last = self._make_nav_button(QStyle.StandardPixmap.SP_MediaSkipForward, "Last Page")
        self._btn_first.clicked.connect(lambda: self.firstPageRequested.emit())
        self._btn_prev.clicked.connect(lambda: self.previousPageRequested.emit())
        self._btn_next.clicked.connect(lambda: self.nextPageRequested.emit())
        self._btn_last.clicked.connect(lambda: self.lastPageRequested.emit())

        # Track --------------------------------------------------------
        self._track = ScrubberTrack(self._controller, self)
        self._track.interactionChanged.connect(self._sync_preview)
        self._bubble = PreviewBubble(self)

        # Page indicator ----------------------------------------------
        self._indicator = QToolButton(self)
        self._indicator.setAutoRaise(True)
        self._indicator.setToolTip("Go to page…")
        self._indicator.setIcon(qstyle.standardIcon(QStyle.StandardPixmap.SP_FileIcon))
        self._indicator.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
        self._indicator.clicked.connect(lambda: self.pageSelectorRequested.emit())

        layout = QHBoxLayout(self)
        layout.setSpacing(4)
        layout.addWidget(self._btn_first)
        layout.addWidget(self._btn_prev)
        layout.addWidget(self._track, 1)
        layout.addWidget(self._indicator)
        layout.addWidget(self._btn_next)
        layout.addWidget(self._btn_last)
        self.setLayout(layout)

        self._apply_metrics()
        self._refresh()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def track(self) -> ScrubberTrack:
        return self._track

    @property
    def controller(self) -> ScrubInteractionController:
        return self._controller

    @property
    def preview_bubble(self) -> PreviewBubble:
        return self._bubble

    @property
    def snapshot(self) -> PageSnapshot:
        return self._snapshot

    @property
    def scrubber_style(self) -> ScrubberStyle:
        return self._style

    def set_pages(self, current_page: int, total_pages: int, cached_pages: Optional[Iterable[int]] = None) -> None:
        """Update the host snapshot (out‑of‑range cached pages are ignored)."""
        if cached_pages is None:
            cached_pages = self._snapshot.cached_pages
        self._snapshot = PageSnapshot.create(current_page, total_pages, cached_pages)
        self._refresh()

    def set_current_page(self, page: int) -> None:
        self.set_pages(page, self._snapshot.total_pages)

    def set_cached_pages(self, cached_pages: Iterable[int]) -> None:
        self.set_pages(self._snapshot.current_page, self._snapshot.total_pages, cached_pages)

    def set_scrubber_style(self, style: ScrubberStyle) -> None:
        compact_changed = style.is_compact_mode != self._style.is_compact_mode
        self._style = style
        if compact_changed:
            self._apply_metrics()
        self._refresh()

    def set_compact_mode(self, compact: bool) -> None:
        if compact == self._style.is_compact_mode:
            return
        self.set_scrubber_style(
            ScrubberStyle(
                primary_color=self._style.primary_color,
                cached_color=self._style.cached_color,
                background_color=self._style.background_color,
                is_compact_mode=compact,
            )
        )

    def set_landscape(self, landscape: bool) -> None:
        if landscape != self._landscape:
            self._landscape = landscape
            self._apply_metrics()

    def dispose(self) -> None:
        """Reset the gesture state and detach the controller callbacks."""
        self._bubble.clear()
        self._controller.dispose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _make_nav_button(self, pixmap: QStyle.StandardPixmap, tooltip: str) -> QToolButton:
        btn = QToolButton(self)
        btn.setIcon(self.style().standardIcon(pixmap))
        btn.setToolTip(tooltip)
        btn.setAutoRaise(True)
        btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        return btn

    def _apply_metrics(self) -> None:
        metrics = metrics_for(self._style.is_compact_mode)
        size = int(metrics.button_size)
        icon = int(metrics.icon_size)
        for btn in (self._btn_first, self._btn_prev, self._btn_next, self._btn_last):
            btn.setMinimumSize(size, size)
            btn.setIconSize(QSize(icon, icon))
        self._indicator.setIconSize(QSize(icon - 6, icon - 6))

        h_pad, v_pad = int(metrics.horizontal_padding), int(metrics.vertical_padding)
        self.layout().setContentsMargins(h_pad, v_pad, h_pad, v_pad)
        self.setFixedHeight(int(scrubber_height(self._style.is_compact_mode, self._landscape)))

    def _refresh(self) -> None:
        snap = self._snapshot
        self._btn_first.setEnabled(snap.has_previous)
        self._btn_prev.setEnabled(snap.has_previous)
        self._btn_next.setEnabled(snap.has_next)
        self._btn_last.setEnabled(snap.has_next)
        if snap.is_empty:
            self._indicator.setText("– / 0")
        else:
            self._indicator.setText(f"{snap.current_page} / {snap.total_pages}")
        self._track.set_inputs(snap, self._style)
        self._sync_preview()

    def _sync_preview(self) -> None:
        ctrl = self._controller
        if not ctrl.is_dragging or ctrl.preview_page is None:
            if self._bubble.page is not None:
                self._bubble.clear()
            return

        page = ctrl.preview_page
        track = self._track
        width = float(track.width())
        thumb = thumb_geometry(width, self._snapshot.total_pages, page, True, self._style.is_compact_mode)
        box = preview_box_geometry(width, thumb, self._style.is_compact_mode)
        if box is None:
            self._bubble.clear()
            return

        self._bubble.show_page(page, self._snapshot.total_pages, self._snapshot.is_cached(page), self._style)
        self._bubble.setFixedWidth(int(box.width))
        self._bubble.adjustSize()
        anchor = track.mapToGlobal(QPoint(int(box.left), track.height()))
        self._bubble.move(anchor.x(), anchor.y() - int(box.bottom_offset) - self._bubble.height())
        self._bubble.show()
