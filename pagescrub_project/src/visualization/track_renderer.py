from __future__ import annotations

"""
Track rendering for the page scrubber.

Rendering happens in two steps:

1. :meth:`TrackRenderer.plan` turns the page snapshot and style into an
   ordered, back‑to‑front list of :class:`TrackPrimitive` objects. This step is
   pure Python and is what the unit tests inspect.
2. :meth:`TrackRenderer.paint` replays that list onto a ``QPainter``.

Layers, back to front: background bar, cached‑page highlights, progress fill,
current‑page glow, current‑page segment, per‑page tick marks.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPen

from ..core.layout_calculator import (
    marker_positions,
    metrics_for,
    progress_extent,
    segment_bounds,
    show_markers,
)
from ..models.page_state import PageSnapshot, ScrubberStyle

__all__ = [
    "PrimitiveKind",
    "TrackPrimitive",
    "TrackPaintKey",
    "TrackRenderer",
]

logger = logging.getLogger(__name__)

CACHED_OPACITY = 0.6
GLOW_OPACITY = 0.3
MARKER_OPACITY = 0.5
MARKER_WIDTH = 1.0


class PrimitiveKind(Enum):
    BACKGROUND = "background"
    CACHED = "cached"
    PROGRESS = "progress"
    GLOW = "glow"
    CURRENT = "current"
    MARKER = "marker"


@dataclass(frozen=True)
class TrackPrimitive:
    """One filled rounded rectangle (or, for markers, a vertical line at *x*)."""

    kind: PrimitiveKind
    x: float
    y: float
    width: float
    height: float
    color: str
    opacity: float = 1.0
    radius: float = 0.0
    page: Optional[int] = None


@dataclass(frozen=True)
class TrackPaintKey:
    """The four inputs whose change requires the track to be redrawn."""

    current_page: int
    total_pages: int
    cached_pages: FrozenSet[int]
    is_compact_mode: bool

    @classmethod
    def of(cls, snapshot: PageSnapshot, style: ScrubberStyle) -> TrackPaintKey:
        return cls(
            current_page=snapshot.current_page,
            total_pages=snapshot.total_pages,
            cached_pages=frozenset(snapshot.cached_pages),
            is_compact_mode=style.is_compact_mode,
        )


class TrackRenderer:
    """Draws the scrubber track for a :class:`PageSnapshot`."""

    def __init__(self, snapshot: Optional[PageSnapshot] = None, style: Optional[ScrubberStyle] = None):
        self._snapshot = snapshot or PageSnapshot()
        self._style = style or ScrubberStyle()

    # ------------------------------------------------------------------
    @property
    def snapshot(self) -> PageSnapshot:
        return self._snapshot

    @property
    def style(self) -> ScrubberStyle:
        return self._style

    @property
    def key(self) -> TrackPaintKey:
        return TrackPaintKey.of(self._snapshot, self._style)

    def should_repaint(self, key: TrackPaintKey) -> bool:
        return key != self.key

    def update(self, snapshot: PageSnapshot, style: Optional[ScrubberStyle] = None) -> bool:
        """Store new inputs; return *True* if a redraw is needed.

        Colour changes alone are stored but do not count – the four fields of
        :class:`TrackPaintKey` decide.
        """
        style = style or self._style
        dirty = self.should_repaint(TrackPaintKey.of(snapshot, style))
        self._snapshot = snapshot
        self._style = style
        return dirty

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------
    def plan(self, width: float, height: float) -> List[TrackPrimitive]:
        """Return the primitives for a track *width* × *height* pixels."""
        if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
            return []

        snap, style = self._snapshot, self._style
        metrics = metrics_for(style.is_compact_mode)
        radius = metrics.track_radius
        total = snap.total_pages
        current = snap.current_page

        prims: List[TrackPrimitive] = [
            TrackPrimitive(PrimitiveKind.BACKGROUND, 0.0, 0.0, width, height,
                           style.background_color, radius=radius),
        ]

        if total > 1:
            for page in sorted(snap.cached_pages):
                if page < 1 or page > total:
                    continue
                seg = segment_bounds(page, total, width)
                prims.append(TrackPrimitive(
                    PrimitiveKind.CACHED, seg.x, 0.0, seg.width, height,
                    style.cached_color, opacity=CACHED_OPACITY, radius=radius, page=page,
                ))

        extent = progress_extent(current, total, width)
        if extent is not None:
            prims.append(TrackPrimitive(PrimitiveKind.PROGRESS, 0.0, 0.0, extent, height,
                                        style.primary_color, radius=radius))

            seg = segment_bounds(current, total, width)
            segment_width = width / total
            if not style.is_compact_mode or segment_width > metrics.glow_min_segment_width:
                inflate = metrics.glow_inflate
                prims.append(TrackPrimitive(
                    PrimitiveKind.GLOW, seg.x, -inflate, seg.width, height + 2 * inflate,
                    style.primary_color, opacity=GLOW_OPACITY, radius=metrics.glow_radius,
                    page=current,
                ))
            prims.append(TrackPrimitive(PrimitiveKind.CURRENT, seg.x, 0.0, seg.width, height,
                                        style.primary_color, radius=radius, page=current))

        if show_markers(total, style.is_compact_mode):
            for x in marker_positions(total, width):
                prims.append(TrackPrimitive(PrimitiveKind.MARKER, x, 0.0, 0.0, height,
                                            style.background_color, opacity=MARKER_OPACITY))

        return prims

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paint(self, painter: QPainter, width: float, height: float) -> None:
        """Replay :meth:`plan` onto *painter* (origin at the track's top‑left)."""
        prims = self.plan(width, height)
        if not prims:
            return

        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        for prim in prims:
            color = QColor(prim.color)
            color.setAlphaF(prim.opacity)
            if prim.kind is PrimitiveKind.MARKER:
                painter.setPen(QPen(color, MARKER_WIDTH))
                painter.drawLine(QPointF(prim.x, prim.y), QPointF(prim.x, prim.y + prim.height))
                continue
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(color)
            painter.drawRoundedRect(QRectF(prim.x, prim.y, prim.width, prim.height),
                                    prim.radius, prim.radius)
        painter.restore()
