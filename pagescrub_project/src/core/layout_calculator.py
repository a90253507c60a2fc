from __future__ import annotations

"""layout_calculator.py

Pixel geometry of the page scrubber: thumb placement, drag‑preview bubble,
per‑page segments and tick marks.

Every function here is Qt‑free and side‑effect free. Functions that can be
handed a degenerate layout (zero width, empty document) return ``None`` or an
empty list so the caller simply skips the dependent element; only
:func:`segment_bounds` raises, because it is always called with a page the
caller has already validated.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from .errors import DegenerateLayoutError, OutOfRangeIndexError
from .position_mapper import clamp, progress_from_page

__all__ = [
    "DEFAULT_COMPACT_BREAKPOINT_PX",
    "ScrubberMetrics",
    "COMPACT_METRICS",
    "REGULAR_METRICS",
    "metrics_for",
    "ThumbGeometry",
    "PreviewBoxGeometry",
    "Segment",
    "is_compact_width",
    "scrubber_height",
    "thumb_geometry",
    "preview_box_geometry",
    "segment_bounds",
    "progress_extent",
    "show_markers",
    "marker_positions",
]

DEFAULT_COMPACT_BREAKPOINT_PX: int = 768


@dataclass(frozen=True)
class ScrubberMetrics:
    """Size table for one layout variant (compact or regular)."""

    track_height: float
    track_radius: float
    thumb_size: float
    thumb_drag_increment: float
    thumb_icon_size: float
    preview_width: float
    preview_bottom_offset: float  # bubble bottom edge above the track area bottom
    glow_inflate: float           # glow rect grows this much above and below
    glow_radius: float
    glow_min_segment_width: float
    marker_page_limit: int        # tick marks only up to this many pages
    button_size: float
    icon_size: float
    horizontal_padding: float
    vertical_padding: float
    height: float
    landscape_height: float


COMPACT_METRICS = ScrubberMetrics(
    track_height=6.0,
    track_radius=3.0,
    thumb_size=20.0,
    thumb_drag_increment=4.0,
    thumb_icon_size=14.0,
    preview_width=70.0,
    preview_bottom_offset=42.0,
    glow_inflate=2.0,
    glow_radius=5.0,
    glow_min_segment_width=10.0,
    marker_page_limit=20,
    button_size=36.0,
    icon_size=20.0,
    horizontal_padding=8.0,
    vertical_padding=6.0,
    height=60.0,
    landscape_height=48.0,
)

REGULAR_METRICS = ScrubberMetrics(
    track_height=8.0,
    track_radius=4.0,
    thumb_size=24.0,
    thumb_drag_increment=4.0,
    thumb_icon_size=16.0,
    preview_width=80.0,
    preview_bottom_offset=50.0,
    glow_inflate=2.0,
    glow_radius=6.0,
    glow_min_segment_width=0.0,
    marker_page_limit=50,
    button_size=44.0,
    icon_size=24.0,
    horizontal_padding=16.0,
    vertical_padding=8.0,
    height=60.0,
    landscape_height=60.0,
)


def metrics_for(is_compact: bool) -> ScrubberMetrics:
    return COMPACT_METRICS if is_compact else REGULAR_METRICS


@dataclass(frozen=True)
class ThumbGeometry:
    x: float
    size: float

    @property
    def center_x(self) -> float:
        return self.x + self.size / 2.0


@dataclass(frozen=True)
class PreviewBoxGeometry:
    left: float
    width: float
    bottom_offset: float


@dataclass(frozen=True)
class Segment:
    x: float
    width: float

    @property
    def right(self) -> float:
        return self.x + self.width


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _usable_width(track_width: float) -> bool:
    return math.isfinite(track_width) and track_width > 0


def is_compact_width(width: float, breakpoint: int = DEFAULT_COMPACT_BREAKPOINT_PX) -> bool:
    """Return *True* when a viewport *width* calls for the compact layout."""
    return width < breakpoint


def scrubber_height(is_compact: bool, is_landscape: bool) -> float:
    """Overall scrubber bar height (only compact landscape is shorter)."""
    metrics = metrics_for(is_compact)
    return metrics.landscape_height if is_landscape else metrics.height


# ---------------------------------------------------------------------------
# Thumb & preview
# ---------------------------------------------------------------------------

def thumb_geometry(
    track_width: float,
    total_pages: int,
    display_page: int,
    is_dragging: bool,
    is_compact: bool,
) -> Optional[ThumbGeometry]:
    """Position of the thumb for *display_page* (current or preview page).

    Returns ``None`` for an empty document or an unusable track width.
    """
    if total_pages <= 0 or not _usable_width(track_width):
        return None

    metrics = metrics_for(is_compact)
    size = metrics.thumb_size + (metrics.thumb_drag_increment if is_dragging else 0.0)
    max_position = max(0.0, track_width - size)
    x = clamp(progress_from_page(display_page, total_pages) * max_position, 0.0, max_position)
    return ThumbGeometry(x=x, size=size)


def preview_box_geometry(
    track_width: float,
    thumb: Optional[ThumbGeometry],
    is_compact: bool,
) -> Optional[PreviewBoxGeometry]:
    """Centre the preview bubble on *thumb* without leaving the track bounds."""
    if thumb is None or not _usable_width(track_width):
        return None

    metrics = metrics_for(is_compact)
    width = metrics.preview_width
    left = clamp(thumb.center_x - width / 2.0, 0.0, max(0.0, track_width - width))
    return PreviewBoxGeometry(left=left, width=width, bottom_offset=metrics.preview_bottom_offset)


# ---------------------------------------------------------------------------
# Track segments
# ---------------------------------------------------------------------------

def segment_bounds(page: int, total_pages: int, track_width: float) -> Segment:
    """Horizontal extent of *page*'s slice of the track.

    The width is clamped at the right edge so that the last segment never
    overflows the track through floating‑point rounding.

    Raises
    ------
    DegenerateLayoutError
        For an empty document or a non‑positive track width.
    OutOfRangeIndexError
        If *page* is outside ``[1, total_pages]``.
    """
    if total_pages <= 0 or not _usable_width(track_width):
        raise DegenerateLayoutError(
            f"Cannot lay out {total_pages} page(s) on a track {track_width!r} px wide."
        )
    if page < 1 or page > total_pages:
        raise OutOfRangeIndexError(page, total_pages)

    segment_width = track_width / total_pages
    x = clamp((page - 1) * segment_width, 0.0, track_width)
    width = clamp(segment_width, 0.0, track_width - x)
    return Segment(x=x, width=width)


def progress_extent(current_page: int, total_pages: int, track_width: float) -> Optional[float]:
    """Width of the "already reached" fill, or ``None`` when nothing is drawn."""
    if total_pages <= 1 or not _usable_width(track_width):
        return None
    if current_page < 1 or current_page > total_pages:
        return None
    return clamp(track_width * progress_from_page(current_page, total_pages), 0.0, track_width)


def show_markers(total_pages: int, is_compact: bool) -> bool:
    """Tick marks are only drawn for documents short enough to stay readable."""
    return 1 < total_pages <= metrics_for(is_compact).marker_page_limit


def marker_positions(total_pages: int, track_width: float) -> List[float]:
    """X coordinates of the per‑page tick marks (first and last at the edges)."""
    if total_pages <= 1 or not _usable_width(track_width):
        return []
    return [
        clamp(i / (total_pages - 1) * track_width, 0.0, track_width)
        for i in range(total_pages)
    ]
