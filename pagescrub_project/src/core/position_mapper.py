from __future__ import annotations

"""position_mapper.py

Conversions between a horizontal pointer offset on the track, a normalised
progress value in ``[0, 1]`` and a one‑based page index.

All functions are pure and clamp their results, so a pointer dragged past
either end of the track maps to the first/last page rather than being
extrapolated.
"""

import math

from .errors import DegenerateLayoutError

__all__ = [
    "NO_PAGE",
    "clamp",
    "progress_from_offset",
    "page_from_progress",
    "progress_from_page",
    "page_from_offset",
]

NO_PAGE: int = 0  # returned for empty documents – callers treat it as a no‑op


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp *value* into ``[lower, upper]`` (*lower* wins if the range is inverted)."""
    return max(lower, min(value, upper))


def _round_half_away(value: float) -> int:
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def progress_from_offset(dx: float, track_width: float) -> float:
    """Return the normalised position of *dx* along a track *track_width* wide.

    Raises
    ------
    DegenerateLayoutError
        If *track_width* is not a positive, finite number.
    """
    if not math.isfinite(track_width) or track_width <= 0:
        raise DegenerateLayoutError(f"Track width must be positive, got {track_width!r}.")
    return clamp(dx, 0.0, track_width) / track_width


def page_from_progress(progress: float, total_pages: int) -> int:
    """Map *progress* to a one‑based page.

    Documents with a single page always yield ``1``; empty documents yield
    :data:`NO_PAGE`.
    """
    if total_pages <= 0:
        return NO_PAGE
    if total_pages == 1:
        return 1
    progress = clamp(progress, 0.0, 1.0)
    page = _round_half_away(progress * (total_pages - 1)) + 1
    return int(clamp(page, 1, total_pages))


def progress_from_page(page: int, total_pages: int) -> float:
    """Inverse of :func:`page_from_progress` (``0.0`` for one page or fewer)."""
    if total_pages <= 1:
        return 0.0
    return clamp((page - 1) / (total_pages - 1), 0.0, 1.0)


def page_from_offset(dx: float, track_width: float, total_pages: int) -> int:
    """Shortcut for ``page_from_progress(progress_from_offset(dx, w), n)``."""
    return page_from_progress(progress_from_offset(dx, track_width), total_pages)
