from __future__ import annotations

"""errors.py
Exception types raised by the pure scrubber geometry.

Both error kinds are recovered locally by the controller and the renderer –
they exist so that the pure functions can refuse inputs their contract does
not cover instead of returning ``nan``.
"""

__all__ = [
    "ScrubberError",
    "DegenerateLayoutError",
    "OutOfRangeIndexError",
]


class ScrubberError(ValueError):
    """Base class for scrubber geometry errors."""


class DegenerateLayoutError(ScrubberError):
    """Track width/height or page count is not positive."""


class OutOfRangeIndexError(ScrubberError):
    """A page index falls outside ``[1, total_pages]``."""

    def __init__(self, page: int, total_pages: int):
        super().__init__(f"Page {page} out of range (1‑{total_pages}).")
        self.page = page
        self.total_pages = total_pages
