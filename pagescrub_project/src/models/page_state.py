from __future__ import annotations

"""page_state.py

Read‑only inputs the scrubber receives from its host on every update: the
document's page snapshot and the colour/size configuration.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

__all__ = ["PageSnapshot", "ScrubberStyle"]


@dataclass(frozen=True)
class PageSnapshot:
    """Current page, page count and cached pages as seen by the scrubber.

    Use :meth:`create` rather than the constructor for host input – it drops
    cached indices outside ``[1, total_pages]`` and pulls the current page
    into range.
    """

    current_page: int = 0
    total_pages: int = 0
    cached_pages: FrozenSet[int] = frozenset()

    @classmethod
    def create(
        cls,
        current_page: int,
        total_pages: int,
        cached_pages: Optional[Iterable[int]] = None,
    ) -> PageSnapshot:
        total = max(0, int(total_pages))
        if total == 0:
            current = 0
        else:
            current = min(max(int(current_page), 1), total)
        cached = frozenset(p for p in (cached_pages or ()) if 1 <= p <= total)
        return cls(current_page=current, total_pages=total, cached_pages=cached)

    @property
    def is_empty(self) -> bool:
        return self.total_pages <= 0

    @property
    def has_previous(self) -> bool:
        return self.total_pages > 0 and self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.total_pages > 0 and self.current_page < self.total_pages

    def is_cached(self, page: int) -> bool:
        return page in self.cached_pages


@dataclass(frozen=True)
class ScrubberStyle:
    """Colours (``#RRGGBB`` strings) and layout variant for the scrubber.

    None of these values influence page mapping – only what gets drawn.
    """

    primary_color: str = "#3399ff"
    cached_color: str = "#b3d4ff"
    background_color: str = "#d9dde3"
    is_compact_mode: bool = False
