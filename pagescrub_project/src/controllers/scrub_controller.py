from __future__ import annotations

"""scrub_controller.py

State machine behind the page scrubber's drag/tap gestures.

The controller is deliberately Qt‑free: the track widget feeds it pointer
offsets and its measured width, and the controller answers with the preview
page plus two notifications –

* ``on_page_changed(page)`` whenever the page under the pointer changes
  during a gesture (live preview), and
* ``on_page_selected(page)`` once, on release, if the gesture ends on a page
  other than the document's current page (the "jump there" signal).

A tap is a drag that starts and ends at the same offset.
"""

import logging
import math
from typing import Callable, Optional

from ..core.position_mapper import page_from_offset
from ..models.interaction_state import IDLE, InteractionPhase, InteractionState
from ..models.page_state import PageSnapshot

__all__ = ["ScrubInteractionController", "PageCallback"]

logger = logging.getLogger(__name__)

PageCallback = Callable[[int], None]


class ScrubInteractionController:
    """Owns :class:`InteractionState` and turns pointer input into page events."""

    def __init__(
        self,
        on_page_changed: Optional[PageCallback] = None,
        on_page_selected: Optional[PageCallback] = None,
    ) -> None:
        self.on_page_changed = on_page_changed
        self.on_page_selected = on_page_selected

        self._state: InteractionState = IDLE
        self._snapshot: PageSnapshot = PageSnapshot()
        self._notified_page: Optional[int] = None
        self._disposed: bool = False

    # ------------------------------------------------------------------
    # Read‑only state
    # ------------------------------------------------------------------
    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def snapshot(self) -> PageSnapshot:
        return self._snapshot

    @property
    def is_dragging(self) -> bool:
        return self._state.is_dragging

    @property
    def preview_page(self) -> Optional[int]:
        return self._state.preview_page

    @property
    def display_page(self) -> int:
        """Page the thumb should sit on: the preview while dragging, else current."""
        if self._state.is_dragging and self._state.preview_page is not None:
            return self._state.preview_page
        return self._snapshot.current_page

    # ------------------------------------------------------------------
    # Host input
    # ------------------------------------------------------------------
    def update_snapshot(self, snapshot: PageSnapshot) -> None:
        """Replace the host's page snapshot.

        A document that becomes empty mid‑gesture cancels the gesture; a
        shrinking document pulls the preview page back into range.
        """
        self._snapshot = snapshot
        if self._state.is_idle:
            return
        if snapshot.is_empty:
            logger.debug("Document emptied during drag – cancelling gesture")
            self._reset()
        elif self._state.preview_page is not None and self._state.preview_page > snapshot.total_pages:
            self._state = InteractionState.dragging(snapshot.total_pages)

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------
    def drag_start(self, dx: float, track_width: float) -> bool:
        """Pointer went down on the track. Returns *True* if a drag began."""
        page = self._page_at(dx, track_width)
        if page is None:
            return False

        self._notified_page = None
        self._state = InteractionState.dragging(page)
        self._publish_preview(page)
        return True

    def drag_update(self, dx: float, track_width: float) -> bool:
        """Pointer moved while down. Returns *True* if the preview page changed."""
        if not self._state.is_dragging:
            logger.debug("Ignoring drag update without a preceding drag start")
            return False

        page = self._page_at(dx, track_width)
        if page is None or page == self._state.preview_page:
            return False

        self._state = InteractionState.dragging(page)
        self._publish_preview(page)
        return True

    def drag_end(self) -> Optional[int]:
        """Pointer released. Returns the committed page, or *None*."""
        if not self._state.is_dragging:
            return None

        preview = self._state.preview_page
        committed: Optional[int] = None
        if preview is not None and preview != self._snapshot.current_page:
            committed = preview
            self._state = InteractionState(InteractionPhase.COMMITTING, preview)
            self._invoke(self.on_page_selected, committed, "on_page_selected")

        self._reset()
        return committed

    def drag_cancel(self) -> None:
        """Gesture interrupted (pointer left, focus lost …) – no commit."""
        if not self._state.is_idle:
            logger.debug("Drag cancelled at preview page %s", self._state.preview_page)
        self._reset()

    def tap(self, dx: float, track_width: float) -> Optional[int]:
        """Instantaneous press + release at *dx*."""
        if not self.drag_start(dx, track_width):
            return None
        return self.drag_end()

    def dispose(self) -> None:
        """Tear down: reset state and drop the callbacks."""
        self._reset()
        self._disposed = True
        self.on_page_changed = None
        self.on_page_selected = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _page_at(self, dx: float, track_width: float) -> Optional[int]:
        if self._disposed:
            return None
        total = self._snapshot.total_pages
        if total <= 0:
            return None
        if not math.isfinite(track_width) or track_width <= 0 or not math.isfinite(dx):
            logger.debug("Degenerate track (width=%r, dx=%r) – ignoring pointer", track_width, dx)
            return None
        return page_from_offset(dx, track_width, total)

    def _publish_preview(self, page: int) -> None:
        if page == self._notified_page:
            return
        self._notified_page = page
        self._invoke(self.on_page_changed, page, "on_page_changed")

    def _reset(self) -> None:
        self._state = IDLE
        self._notified_page = None

    @staticmethod
    def _invoke(callback: Optional[PageCallback], page: int, name: str) -> None:
        if callback is None:
            return
        try:
            callback(page)
        except Exception:
            logger.exception("%s callback failed for page %d", name, page)
