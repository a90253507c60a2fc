from __future__ import annotations

"""interaction_state.py – drag/preview state owned by the scrubber controller."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = ["InteractionPhase", "InteractionState", "IDLE"]


class InteractionPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"  # only while the commit callback runs


@dataclass(frozen=True)
class InteractionState:
    phase: InteractionPhase = InteractionPhase.IDLE
    preview_page: Optional[int] = None

    @property
    def is_idle(self) -> bool:
        return self.phase is InteractionPhase.IDLE

    @property
    def is_dragging(self) -> bool:
        return self.phase is InteractionPhase.DRAGGING

    @classmethod
    def dragging(cls, preview_page: int) -> InteractionState:
        return cls(InteractionPhase.DRAGGING, preview_page)


IDLE = InteractionState()
