from __future__ import annotations

"""settings_service.py
Provides application‑wide persisted settings using a JSON file in the user's
home directory (``~/.pagescrub/settings.json``).  Access via the *singleton*
:class:`SettingsService`.

Example
-------
>>> settings = SettingsService()
>>> settings.get("compact_breakpoint_px")
768
>>> settings.set("primary_colour", "#ff8800")
>>> settings.save()
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..core.layout_calculator import DEFAULT_COMPACT_BREAKPOINT_PX
from ..models.page_state import ScrubberStyle

__all__ = ["SettingsService"]

logger = logging.getLogger(__name__)


class SettingsService:
    """Load/save user settings to *~/.pagescrub/settings.json* (singleton)."""

    _instance: Optional[SettingsService] = None
    _path: Path = Path.home() / ".pagescrub" / "settings.json"

    _defaults: dict[str, Any] = {
        # Scrubber colours (#RRGGBB)
        "primary_colour": "#3399ff",
        "cached_colour": "#b3d4ff",
        "background_colour": "#d9dde3",
        # Viewports narrower than this use the compact scrubber layout
        "compact_breakpoint_px": DEFAULT_COMPACT_BREAKPOINT_PX,
        # Rendered pages kept in memory by the viewer (= "cached pages")
        "cache_page_limit": 10,
        "thumbnail_width_px": 900,
        "last_opened_dir": "",
    }

    def __new__(cls) -> SettingsService:  # ensure singleton
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    # ------------------------------------------------------------------
    def __init__(self) -> None:  # noqa: D401
        # Guard – only run once per process
        if getattr(self, "_initialized", False):
            return

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:  # pragma: no cover – path issues
            logger.warning("Cannot create settings directory %s: %s", self._path.parent, exc)

        # Merge defaults with loaded file
        self._data: dict[str, Any] = {**self._defaults, **self._load()}
        self._initialized = True

    # ------------------------------------------------------------------
    def _load(self) -> dict[str, Any]:
        """Read JSON file if it exists; return dict or empty on failure."""
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
            # Only keep keys we recognise – ignore unknowns
            return {k: data[k] for k in self._defaults.keys() if k in data}
        except (OSError, ValueError) as exc:  # pragma: no cover – corrupt file etc.
            logger.error("Failed to load settings file %s: %s", self._path, exc)
            return {}

    # ------------------------------------------------------------------
    def get(self, key: str, default: Any | None = None) -> Any | None:  # noqa: D401 – simple accessor
        """Return setting *key* or *default* if missing."""
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:  # noqa: D401 – simple mutator
        """Update setting value in memory. Call :pymeth:`save` to persist."""
        self._data[key] = value

    def save(self) -> None:  # noqa: D401 – straightforward persist
        """Write current settings to JSON file, creating directories as needed."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as fp:
                json.dump(self._data, fp, indent=2)
            logger.info("Settings saved to %s", self._path)
        except OSError as exc:  # pragma: no cover – disk full etc.
            logger.error("Failed to save settings to %s: %s", self._path, exc)

    # ------------------------------------------------------------------
    # Scrubber appearance
    # ------------------------------------------------------------------
    def scrubber_style(self, is_compact: bool) -> ScrubberStyle:
        """Build the :class:`ScrubberStyle` for the current colours."""
        return ScrubberStyle(
            primary_color=str(self.get("primary_colour", self._defaults["primary_colour"])),
            cached_color=str(self.get("cached_colour", self._defaults["cached_colour"])),
            background_color=str(self.get("background_colour", self._defaults["background_colour"])),
            is_compact_mode=bool(is_compact),
        )

    def set_colours(self, primary: str, cached: str, background: str) -> None:
        self.set("primary_colour", str(primary))
        self.set("cached_colour", str(cached))
        self.set("background_colour", str(background))
        self.save()

    def compact_breakpoint_px(self) -> int:  # noqa: D401
        """Viewport width below which the compact layout is used."""

        return int(self.get("compact_breakpoint_px", self._defaults["compact_breakpoint_px"]))

    # ------------------------------------------------------------------
    # Viewer page cache
    # ------------------------------------------------------------------
    def cache_page_limit(self) -> int:
        """Maximum number of rendered pages kept in memory."""
        return max(1, int(self.get("cache_page_limit", self._defaults["cache_page_limit"])))

    def thumbnail_width_px(self) -> int:
        return int(self.get("thumbnail_width_px", self._defaults["thumbnail_width_px"]))

    def last_opened_dir(self) -> str:
        return str(self.get("last_opened_dir", self._defaults["last_opened_dir"]))

    def set_last_opened_dir(self, path: str | Path) -> None:
        self.set("last_opened_dir", str(path))
        self.save()
