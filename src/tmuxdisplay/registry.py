"""Registry of live display panes.

PUBLIC API:
  - PaneRegistry: Lock-protected mapping of pane ID to TmuxDisplay
"""

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from .types import PaneID

if TYPE_CHECKING:
    from .display import TmuxDisplay


class PaneRegistry:
    """Lock-protected mapping of pane ID to TmuxDisplay.

    Entries are added when a pane is created and removed during its teardown.
    The lock only covers the dict itself; no pane I/O or tmux call ever runs
    while it is held.
    """

    def __init__(self):
        self._panes: dict[PaneID, "TmuxDisplay"] = {}
        self._lock = threading.Lock()

    def insert(self, display: "TmuxDisplay") -> None:
        """Register a display.

        Raises:
            KeyError: If the pane ID is already registered
        """
        with self._lock:
            if display.pane_id in self._panes:
                raise KeyError(f"Pane {display.pane_id} already registered")
            self._panes[display.pane_id] = display

    def remove(self, pane_id: PaneID) -> "TmuxDisplay | None":
        """Remove and return a display, or None if it was already gone."""
        with self._lock:
            return self._panes.pop(pane_id, None)

    def get(self, pane_id: PaneID) -> "TmuxDisplay | None":
        with self._lock:
            return self._panes.get(pane_id)

    def for_each(self, fn: Callable[["TmuxDisplay"], None]) -> None:
        """Call fn for every display while holding the lock.

        fn must not block or touch the registry.
        """
        with self._lock:
            for display in self._panes.values():
                fn(display)

    def snapshot(self) -> list["TmuxDisplay"]:
        """Get a copy of all registered displays."""
        displays: list["TmuxDisplay"] = []
        self.for_each(displays.append)
        return displays

    def pane_ids(self) -> list[PaneID]:
        with self._lock:
            return list(self._panes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._panes)

    def __contains__(self, pane_id: object) -> bool:
        with self._lock:
            return pane_id in self._panes


__all__ = ["PaneRegistry"]
