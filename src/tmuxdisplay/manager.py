"""Display manager - registry, default display and shutdown.

PUBLIC API:
  - DisplayManager: Owns all display panes of one application
  - get_display_manager: Get the process-wide manager
  - get_default_display: Get or create the default display
  - render_default: Render into the default display
  - create_pane: Create a new display pane
  - close_all: Close every display pane
"""

import atexit
import dataclasses
import logging
import threading
from typing import Any, Optional

from .config import ConfigManager, get_config_manager
from .display import TmuxDisplay
from .launcher import launch_pane
from .registry import PaneRegistry
from .types import PaneConfig, PaneID

logger = logging.getLogger(__name__)


class DisplayManager:
    """Owns all display panes of one application.

    Holds the registry of live panes and the default display slot. Panes are
    normally reaped by their watcher; get_default_display() additionally
    sweeps the registry for panes tmux no longer knows, as a fallback for
    deaths the watcher has not processed yet.

    Attributes:
        config: Settings used for new panes.
        registry: Live panes keyed by pane ID.
    """

    def __init__(self, config: Optional[ConfigManager] = None):
        self.config = config or get_config_manager()
        self.registry = PaneRegistry()
        self._default: Optional[TmuxDisplay] = None
        # Reentrant: teardown of the default display clears the slot
        self._default_lock = threading.RLock()

    @property
    def default_display(self) -> Optional[TmuxDisplay]:
        """Current default display without creating one."""
        return self._default

    def panes(self) -> list[TmuxDisplay]:
        return self.registry.snapshot()

    def create_pane(self, config: Optional[PaneConfig] = None, **overrides: Any) -> TmuxDisplay:
        """Create, register and watch a new display pane.

        Args:
            config: Placement; defaults to the configured placement
            **overrides: PaneConfig fields replacing those of config

        Raises:
            ChannelError: If the channel cannot be created
            LaunchError: If tmux fails
        """
        pane_config = config or self.config.pane_config()
        if overrides:
            pane_config = dataclasses.replace(pane_config, **overrides)

        display = launch_pane(
            pane_config,
            on_teardown=self._forget,
            channel_dir=self.config.channel_dir,
            join_timeout=self.config.join_timeout,
        )
        self.registry.insert(display)
        display.start_watching()
        return display

    def _forget(self, display: TmuxDisplay) -> None:
        with self._default_lock:
            if self._default is display:
                self._default = None
        self.registry.remove(display.pane_id)
        logger.debug(f"Pane {display.pane_id} removed")

    def sweep(self) -> list[PaneID]:
        """Tear down registered panes that tmux reports gone or dead.

        Returns:
            IDs of the panes that were torn down
        """
        dead = [display for display in self.registry.snapshot() if not display.is_alive()]
        for display in dead:
            logger.info(f"Pane {display.pane_id} is gone, cleaning up")
            display.release()
        return [display.pane_id for display in dead]

    def get_default_display(self) -> TmuxDisplay:
        """Get the default display, creating a pane if there is no live one."""
        with self._default_lock:
            self.sweep()
            display = self._default
            if display is None or display.closed:
                display = self.create_pane()
                self._default = display
            return display

    def render_default(self, x: Any) -> TmuxDisplay:
        """Render x into the default display and return it."""
        display = self.get_default_display()
        display.write_text(x)
        return display

    def close_all(self) -> int:
        """Close every pane and clear the default display.

        Safe to call repeatedly and from an exit hook.

        Returns:
            Number of panes closed by this call
        """
        with self._default_lock:
            self._default = None

        closed = 0
        for pane_id in self.registry.pane_ids():
            display = self.registry.remove(pane_id)
            if display is not None and display.close():
                closed += 1

        if closed:
            logger.info(f"Closed {closed} display pane(s)")
        return closed

    def __enter__(self) -> "DisplayManager":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close_all()


# Global instance
_display_manager: Optional[DisplayManager] = None
_display_manager_lock = threading.Lock()


def get_display_manager() -> DisplayManager:
    """Get or create the process-wide manager; closes its panes at exit."""
    global _display_manager
    with _display_manager_lock:
        if _display_manager is None:
            _display_manager = DisplayManager()
            atexit.register(_display_manager.close_all)
        return _display_manager


def get_default_display() -> TmuxDisplay:
    """Get or create the default display."""
    return get_display_manager().get_default_display()


def render_default(x: Any) -> TmuxDisplay:
    """Render x into the default display."""
    return get_display_manager().render_default(x)


def create_pane(config: Optional[PaneConfig] = None, **overrides: Any) -> TmuxDisplay:
    """Create a new display pane."""
    return get_display_manager().create_pane(config, **overrides)


def close_all() -> int:
    """Close every display pane of the process-wide manager."""
    if _display_manager is None:
        return 0
    return _display_manager.close_all()
