"""Render output into a separate tmux pane.

A display is a tmux pane split off by this process. Writing to it replaces
its content; closing it (or the process exiting) removes the pane. Panes the
user closes by hand are noticed and cleaned up automatically.

PUBLIC API:
  - get_default_display: Get or create the default display pane
  - render_default: Render into the default display pane
  - create_pane: Create a new display pane
  - close_all: Close every display pane
  - DisplayManager: Owns the panes of one application
  - TmuxDisplay: One display pane
  - PaneConfig: Placement of a new pane
  - LaunchError, ChannelError, TeardownError: Error kinds
"""

from .display import TmuxDisplay
from .manager import (
    DisplayManager,
    close_all,
    create_pane,
    get_default_display,
    get_display_manager,
    render_default,
)
from .tmux.exceptions import ChannelError, LaunchError, TeardownError, TmuxError
from .types import PaneConfig

__version__ = "0.1.0"
__all__ = [
    "get_default_display",
    "render_default",
    "create_pane",
    "close_all",
    "get_display_manager",
    "DisplayManager",
    "TmuxDisplay",
    "PaneConfig",
    "TmuxError",
    "LaunchError",
    "ChannelError",
    "TeardownError",
]
