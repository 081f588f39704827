"""Pure tmux operations used by the display layer.

PUBLIC API:
  - run_tmux: Run tmux command and return result
  - split_window: Create a pane and parse its id, pid and tty
  - pane_status: Query whether a pane exists and whether it is dead
  - kill_pane: Kill a pane
  - TmuxError, LaunchError, ChannelError, TeardownError, PaneNotFoundError
"""

from .core import run_tmux, check_tmux_available

from .pane import (
    build_split_args,
    split_window,
    pane_status,
    kill_pane,
)

from .exceptions import (
    TmuxError,
    LaunchError,
    ChannelError,
    TeardownError,
    PaneNotFoundError,
)

__all__ = [
    "run_tmux",
    "check_tmux_available",
    "build_split_args",
    "split_window",
    "pane_status",
    "kill_pane",
    "TmuxError",
    "LaunchError",
    "ChannelError",
    "TeardownError",
    "PaneNotFoundError",
]
