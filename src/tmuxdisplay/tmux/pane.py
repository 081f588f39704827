"""Pane operations for display panes.

PUBLIC API:
  - build_split_args: Build split-window arguments for a placement
  - split_window: Create a pane and parse its id, pid and tty
  - pane_status: Query whether a pane exists and whether it is dead
  - kill_pane: Kill a pane
"""

from typing import List, Tuple

from .core import run_tmux, check_tmux_available
from .exceptions import LaunchError, PaneNotFoundError
from ..types import PaneConfig, PaneID, SplitResult

SPLIT_FORMAT = "#{pane_id} #{pane_pid} #{pane_tty}"


def build_split_args(config: PaneConfig, command: List[str]) -> List[str]:
    """Build split-window arguments.

    Args:
        config: Placement of the new pane
        command: Argv run inside the new pane

    Returns:
        Arguments for run_tmux
    """
    args = ["split-window", "-P", "-F", SPLIT_FORMAT]
    args.append("-h" if config.horizontal else "-v")

    if config.size is not None:
        args.extend(["-l", str(config.size)])

    target = config.target_id
    if target:
        args.extend(["-t", target])

    if not config.focus:
        args.append("-d")

    args.extend(command)
    return args


def split_window(config: PaneConfig, command: List[str]) -> SplitResult:
    """Split a pane and return the new pane's id, pid and tty.

    Raises:
        LaunchError: If tmux fails or its output cannot be parsed
    """
    code, stdout, stderr = run_tmux(build_split_args(config, command))

    if code != 0:
        if not check_tmux_available():
            raise LaunchError("Failed to split window (tmux server not reachable)", stderr)
        raise LaunchError(f"Failed to split window (exit {code})", stderr)

    try:
        return SplitResult.parse(stdout)
    except ValueError as e:
        raise LaunchError(f"Failed to parse split-window output ({e})", stdout + stderr)


def pane_status(pane_id: PaneID) -> Tuple[bool, bool]:
    """Return (exists, dead) for a pane.

    A dead pane is one whose command exited while remain-on-exit kept it open.
    """
    code, stdout, _ = run_tmux(["display-message", "-p", "-t", pane_id, "#{pane_id} #{pane_dead}"])
    if code != 0:
        return False, False

    parts = stdout.split()
    if not parts or parts[0] != pane_id:
        return False, False
    return True, len(parts) > 1 and parts[1] == "1"


def kill_pane(pane_id: PaneID) -> None:
    """Kill a pane.

    Raises:
        PaneNotFoundError: If tmux refuses, usually because the pane is gone
    """
    code, _, stderr = run_tmux(["kill-pane", "-t", pane_id])
    if code != 0:
        raise PaneNotFoundError(f"Failed to kill pane {pane_id}: {stderr.strip()}")
