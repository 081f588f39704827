"""Core tmux operations - shared utilities for all tmux modules.

PUBLIC API:
  - run_tmux: Execute tmux command and return result
  - check_tmux_available: Check if tmux is available and server running
"""

import subprocess
from typing import Tuple, List


def _tmux_binary() -> str:
    from ..config import get_config_manager

    return get_config_manager().tmux_binary


def run_tmux(args: List[str]) -> Tuple[int, str, str]:
    """Run tmux command, return (returncode, stdout, stderr).

    A missing tmux executable is reported like any other failure (code 127)
    so callers only ever check the return code.
    """
    cmd = [_tmux_binary()] + args
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        return 127, "", str(e)
    return result.returncode, result.stdout, result.stderr


def check_tmux_available() -> bool:
    """Check if tmux is available and server is running."""
    code, _, _ = run_tmux(["info"])
    return code == 0
