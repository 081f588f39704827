"""Type definitions for tmuxdisplay.

A display is a tmux pane this process created and writes into. Placement is
described once by PaneConfig and handed to the launcher.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from .display import TmuxDisplay


PaneID: TypeAlias = str  # e.g., "%42" - tmux native pane ID
PaneTarget: TypeAlias = "PaneID | TmuxDisplay"


@dataclass(frozen=True)
class PaneConfig:
    """Placement of a new display pane."""

    horizontal: bool = False  # split left/right instead of top/bottom
    size: int | None = None  # lines (vertical) or columns (horizontal)
    target: "PaneTarget | None" = None  # pane to split from
    focus: bool = False  # switch to the new pane

    def __post_init__(self):
        if self.size is not None and (isinstance(self.size, bool) or not isinstance(self.size, int) or self.size < 1):
            raise ValueError(f"Pane size must be a positive integer, got {self.size!r}")

    @property
    def target_id(self) -> PaneID | None:
        """Get the pane ID to split from, if any."""
        if self.target is None:
            return None
        if isinstance(self.target, str):
            return self.target
        return self.target.pane_id


@dataclass(frozen=True)
class SplitResult:
    """Parsed output of split-window -P."""

    pane_id: PaneID
    pane_pid: int
    pane_tty: str

    @classmethod
    def parse(cls, stdout: str) -> "SplitResult":
        """Parse "#{pane_id} #{pane_pid} #{pane_tty}" output.

        Raises:
            ValueError: If the output is not exactly that triple
        """
        parts = stdout.split()
        if len(parts) != 3:
            raise ValueError(f"Expected 'pane_id pane_pid pane_tty', got {stdout!r}")

        pane_id, pane_pid, pane_tty = parts
        if not pane_id.startswith("%"):
            raise ValueError(f"Invalid pane ID: {pane_id!r}")
        return cls(pane_id=pane_id, pane_pid=int(pane_pid), pane_tty=pane_tty)
